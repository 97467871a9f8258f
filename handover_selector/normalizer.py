"""
Handover Selector - Metric Normalization
"""

import math
from typing import NamedTuple, Optional


class MetricRange(NamedTuple):
    """Closed interval a raw metric is clamped into before scaling."""
    low: float
    high: float


SINR_RANGE = MetricRange(-5.0, 30.0)
RTT_RANGE = MetricRange(10.0, 300.0)
THROUGHPUT_RANGE = MetricRange(0.0, 200.0)
RSRP_RANGE = MetricRange(-120.0, -80.0)

# WiFi RSSI is scored on the cellular RSRP scale.
WIFI_RSSI_RANGE = RSRP_RANGE


def normalize(
    value: Optional[float],
    value_range: MetricRange,
    higher_is_better: bool = True
) -> float:
    """
    Map a raw metric onto 0.0-1.0 (1.0 = best).

    A missing value scores 0.0, the same as the worst measurable value,
    so a path with incomplete telemetry is never favoured. NaN counts as
    missing.
    """
    if value is None or math.isnan(value):
        return 0.0

    low, high = value_range
    clamped = min(max(value, low), high)
    scaled = (clamped - low) / (high - low)

    return scaled if higher_is_better else 1.0 - scaled
