"""
Shared fixtures for Handover Selector tests
"""

import pytest
from handover_selector.models import PathMetrics, ProfileConfig


@pytest.fixture
def web_profile():
    """The reference web profile."""
    return ProfileConfig(
        w1=0.2, w2=0.2, w3=0.4, w4=0.2,
        theta=0.15,
        hysteresis_up=0.03,
        hysteresis_down=0.02,
        min_wifi_rssi=-75,
        max_wifi_jitter=60,
        max_wifi_loss=6
    )


@pytest.fixture
def strong_wifi():
    return PathMetrics(rtt_ms=20, jitter_ms=5, throughput_mbps=100, rssi_dbm=-60)


@pytest.fixture
def weak_cell():
    return PathMetrics(rtt_ms=80, throughput_mbps=20, sinr_db=5, rsrp_dbm=-110)


@pytest.fixture
def good_cell():
    return PathMetrics(rtt_ms=50, throughput_mbps=50, sinr_db=15, rsrp_dbm=-90)
