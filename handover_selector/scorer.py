"""
Handover Selector - Scoring Algorithm
"""

from typing import Optional
from .models import AccessPath, PathMetrics, PathScores, ProfileConfig, ScoreBreakdown
from .normalizer import (
    normalize, SINR_RANGE, RTT_RANGE, THROUGHPUT_RANGE, RSRP_RANGE, WIFI_RSSI_RANGE
)
from .diagnostics import Observer, emit


class PathScorer:
    """
    Computes composite path scores from a metric snapshot.

    Score formula:
    Score = w1 × sinr + w2 × latency + w3 × throughput + w4 × signal

    Each term is normalized to 0.0-1.0 (1.0 = best). The signal term is
    RSRP for cellular and RSSI for WiFi; WiFi has no SINR reading, so its
    first term normally scores 0.0.
    """

    def __init__(self, profile: ProfileConfig, observer: Optional[Observer] = None):
        self.profile = profile
        self.observer = observer

    def breakdown(
        self,
        metrics: Optional[PathMetrics],
        path: AccessPath
    ) -> ScoreBreakdown:
        """
        Normalize the four scored components for one path.
        """
        metrics = metrics or PathMetrics()

        if path == AccessPath.WIFI:
            signal = normalize(metrics.rssi_dbm, WIFI_RSSI_RANGE, higher_is_better=True)
        else:
            signal = normalize(metrics.rsrp_dbm, RSRP_RANGE, higher_is_better=True)

        return ScoreBreakdown(
            sinr=normalize(metrics.sinr_db, SINR_RANGE, higher_is_better=True),
            latency=normalize(metrics.rtt_ms, RTT_RANGE, higher_is_better=False),
            throughput=normalize(metrics.throughput_mbps, THROUGHPUT_RANGE, higher_is_better=True),
            signal=signal
        )

    def composite(self, parts: ScoreBreakdown) -> float:
        """Weighted sum of normalized components."""
        p = self.profile
        return (
            p.w1 * parts.sinr +
            p.w2 * parts.latency +
            p.w3 * parts.throughput +
            p.w4 * parts.signal
        )

    def score_path(
        self,
        metrics: Optional[PathMetrics],
        path: AccessPath
    ) -> float:
        """
        Score a single access path.
        """
        return self.composite(self.breakdown(metrics, path))

    def score_paths(
        self,
        wifi: Optional[PathMetrics],
        cell: Optional[PathMetrics]
    ) -> PathScores:
        """
        Score both paths. The resulting h_score is wifi minus cell.
        """
        wifi_parts = self.breakdown(wifi, AccessPath.WIFI)
        cell_parts = self.breakdown(cell, AccessPath.CELLULAR)

        scores = PathScores(
            wifi=self.composite(wifi_parts),
            cell=self.composite(cell_parts),
            wifi_breakdown=wifi_parts,
            cell_breakdown=cell_parts
        )

        emit(
            self.observer,
            "score",
            wifi=scores.wifi,
            cell=scores.cell,
            h=scores.h_score,
            wifi_parts=wifi_parts.model_dump(),
            cell_parts=cell_parts.model_dump()
        )

        return scores
