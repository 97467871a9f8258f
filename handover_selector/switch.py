"""
Handover Selector - Hysteresis Switch and Decision Engine
"""

from typing import Optional, Tuple
from .models import (
    AccessPath, HandoverEvent, PathMetrics, ProfileConfig, DecisionResult
)
from .scorer import PathScorer
from .diagnostics import Observer, emit


def wifi_usable(wifi: Optional[PathMetrics], profile: ProfileConfig) -> bool:
    """
    Hard precondition for moving onto WiFi.

    RSSI must be present and strong enough. Jitter and loss only fail the
    gate when they are measured and over the limit.
    """
    if wifi is None:
        return False

    rssi_ok = wifi.rssi_dbm is not None and wifi.rssi_dbm >= profile.min_wifi_rssi
    jitter_ok = wifi.jitter_ms is None or wifi.jitter_ms <= profile.max_wifi_jitter
    loss_ok = wifi.loss_pct is None or wifi.loss_pct <= profile.max_wifi_loss

    return rssi_ok and jitter_ok and loss_ok


class HysteresisSwitch:
    """
    Two-state path switch with asymmetric thresholds.

    CELLULAR -> WIFI needs the WiFi gate and H > theta + hysteresis_up.
    WIFI -> CELLULAR needs only H < -(theta + hysteresis_down).
    Without a previous path the result is always CELLULAR.
    """

    def __init__(self, profile: ProfileConfig, observer: Optional[Observer] = None):
        self.profile = profile
        self.observer = observer

    def decide(
        self,
        h_score: float,
        last_path: Optional[AccessPath],
        wifi_ok: bool
    ) -> Tuple[AccessPath, HandoverEvent]:
        if last_path == AccessPath.CELLULAR:
            threshold = self.profile.switch_up_threshold
            emit(self.observer, "switch", state=last_path.value, threshold=threshold,
                 h=h_score, wifi_ok=wifi_ok)
            if wifi_ok and h_score > threshold:
                return AccessPath.WIFI, HandoverEvent.CELLULAR_TO_WIFI
            return AccessPath.CELLULAR, HandoverEvent.NONE

        if last_path == AccessPath.WIFI:
            threshold = self.profile.switch_down_threshold
            emit(self.observer, "switch", state=last_path.value, threshold=-threshold,
                 h=h_score)
            if h_score < -threshold:
                return AccessPath.CELLULAR, HandoverEvent.WIFI_TO_CELLULAR
            return AccessPath.WIFI, HandoverEvent.NONE

        emit(self.observer, "switch", state="INITIAL", fallback=AccessPath.CELLULAR.value)
        return AccessPath.CELLULAR, HandoverEvent.NONE


class HandoverDecisionEngine:
    """
    Stateless handover engine: scores both paths and applies the switch.

    The active path is owned by the caller and passed back in on the next
    tick; nothing is remembered between calls.
    """

    def __init__(self, profile: ProfileConfig, observer: Optional[Observer] = None):
        self.profile = profile
        self.observer = observer
        self.scorer = PathScorer(profile, observer)
        self.switch = HysteresisSwitch(profile, observer)

    def update(
        self,
        wifi: Optional[PathMetrics],
        cell: Optional[PathMetrics],
        last_path: Optional[AccessPath]
    ) -> DecisionResult:
        """
        Evaluate one tick.
        """
        scores = self.scorer.score_paths(wifi, cell)

        # Only consulted when leaving cellular
        wifi_ok = False
        if last_path == AccessPath.CELLULAR:
            wifi_ok = wifi_usable(wifi, self.profile)
            emit(
                self.observer,
                "precheck",
                wifi_ok=wifi_ok,
                rssi=wifi.rssi_dbm if wifi else None,
                jitter=wifi.jitter_ms if wifi else None,
                loss=wifi.loss_pct if wifi else None
            )

        active_path, event = self.switch.decide(scores.h_score, last_path, wifi_ok)

        result = DecisionResult(
            active_path=active_path,
            event=event,
            h_score=scores.h_score,
            wifi_score=scores.wifi,
            cell_score=scores.cell
        )

        if event != HandoverEvent.NONE:
            emit(self.observer, "handover", event=event.value, path=active_path.value,
                 h=scores.h_score)
        emit(self.observer, "decision", active=active_path.value, event=event.value,
             h=scores.h_score)

        return result
