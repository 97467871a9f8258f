"""
Handover Selector - Traffic Steering Advisor

Advisory only: recommendations are reported, never acted on, and never
feed back into the handover decision.
"""

from typing import Dict, List, Optional
from .models import AdvisoryMetrics, SteeringAdvice, SteeringMode, TrafficType
from .diagnostics import Observer, emit


# Relative margin one path must win by before traffic is steered to it
URLLC_MARGIN = 1.1
EMBB_MARGIN = 1.2
IOT_MARGIN = 0.9

# Stand-ins used by the quick health gates and the IoT comparison
UNMEASURED_RTT_MS = 999.0
UNMEASURED_JITTER_MS = 999.0
UNMEASURED_SIGNAL_DBM = -999.0


def _clamp01(x: float) -> float:
    return min(max(x, 0.0), 1.0)


class TrafficAdvisor:
    """
    Per-traffic-class steering advisor.

    Each traffic class scores the two paths with its own heuristic:

    - URLLC: latency and jitter, 10% margin
    - eMBB: throughput and signal level, 20% margin
    - Video: health gates first, then jitter and throughput
    - Web: always split
    - IoT: raw RTT, 10% margin
    """

    def __init__(self, observer: Optional[Observer] = None):
        self.observer = observer

    def evaluate(self, traffic_type: TrafficType, m: AdvisoryMetrics) -> SteeringMode:
        """
        Recommend a steering mode for one traffic type.
        """
        return self.advise(traffic_type, m).mode

    def advise(self, traffic_type: TrafficType, m: AdvisoryMetrics) -> SteeringAdvice:
        """
        Recommend a steering mode, keeping the sub-scores that led to it.
        """
        emit(self.observer, "advisor_input", traffic=traffic_type.value, **m.model_dump())

        wifi_good = self.wifi_good(m)
        cell_good = self.cell_good(m)
        emit(self.observer, "advisor_gates", wifi_good=wifi_good, cell_good=cell_good)

        wifi_score, cell_score = None, None

        if traffic_type == TrafficType.URLLC:
            wifi_score = self._score_urllc(m.wifi_rtt, m.wifi_jitter)
            cell_score = self._score_urllc(m.cell_rtt, m.cell_jitter)
            if cell_score > wifi_score * URLLC_MARGIN:
                mode = SteeringMode.STEER_TO_CELLULAR
            elif wifi_score > cell_score * URLLC_MARGIN:
                mode = SteeringMode.STEER_TO_WIFI
            else:
                mode = SteeringMode.SPLIT_TRAFFIC

        elif traffic_type == TrafficType.EMBB:
            wifi_score = self._score_embb(m.wifi_thr, m.wifi_rssi)
            cell_score = self._score_embb(m.cell_thr, m.cell_rsrp)
            if wifi_score > cell_score * EMBB_MARGIN:
                mode = SteeringMode.STEER_TO_WIFI
            elif cell_score > wifi_score * EMBB_MARGIN:
                mode = SteeringMode.STEER_TO_CELLULAR
            else:
                mode = SteeringMode.SPLIT_TRAFFIC

        elif traffic_type == TrafficType.VIDEO:
            wifi_score = self._score_video(m.wifi_jitter, m.wifi_thr)
            cell_score = self._score_video(m.cell_jitter, m.cell_thr)
            if wifi_good:
                mode = SteeringMode.STEER_TO_WIFI
            elif cell_good:
                mode = SteeringMode.STEER_TO_CELLULAR
            elif wifi_score > cell_score:
                mode = SteeringMode.STEER_TO_WIFI
            else:
                mode = SteeringMode.STEER_TO_CELLULAR

        elif traffic_type == TrafficType.IOT:
            wifi_score = self._rtt_or_unmeasured(m.wifi_rtt)
            cell_score = self._rtt_or_unmeasured(m.cell_rtt)
            # Lower is better here: these are raw latencies, not scores
            if wifi_score < cell_score * IOT_MARGIN:
                mode = SteeringMode.STEER_TO_WIFI
            elif cell_score < wifi_score * IOT_MARGIN:
                mode = SteeringMode.STEER_TO_CELLULAR
            else:
                mode = SteeringMode.SPLIT_TRAFFIC

        else:
            # WEB
            mode = SteeringMode.SPLIT_TRAFFIC

        emit(
            self.observer,
            "advice",
            traffic=traffic_type.value,
            mode=mode.value,
            wifi_score=wifi_score,
            cell_score=cell_score
        )

        return SteeringAdvice(
            traffic_type=traffic_type,
            mode=mode,
            wifi_score=wifi_score,
            cell_score=cell_score
        )

    def advise_all(
        self,
        m: AdvisoryMetrics,
        traffic_types: Optional[List[TrafficType]] = None
    ) -> Dict[TrafficType, SteeringAdvice]:
        """
        Generate advice for every (or the given) traffic type.
        """
        traffic_types = traffic_types or list(TrafficType)
        return {t: self.advise(t, m) for t in traffic_types}

    # ============================================
    # Health gates
    # ============================================

    @staticmethod
    def wifi_good(m: AdvisoryMetrics) -> bool:
        """Coarse WiFi health check. Any missing reading fails it."""
        rssi = m.wifi_rssi if m.wifi_rssi is not None else UNMEASURED_SIGNAL_DBM
        jitter = m.wifi_jitter if m.wifi_jitter is not None else UNMEASURED_JITTER_MS
        rtt = m.wifi_rtt if m.wifi_rtt is not None else UNMEASURED_RTT_MS
        return rssi > -75 and jitter < 40 and rtt < 80

    @staticmethod
    def cell_good(m: AdvisoryMetrics) -> bool:
        """Coarse cellular health check. Any missing reading fails it."""
        rsrp = m.cell_rsrp if m.cell_rsrp is not None else UNMEASURED_SIGNAL_DBM
        sinr = m.cell_sinr if m.cell_sinr is not None else UNMEASURED_SIGNAL_DBM
        rtt = m.cell_rtt if m.cell_rtt is not None else UNMEASURED_RTT_MS
        return rsrp > -100 and sinr > 3 and rtt < 120

    # ============================================
    # Scoring helpers
    # ============================================

    @staticmethod
    def _score_urllc(rtt: Optional[float], jitter: Optional[float]) -> float:
        if rtt is None or jitter is None:
            return 0.0
        rtt_score = 1.0 - _clamp01(rtt / 150.0)
        jitter_score = 1.0 - _clamp01(jitter / 80.0)
        return 0.6 * rtt_score + 0.4 * jitter_score

    @staticmethod
    def _score_embb(thr: Optional[float], signal: Optional[float]) -> float:
        if thr is None:
            return 0.0
        thr_score = _clamp01(thr / 80.0)
        signal_score = _clamp01(((signal if signal is not None else -120.0) + 120.0) / 40.0)
        return 0.7 * thr_score + 0.3 * signal_score

    @staticmethod
    def _score_video(jitter: Optional[float], thr: Optional[float]) -> float:
        jitter_score = 0.0 if jitter is None else 1.0 - _clamp01(jitter / 120.0)
        thr_score = 0.0 if thr is None else _clamp01(thr / 40.0)
        return 0.65 * jitter_score + 0.35 * thr_score

    @staticmethod
    def _rtt_or_unmeasured(rtt: Optional[float]) -> float:
        return rtt if rtt is not None else UNMEASURED_RTT_MS

