"""
Handover Selector - Data Models
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional
from enum import Enum
from datetime import datetime


class AccessPath(str, Enum):
    """Access path a device can be attached to."""
    WIFI = "WIFI"
    CELLULAR = "CELLULAR"


class HandoverEvent(str, Enum):
    """Path change produced by one decision tick."""
    NONE = "NONE"
    CELLULAR_TO_WIFI = "CELLULAR_TO_WIFI"
    WIFI_TO_CELLULAR = "WIFI_TO_CELLULAR"


class TrafficType(str, Enum):
    """Traffic class used for advisory steering."""
    URLLC = "urllc"
    EMBB = "embb"
    VIDEO = "video"
    WEB = "web"
    IOT = "iot"


class SteeringMode(str, Enum):
    """Advisory steering outcome."""
    STEER_TO_CELLULAR = "STEER_TO_CELLULAR"
    STEER_TO_WIFI = "STEER_TO_WIFI"
    SPLIT_TRAFFIC = "SPLIT_TRAFFIC"
    # Declared for completeness; no advisory branch produces it.
    SWITCH_TO_BETTER = "SWITCH_TO_BETTER"


# ============================================
# Metric Models
# ============================================

class PathMetrics(BaseModel):
    """Metric snapshot for one access path. None means not measured."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    rtt_ms: Optional[float] = None
    jitter_ms: Optional[float] = None
    throughput_mbps: Optional[float] = None
    uplink_mbps: Optional[float] = None
    sinr_db: Optional[float] = None
    rsrp_dbm: Optional[float] = None
    rssi_dbm: Optional[float] = None
    loss_pct: Optional[float] = None


class AdvisoryMetrics(BaseModel):
    """Flat two-path snapshot consumed by the traffic advisor."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    wifi_rtt: Optional[float] = None
    wifi_jitter: Optional[float] = None
    wifi_rssi: Optional[float] = None
    wifi_thr: Optional[float] = None
    cell_rtt: Optional[float] = None
    cell_jitter: Optional[float] = None
    cell_rsrp: Optional[float] = None
    cell_sinr: Optional[float] = None
    cell_thr: Optional[float] = None

    @classmethod
    def from_paths(
        cls,
        wifi: Optional[PathMetrics],
        cell: Optional[PathMetrics]
    ) -> "AdvisoryMetrics":
        """Build the advisor input from two per-path snapshots."""
        wifi = wifi or PathMetrics()
        cell = cell or PathMetrics()
        return cls(
            wifi_rtt=wifi.rtt_ms,
            wifi_jitter=wifi.jitter_ms,
            wifi_rssi=wifi.rssi_dbm,
            wifi_thr=wifi.throughput_mbps,
            cell_rtt=cell.rtt_ms,
            cell_jitter=cell.jitter_ms,
            cell_rsrp=cell.rsrp_dbm,
            cell_sinr=cell.sinr_db,
            cell_thr=cell.throughput_mbps
        )


# ============================================
# Profile Models
# ============================================

class ProfileConfig(BaseModel):
    """
    Handover tuning for one named profile.

    Weights are applied as given; nothing here checks that they sum to 1.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    w1: float = Field(0.2, ge=0.0)
    w2: float = Field(0.2, ge=0.0)
    w3: float = Field(0.4, ge=0.0)
    w4: float = Field(0.2, ge=0.0)
    theta: float = 0.15
    hysteresis_up: float = Field(0.03, alias="hysteresisUp")
    hysteresis_down: float = Field(0.02, alias="hysteresisDown")
    min_wifi_rssi: float = Field(-75.0, alias="minWifiRssi")
    max_wifi_jitter: float = Field(60.0, alias="maxWifiJitter")
    max_wifi_loss: float = Field(6.0, alias="maxWifiLoss")

    @property
    def switch_up_threshold(self) -> float:
        return self.theta + self.hysteresis_up

    @property
    def switch_down_threshold(self) -> float:
        return self.theta + self.hysteresis_down


# ============================================
# Decision Models
# ============================================

class ScoreBreakdown(BaseModel):
    """Normalized components behind one composite score."""
    model_config = ConfigDict(frozen=True)

    sinr: float = 0.0
    latency: float = 0.0
    throughput: float = 0.0
    signal: float = 0.0


class PathScores(BaseModel):
    """Composite scores for both paths and their delta."""
    model_config = ConfigDict(frozen=True)

    wifi: float
    cell: float
    wifi_breakdown: ScoreBreakdown = ScoreBreakdown()
    cell_breakdown: ScoreBreakdown = ScoreBreakdown()

    @property
    def h_score(self) -> float:
        return self.wifi - self.cell


class DecisionResult(BaseModel):
    """Outcome of one handover decision tick."""
    model_config = ConfigDict(frozen=True)

    active_path: AccessPath
    event: HandoverEvent
    h_score: float
    wifi_score: float
    cell_score: float


class SteeringAdvice(BaseModel):
    """Advisory steering recommendation for one traffic type."""
    model_config = ConfigDict(frozen=True)

    traffic_type: TrafficType
    mode: SteeringMode
    wifi_score: Optional[float] = None
    cell_score: Optional[float] = None
    timestamp: datetime = Field(default_factory=datetime.now)


class DecisionRecord(BaseModel):
    """Per-tick record handed to consumers of handover decisions."""
    timestamp: datetime = Field(default_factory=datetime.now)
    profile: str
    wifi: PathMetrics = PathMetrics()
    cell: PathMetrics = PathMetrics()
    decision: Optional[DecisionResult] = None
    advice: Optional[SteeringAdvice] = None

    def to_payload(self) -> Dict[str, object]:
        """
        Flatten into the wire payload.

        Absent metrics are omitted rather than sent as null. Without a
        decision the path is reported as UNKNOWN and no scores are sent.
        """
        payload: Dict[str, object] = {
            "timestamp": int(self.timestamp.timestamp() * 1000),
            "profile": self.profile,
        }

        echo = {
            "wifi_latency": self.wifi.rtt_ms,
            "wifi_jitter": self.wifi.jitter_ms,
            "wifi_rssi": self.wifi.rssi_dbm,
            "wifi_loss": self.wifi.loss_pct,
            "cell_latency": self.cell.rtt_ms,
            "cell_jitter": self.cell.jitter_ms,
            "cell_rsrp": self.cell.rsrp_dbm,
            "cell_sinr": self.cell.sinr_db,
            "cell_loss": self.cell.loss_pct,
            "wifi_down_mbps": self.wifi.throughput_mbps,
            "wifi_up_mbps": self.wifi.uplink_mbps,
            "cell_down_mbps": self.cell.throughput_mbps,
            "cell_up_mbps": self.cell.uplink_mbps,
        }
        payload.update({k: v for k, v in echo.items() if v is not None})

        if self.decision is not None:
            payload["active_path"] = self.decision.active_path.value
            payload["ho_event"] = self.decision.event.value
            payload["h_score"] = self.decision.h_score
            payload["wifi_score"] = self.decision.wifi_score
            payload["cell_score"] = self.decision.cell_score
        else:
            payload["active_path"] = "UNKNOWN"
            payload["ho_event"] = HandoverEvent.NONE.value

        if self.advice is not None:
            payload["traffic_type"] = self.advice.traffic_type.value
            payload["steering"] = self.advice.mode.value

        return payload


# ============================================
# Simulation Models
# ============================================

class SimulationScenario(str, Enum):
    """Predefined simulation scenarios."""
    NORMAL = "normal"
    WIFI_DEGRADED = "wifi-degraded"
    CELL_DEGRADED = "cell-degraded"
    WIFI_LOSS = "wifi-loss"
    ROAMING = "roaming"


# ============================================
# API Models
# ============================================

class DecideRequest(BaseModel):
    """Request for a single handover decision."""
    profile: Optional[str] = None
    wifi: Optional[PathMetrics] = None
    cell: Optional[PathMetrics] = None
    last_path: Optional[AccessPath] = None


class AdviseRequest(BaseModel):
    """Request for advisory steering."""
    traffic_type: Optional[TrafficType] = None
    metrics: AdvisoryMetrics = AdvisoryMetrics()


class SimulateRequest(BaseModel):
    """Request for an offline simulated monitor run."""
    scenario: SimulationScenario = SimulationScenario.NORMAL
    ticks: int = Field(10, ge=1, le=1000)
    profile: Optional[str] = None
    traffic_type: TrafficType = TrafficType.WEB
    seed: Optional[int] = None
