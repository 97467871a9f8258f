"""
Handover Selector - Simulator
"""

import random
from typing import Dict, Optional, Tuple
from .models import PathMetrics, SimulationScenario


# Base conditions per scenario; a path marked down yields no snapshot.
SCENARIO_PARAMS: Dict[SimulationScenario, Dict[str, dict]] = {
    SimulationScenario.NORMAL: {
        "wifi": {"rtt": 20, "jitter": 5, "thr": 100, "rssi": -58, "loss": 0.2},
        "cell": {"rtt": 60, "jitter": 12, "thr": 40, "sinr": 12, "rsrp": -95, "loss": 0.5}
    },
    SimulationScenario.WIFI_DEGRADED: {
        "wifi": {"rtt": 180, "jitter": 70, "thr": 4, "rssi": -82, "loss": 8},
        "cell": {"rtt": 55, "jitter": 10, "thr": 45, "sinr": 14, "rsrp": -92, "loss": 0.5}
    },
    SimulationScenario.CELL_DEGRADED: {
        "wifi": {"rtt": 25, "jitter": 6, "thr": 90, "rssi": -60, "loss": 0.3},
        "cell": {"rtt": 220, "jitter": 60, "thr": 3, "sinr": -2, "rsrp": -117, "loss": 6}
    },
    SimulationScenario.WIFI_LOSS: {
        "wifi": {"down": True},
        "cell": {"rtt": 60, "jitter": 12, "thr": 40, "sinr": 12, "rsrp": -95, "loss": 0.5}
    },
    SimulationScenario.ROAMING: {
        "wifi": {"rtt": 20, "jitter": 5, "thr": 100, "rssi": -55, "loss": 0.2},
        "cell": {"rtt": 60, "jitter": 12, "thr": 40, "sinr": 12, "rsrp": -95, "loss": 0.5}
    },
}

SCENARIO_DESCRIPTIONS = {
    "normal": "Strong WiFi next to an average cellular link",
    "wifi-degraded": "WiFi is weak, lossy and jittery",
    "cell-degraded": "Cellular coverage is at the cell edge",
    "wifi-loss": "WiFi is unavailable; no WiFi metrics are reported",
    "roaming": "Device walks away from the access point and comes back",
}

# Ticks for one walk-out-and-back cycle in the roaming scenario
ROAMING_PERIOD = 20


class ScenarioSimulator:
    """
    Produces metric snapshots for a scenario, one pair per tick.
    """

    def __init__(
        self,
        scenario: SimulationScenario = SimulationScenario.NORMAL,
        seed: Optional[int] = None,
        variation: float = 0.1
    ):
        self.scenario = scenario
        self.variation = variation
        self.tick = 0
        self._rng = random.Random(seed)
        self._params = SCENARIO_PARAMS.get(scenario, SCENARIO_PARAMS[SimulationScenario.NORMAL])

    def __call__(self) -> Tuple[Optional[PathMetrics], Optional[PathMetrics]]:
        return self.next()

    def next(self) -> Tuple[Optional[PathMetrics], Optional[PathMetrics]]:
        """Snapshot for the current tick, then advance."""
        wifi = self._wifi_snapshot()
        cell = self._cell_snapshot()
        self.tick += 1
        return wifi, cell

    def _jitter(self, value: float) -> float:
        return value * (1 + self._rng.uniform(-self.variation, self.variation))

    def _roaming_offset(self) -> float:
        # Triangle wave: 0 dB at the AP, -30 dB at the far point
        phase = (self.tick % ROAMING_PERIOD) / ROAMING_PERIOD
        return -60.0 * (0.5 - abs(0.5 - phase))

    def _wifi_snapshot(self) -> Optional[PathMetrics]:
        params = self._params["wifi"]
        if params.get("down"):
            return None

        rssi = params["rssi"]
        rtt = params["rtt"]
        thr = params["thr"]
        if self.scenario == SimulationScenario.ROAMING:
            offset = self._roaming_offset()
            rssi += offset
            # Weaker signal, slower and laggier link
            rtt -= offset * 4
            thr = max(1.0, thr + offset * 3)

        return PathMetrics(
            rtt_ms=max(1.0, self._jitter(rtt)),
            jitter_ms=max(0.0, self._jitter(params["jitter"])),
            throughput_mbps=max(0.0, self._jitter(thr)),
            uplink_mbps=max(0.0, self._jitter(thr / 4)),
            rssi_dbm=rssi + self._rng.uniform(-2, 2),
            loss_pct=max(0.0, min(100.0, self._jitter(params["loss"])))
        )

    def _cell_snapshot(self) -> Optional[PathMetrics]:
        params = self._params["cell"]
        if params.get("down"):
            return None

        return PathMetrics(
            rtt_ms=max(1.0, self._jitter(params["rtt"])),
            jitter_ms=max(0.0, self._jitter(params["jitter"])),
            throughput_mbps=max(0.0, self._jitter(params["thr"])),
            uplink_mbps=max(0.0, self._jitter(params["thr"] / 4)),
            sinr_db=params["sinr"] + self._rng.uniform(-1, 1),
            rsrp_dbm=params["rsrp"] + self._rng.uniform(-2, 2),
            loss_pct=max(0.0, min(100.0, self._jitter(params["loss"])))
        )
