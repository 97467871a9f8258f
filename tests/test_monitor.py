"""
Handover Selector Unit Tests - Monitor, Records and Simulator
"""

import pytest
from handover_selector.models import (
    AccessPath, DecisionRecord, HandoverEvent, PathMetrics,
    SimulationScenario, SteeringMode, TrafficType
)
from handover_selector.profiles import ProfileStore
from handover_selector.monitor import HandoverMonitor
from handover_selector.simulator import ScenarioSimulator


def sequence_source(snapshots):
    """Metric source replaying a fixed list of (wifi, cell) pairs."""
    it = iter(snapshots)
    return lambda: next(it)


@pytest.fixture
def store():
    return ProfileStore()


class TestHandoverMonitor:
    """Tests for the evaluate-and-persist loop."""

    def test_initial_path_then_handover(self, store, strong_wifi, weak_cell):
        """First tick settles on cellular, the next one moves to WiFi."""
        monitor = HandoverMonitor(store, sequence_source([(strong_wifi, weak_cell)] * 3))

        first = monitor.tick()
        assert first.decision.active_path == AccessPath.CELLULAR
        assert monitor.current_path == AccessPath.CELLULAR

        second = monitor.tick()
        assert second.decision.event == HandoverEvent.CELLULAR_TO_WIFI
        assert monitor.current_path == AccessPath.WIFI

        third = monitor.tick()
        assert third.decision.event == HandoverEvent.NONE
        assert monitor.current_path == AccessPath.WIFI

    def test_wifi_drop_returns_to_cellular(self, store, strong_wifi, weak_cell, good_cell):
        snapshots = [(strong_wifi, weak_cell), (strong_wifi, weak_cell), (None, good_cell)]
        monitor = HandoverMonitor(store, sequence_source(snapshots))
        records = [monitor.tick() for _ in snapshots]

        assert [r.decision.event for r in records] == [
            HandoverEvent.NONE, HandoverEvent.CELLULAR_TO_WIFI, HandoverEvent.WIFI_TO_CELLULAR
        ]
        assert monitor.current_path == AccessPath.CELLULAR

    def test_source_failure_yields_empty_record(self, store):
        """A failing metric source is reported, not raised."""
        def broken():
            raise TimeoutError("collector timed out")

        monitor = HandoverMonitor(store, broken)
        record = monitor.tick()

        assert record.decision is None
        assert record.to_payload()["active_path"] == "UNKNOWN"
        assert monitor.current_path is None

    def test_unknown_profile_falls_back(self, store):
        monitor = HandoverMonitor(store, lambda: (None, None), profile="streaming")
        assert monitor.profile_name == "web"
        assert monitor.set_profile("gaming") == "gaming"
        assert monitor.tick().profile == "gaming"

    def test_advice_attached(self, store, strong_wifi, weak_cell):
        """Advice rides along but never moves the active path."""
        monitor = HandoverMonitor(
            store, sequence_source([(strong_wifi, weak_cell)]), traffic_type=TrafficType.EMBB
        )
        record = monitor.tick()

        assert record.advice.traffic_type == TrafficType.EMBB
        assert record.advice.mode == SteeringMode.STEER_TO_WIFI
        assert monitor.current_path == AccessPath.CELLULAR

    def test_listeners_notified(self, store):
        seen = []

        def failing(record):
            raise RuntimeError("listener down")

        monitor = HandoverMonitor(store, lambda: (None, None))
        monitor.on_update(failing)
        monitor.on_update(seen.append)
        monitor.tick()

        assert len(seen) == 1
        assert isinstance(seen[0], DecisionRecord)

    @pytest.mark.asyncio
    async def test_run_fixed_ticks(self, store):
        seen = []
        monitor = HandoverMonitor(store, lambda: (None, None), interval_seconds=0)
        monitor.on_update(seen.append)

        await monitor.run(ticks=3)

        assert len(seen) == 3
        assert monitor.running is False

    @pytest.mark.asyncio
    async def test_stop_ends_loop(self, store):
        seen = []
        monitor = HandoverMonitor(store, lambda: (None, None), interval_seconds=0)

        def collect(record):
            seen.append(record)
            if len(seen) == 2:
                monitor.stop()

        monitor.on_update(collect)
        await monitor.run()

        assert len(seen) == 2


class TestDecisionRecord:
    """Tests for the consumer payload."""

    def test_absent_metrics_omitted(self, strong_wifi):
        record = DecisionRecord(profile="web", wifi=strong_wifi)
        payload = record.to_payload()

        assert payload["wifi_latency"] == 20
        assert payload["wifi_rssi"] == -60
        assert payload["wifi_down_mbps"] == 100
        assert "wifi_loss" not in payload
        assert not any(key.startswith("cell_") for key in payload)
        assert all(value is not None for value in payload.values())

    def test_without_decision(self):
        payload = DecisionRecord(profile="video").to_payload()
        assert payload["profile"] == "video"
        assert payload["active_path"] == "UNKNOWN"
        assert payload["ho_event"] == "NONE"
        assert "h_score" not in payload
        assert isinstance(payload["timestamp"], int)


class TestScenarioSimulator:
    """Tests for simulated metric sources."""

    def test_seeded_runs_repeat(self):
        a = ScenarioSimulator(SimulationScenario.ROAMING, seed=7)
        b = ScenarioSimulator(SimulationScenario.ROAMING, seed=7)
        assert [a() for _ in range(5)] == [b() for _ in range(5)]

    def test_wifi_loss_has_no_wifi(self):
        wifi, cell = ScenarioSimulator(SimulationScenario.WIFI_LOSS, seed=1).next()
        assert wifi is None
        assert cell.rsrp_dbm is not None

    def test_roaming_weakens_wifi(self):
        sim = ScenarioSimulator(SimulationScenario.ROAMING, seed=3, variation=0.0)
        samples = [sim()[0] for _ in range(11)]
        assert samples[10].rssi_dbm < samples[0].rssi_dbm - 20

    def test_cell_edge_moves_to_wifi(self, store):
        monitor = HandoverMonitor(store, ScenarioSimulator(SimulationScenario.CELL_DEGRADED, seed=1))
        events = [monitor.tick().decision.event for _ in range(4)]

        assert events == [
            HandoverEvent.NONE, HandoverEvent.CELLULAR_TO_WIFI, HandoverEvent.NONE, HandoverEvent.NONE
        ]

    def test_degraded_wifi_never_taken(self, store):
        monitor = HandoverMonitor(store, ScenarioSimulator(SimulationScenario.WIFI_DEGRADED, seed=1))
        paths = {monitor.tick().decision.active_path for _ in range(10)}
        assert paths == {AccessPath.CELLULAR}

    def test_snapshots_are_path_metrics(self):
        wifi, cell = ScenarioSimulator(seed=2).next()
        assert isinstance(wifi, PathMetrics) and isinstance(cell, PathMetrics)
        assert wifi.sinr_db is None and cell.rssi_dbm is None
