"""
Handover Selector CLI Tests
"""

import json
import pytest
from typer.testing import CliRunner
from handover_selector.cli import app

runner = CliRunner()


@pytest.fixture
def snapshot_file(tmp_path):
    path = tmp_path / "snapshot.yaml"
    path.write_text(
        "wifi:\n"
        "  rtt_ms: 20\n"
        "  jitter_ms: 5\n"
        "  throughput_mbps: 100\n"
        "  rssi_dbm: -60\n"
        "cell:\n"
        "  rtt_ms: 80\n"
        "  throughput_mbps: 20\n"
        "  sinr_db: 5\n"
        "  rsrp_dbm: -110\n"
    )
    return path


class TestCli:
    """Tests for the handover-selector command."""

    def test_profiles(self):
        result = runner.invoke(app, ["profiles"])
        assert result.exit_code == 0
        assert "web (default)" in result.output
        assert "urllc" in result.output

    def test_decide_switches(self, snapshot_file):
        result = runner.invoke(app, ["decide", str(snapshot_file), "--last-path", "CELLULAR"])
        assert result.exit_code == 0
        assert "active path: WIFI" in result.output
        assert "event:       CELLULAR_TO_WIFI" in result.output

    def test_decide_initial(self, snapshot_file):
        result = runner.invoke(app, ["decide", str(snapshot_file)])
        assert result.exit_code == 0
        assert "active path: CELLULAR" in result.output

    def test_decide_missing_file(self, tmp_path):
        result = runner.invoke(app, ["decide", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1

    def test_advise_single(self, snapshot_file):
        result = runner.invoke(app, ["advise", str(snapshot_file), "--traffic", "embb"])
        assert result.exit_code == 0
        assert "STEER_TO_WIFI" in result.output
        assert "urllc" not in result.output

    def test_advise_all(self, snapshot_file):
        result = runner.invoke(app, ["advise", str(snapshot_file)])
        assert result.exit_code == 0
        for name in ("urllc", "embb", "video", "web", "iot"):
            assert name in result.output

    def test_simulate_json(self):
        result = runner.invoke(
            app, ["simulate", "--scenario", "cell-degraded", "--ticks", "3", "--seed", "1", "--json"]
        )
        assert result.exit_code == 0

        records = [json.loads(line) for line in result.output.splitlines() if line.startswith("{")]
        assert len(records) == 3
        assert [r["ho_event"] for r in records] == ["NONE", "CELLULAR_TO_WIFI", "NONE"]

    def test_init_then_use(self, tmp_path):
        profiles_file = tmp_path / "profiles.yaml"
        result = runner.invoke(app, ["init", str(profiles_file)])
        assert result.exit_code == 0
        assert profiles_file.exists()

        result = runner.invoke(app, ["--profiles", str(profiles_file), "profiles"])
        assert result.exit_code == 0
        assert "gaming" in result.output
        assert "video" not in result.output

    def test_bad_profiles_file(self, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("web:\n  handover_params:\n    w1: heavy\n")
        result = runner.invoke(app, ["--profiles", str(bad), "profiles"])
        assert result.exit_code == 1


class TestCliErrors:
    """User errors end with a message and exit code 1."""

    def test_unparseable_profiles_file(self, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("web: [unclosed\n")
        result = runner.invoke(app, ["--profiles", str(bad), "profiles"])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Error" in result.output

    def test_decide_unknown_last_path(self, tmp_path):
        path = tmp_path / "snapshot.yaml"
        path.write_text("last_path: LTE\ncell:\n  rtt_ms: 50\n")
        result = runner.invoke(app, ["decide", str(path)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)

    def test_decide_non_numeric_metric(self, tmp_path):
        path = tmp_path / "snapshot.yaml"
        path.write_text("wifi:\n  rtt_ms: fast\n")
        result = runner.invoke(app, ["decide", str(path)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)

    def test_advise_non_numeric_metric(self, tmp_path):
        path = tmp_path / "snapshot.yaml"
        path.write_text("cell:\n  rsrp_dbm: strong\n")
        result = runner.invoke(app, ["advise", str(path)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)

    def test_simulate_reports_missing_decision(self, monkeypatch):
        def failing_source(*args, **kwargs):
            def collect():
                raise TimeoutError("collector timed out")
            return collect

        monkeypatch.setattr("handover_selector.cli.ScenarioSimulator", failing_source)
        result = runner.invoke(app, ["simulate", "--ticks", "2"])
        assert result.exit_code == 0
        assert result.output.count("UNKNOWN") == 2
