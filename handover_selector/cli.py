"""
Handover Selector CLI - Decide, Advise and Simulate
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import ValidationError

from . import config
from .models import AccessPath, AdvisoryMetrics, PathMetrics, SimulationScenario, TrafficType
from .profiles import ProfileLoadError, ProfileStore, load_store
from .switch import HandoverDecisionEngine
from .advisor import TrafficAdvisor
from .monitor import HandoverMonitor
from .simulator import ScenarioSimulator
from .diagnostics import logging_observer

app = typer.Typer(
    name="handover-selector",
    help="WiFi/cellular handover decisions and advisory traffic steering"
)

state = {"profiles_file": config.PROFILES_FILE}


@app.callback()
def main_callback(
    profiles_file: Optional[Path] = typer.Option(
        None, "--profiles", "-p", help="Profiles YAML/JSON file (default: built-in profiles)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log scoring diagnostics"),
):
    """Handover Selector."""
    logging.basicConfig(level=logging.DEBUG if verbose else config.LOG_LEVEL)
    state["profiles_file"] = str(profiles_file) if profiles_file else config.PROFILES_FILE


def get_store() -> ProfileStore:
    """Load the configured profile store, exiting on a bad file."""
    try:
        return load_store(state["profiles_file"], config.DEFAULT_PROFILE)
    except (OSError, ProfileLoadError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def load_snapshot(snapshot_file: Path) -> dict:
    """Read a `{wifi: {...}, cell: {...}}` snapshot file."""
    if not snapshot_file.exists():
        typer.echo(f"Error: File not found: {snapshot_file}", err=True)
        raise typer.Exit(1)

    try:
        with open(snapshot_file, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        typer.echo(f"Error: {snapshot_file}: {e}", err=True)
        raise typer.Exit(1)

    if not isinstance(data, dict):
        typer.echo(f"Error: {snapshot_file} must contain a mapping", err=True)
        raise typer.Exit(1)
    return data


def parse_paths(data: dict, snapshot_file: Path):
    """Build (wifi, cell) snapshots, exiting on bad values."""
    try:
        wifi = PathMetrics.model_validate(data["wifi"]) if data.get("wifi") is not None else None
        cell = PathMetrics.model_validate(data["cell"]) if data.get("cell") is not None else None
    except (ValidationError, ValueError) as e:
        typer.echo(f"Error: {snapshot_file}: {e}", err=True)
        raise typer.Exit(1)
    return wifi, cell


@app.command()
def profiles():
    """List available profiles."""
    store = get_store()

    typer.echo("Available profiles:\n")
    for name in store.names():
        marker = " (default)" if name == store.default else ""
        cfg = store.get(name)
        typer.echo(f"  {name}{marker}")
        typer.echo(f"    weights: {cfg.w1}/{cfg.w2}/{cfg.w3}/{cfg.w4}")
        typer.echo(
            f"    theta: {cfg.theta}  up: {cfg.hysteresis_up}  down: {cfg.hysteresis_down}"
        )
        typer.echo(
            f"    wifi gate: rssi>={cfg.min_wifi_rssi} jitter<={cfg.max_wifi_jitter} "
            f"loss<={cfg.max_wifi_loss}"
        )


@app.command()
def decide(
    snapshot_file: Path = typer.Argument(..., help="Snapshot YAML/JSON with wifi and cell metrics"),
    profile: Optional[str] = typer.Option(None, "--profile", help="Profile name"),
    last_path: Optional[AccessPath] = typer.Option(None, "--last-path", "-l", help="Currently active path"),
):
    """Evaluate one handover decision."""
    store = get_store()
    data = load_snapshot(snapshot_file)

    wifi, cell = parse_paths(data, snapshot_file)
    if last_path is None and data.get("last_path"):
        try:
            last_path = AccessPath(data["last_path"])
        except ValueError as e:
            typer.echo(f"Error: {snapshot_file}: {e}", err=True)
            raise typer.Exit(1)

    profile_name = store.resolve_name(profile)
    engine = HandoverDecisionEngine(store.resolve(profile_name), logging_observer)
    result = engine.update(wifi, cell, last_path)

    typer.echo(f"profile:     {profile_name}")
    typer.echo(f"wifi score:  {result.wifi_score:.4f}")
    typer.echo(f"cell score:  {result.cell_score:.4f}")
    typer.echo(f"H:           {result.h_score:+.4f}")
    typer.echo(f"active path: {result.active_path.value}")
    typer.echo(f"event:       {result.event.value}")


@app.command()
def advise(
    snapshot_file: Path = typer.Argument(..., help="Snapshot YAML/JSON with wifi and cell metrics"),
    traffic_type: Optional[TrafficType] = typer.Option(None, "--traffic", "-t", help="Traffic type (all if not specified)"),
):
    """Show advisory steering per traffic type."""
    data = load_snapshot(snapshot_file)
    metrics = AdvisoryMetrics.from_paths(*parse_paths(data, snapshot_file))

    advisor = TrafficAdvisor(logging_observer)
    types = [traffic_type] if traffic_type else None
    for t, advice in advisor.advise_all(metrics, types).items():
        typer.echo(f"  {t.value:<6} → {advice.mode.value}")


@app.command()
def simulate(
    scenario: SimulationScenario = typer.Option(SimulationScenario.NORMAL, "--scenario", "-s", help="Scenario"),
    ticks: int = typer.Option(10, "--ticks", "-n", min=1, help="Number of ticks"),
    profile: Optional[str] = typer.Option(None, "--profile", help="Profile name"),
    traffic_type: TrafficType = typer.Option(TrafficType.WEB, "--traffic", "-t", help="Traffic type for advice"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    as_json: bool = typer.Option(False, "--json", help="Print one JSON record per tick"),
):
    """Run the monitor against a simulated scenario."""
    store = get_store()
    monitor = HandoverMonitor(
        store,
        ScenarioSimulator(scenario, seed=seed),
        profile=profile,
        traffic_type=traffic_type,
        interval_seconds=0,
        observer=logging_observer
    )

    for i in range(ticks):
        record = monitor.tick()
        if as_json:
            typer.echo(json.dumps(record.to_payload()))
            continue
        d = record.decision
        if d is None:
            typer.echo(f"[{i:>3}] UNKNOWN  (no metrics this tick)")
            continue
        typer.echo(
            f"[{i:>3}] {d.active_path.value:<8} {d.event.value:<16} "
            f"H={d.h_score:+.3f} wifi={d.wifi_score:.3f} cell={d.cell_score:.3f} "
            f"{traffic_type.value}→{record.advice.mode.value}"
        )


@app.command()
def init(
    output_file: Path = typer.Argument(
        Path("profiles.yaml"),
        help="Output file for template profiles"
    ),
):
    """Create a template profiles file."""
    template = """# Handover profiles
# Weights: w1 SINR, w2 latency, w3 throughput, w4 signal level
web:
  handover_params:
    w1: 0.2
    w2: 0.2
    w3: 0.4
    w4: 0.2
    theta: 0.15
    hysteresisUp: 0.03
    hysteresisDown: 0.02
    minWifiRssi: -75
    maxWifiJitter: 60
    maxWifiLoss: 6

gaming:
  handover_params:
    w1: 0.25
    w2: 0.45
    w3: 0.1
    w4: 0.2
    theta: 0.1
    hysteresisUp: 0.05
    hysteresisDown: 0.03
    minWifiRssi: -70
    maxWifiJitter: 25
    maxWifiLoss: 2
"""

    output_file.write_text(template)
    typer.echo(f"Created template profiles: {output_file}")
    typer.echo(f"Use it with: handover-selector --profiles {output_file} profiles")


@app.command()
def serve(
    host: str = typer.Option(config.API_HOST, "--host", help="Bind address"),
    port: int = typer.Option(config.API_PORT, "--port", help="Bind port"),
):
    """Run the HTTP API."""
    from .main import run_server
    run_server(host, port)


def main():
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
