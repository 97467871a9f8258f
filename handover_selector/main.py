"""
Handover Selector - FastAPI Application
"""

import logging

from fastapi import FastAPI, HTTPException

from . import config
from .models import (
    AdviseRequest, DecideRequest, DecisionRecord, PathMetrics,
    SimulateRequest, SimulationScenario, TrafficType
)
from .profiles import load_store
from .switch import HandoverDecisionEngine
from .advisor import TrafficAdvisor
from .monitor import HandoverMonitor
from .simulator import ScenarioSimulator, SCENARIO_DESCRIPTIONS
from .diagnostics import logging_observer

# Logging
logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Handover Selector",
    description="WiFi/cellular handover decisions and advisory traffic steering",
    version="1.0.0"
)

# Initialize components
store = load_store(config.PROFILES_FILE, config.DEFAULT_PROFILE)
advisor = TrafficAdvisor(logging_observer)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "handover-selector",
        "default_profile": store.default,
        "profiles": len(store.names())
    }


@app.get("/api/v1/profiles")
async def list_profiles():
    """List configured handover profiles."""
    return {"default": store.default, "profiles": store.as_dict()}


@app.get("/api/v1/profiles/{name}")
async def get_profile(name: str):
    """Get a single profile (no fallback)."""
    profile = store.get(name)
    if profile is None:
        raise HTTPException(status_code=404, detail=f"Unknown profile: {name}")
    return profile.model_dump()


@app.post("/api/v1/decide")
async def decide(request: DecideRequest):
    """Evaluate one handover tick for the given snapshot and previous path."""
    profile_name = store.resolve_name(request.profile)
    engine = HandoverDecisionEngine(store.resolve(profile_name), logging_observer)
    decision = engine.update(request.wifi, request.cell, request.last_path)

    record = DecisionRecord(
        profile=profile_name,
        wifi=request.wifi or PathMetrics(),
        cell=request.cell or PathMetrics(),
        decision=decision
    )
    return record.to_payload()


@app.post("/api/v1/advise")
async def advise(request: AdviseRequest):
    """Advisory steering for one or all traffic types."""
    if request.traffic_type is not None:
        advice = advisor.advise(request.traffic_type, request.metrics)
        return {request.traffic_type.value: advice.model_dump(mode="json")}

    return {
        traffic_type.value: advice.model_dump(mode="json")
        for traffic_type, advice in advisor.advise_all(request.metrics).items()
    }


@app.get("/api/v1/traffic-types")
async def list_traffic_types():
    """List traffic types understood by the advisor."""
    return {"traffic_types": [t.value for t in TrafficType]}


@app.get("/api/v1/scenarios")
async def list_scenarios():
    """List available simulation scenarios."""
    return {
        "scenarios": [
            {"name": s.value, "description": SCENARIO_DESCRIPTIONS.get(s.value, "")}
            for s in SimulationScenario
        ]
    }


@app.post("/api/v1/simulate")
async def simulate(request: SimulateRequest):
    """Run the monitor offline against a simulated scenario."""
    monitor = HandoverMonitor(
        store,
        ScenarioSimulator(request.scenario, seed=request.seed),
        profile=request.profile,
        traffic_type=request.traffic_type,
        interval_seconds=0,
        observer=logging_observer
    )
    records = [monitor.tick().to_payload() for _ in range(request.ticks)]
    handovers = sum(1 for r in records if r["ho_event"] != "NONE")

    return {
        "scenario": request.scenario.value,
        "profile": monitor.profile_name,
        "handovers": handovers,
        "final_path": monitor.current_path.value if monitor.current_path else None,
        "records": records
    }


def run_server(host: str = config.API_HOST, port: int = config.API_PORT):
    """Run the FastAPI server."""
    import uvicorn
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
