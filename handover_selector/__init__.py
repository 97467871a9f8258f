"""
Handover Selector
"""

from .models import (
    AccessPath, HandoverEvent, TrafficType, SteeringMode,
    PathMetrics, AdvisoryMetrics, ProfileConfig, DecisionResult,
    SteeringAdvice, DecisionRecord
)
from .normalizer import normalize, MetricRange
from .scorer import PathScorer
from .switch import HysteresisSwitch, HandoverDecisionEngine, wifi_usable
from .advisor import TrafficAdvisor
from .profiles import ProfileStore, ProfileLoadError
from .monitor import HandoverMonitor
from .simulator import ScenarioSimulator

__version__ = "1.0.0"
__all__ = [
    "AccessPath",
    "HandoverEvent",
    "TrafficType",
    "SteeringMode",
    "PathMetrics",
    "AdvisoryMetrics",
    "ProfileConfig",
    "DecisionResult",
    "SteeringAdvice",
    "DecisionRecord",
    "normalize",
    "MetricRange",
    "PathScorer",
    "HysteresisSwitch",
    "HandoverDecisionEngine",
    "wifi_usable",
    "TrafficAdvisor",
    "ProfileStore",
    "ProfileLoadError",
    "HandoverMonitor",
    "ScenarioSimulator"
]
