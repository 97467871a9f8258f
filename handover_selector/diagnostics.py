"""
Handover Selector - Diagnostic Hooks

Scoring code reports intermediate values to an optional observer instead
of logging directly, so decisions never depend on logging configuration.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger("handover_selector")

# observer(event, data)
Observer = Callable[[str, Dict[str, Any]], None]

# Events worth more than DEBUG when they reach the log
_EVENT_LEVELS = {
    "handover": logging.WARNING,
    "decision": logging.INFO,
    "advice": logging.INFO,
}


def logging_observer(event: str, data: Dict[str, Any]) -> None:
    """Forward diagnostic events to the package logger."""
    level = _EVENT_LEVELS.get(event, logging.DEBUG)
    if not logger.isEnabledFor(level):
        return
    fields = " ".join(f"{k}={v}" for k, v in data.items())
    logger.log(level, f"{event.upper()} {fields}")


class RecordingObserver:
    """Keeps every event in memory; handy for tests and the simulator."""

    def __init__(self):
        self.events: List[tuple] = []

    def __call__(self, event: str, data: Dict[str, Any]) -> None:
        self.events.append((event, dict(data)))

    def named(self, event: str) -> List[Dict[str, Any]]:
        return [data for name, data in self.events if name == event]


def emit(observer: Optional[Observer], name: str, /, **data: Any) -> None:
    """Report an event if anyone is listening. Observer errors are logged, not raised."""
    if observer is None:
        return
    try:
        observer(name, data)
    except Exception as e:
        logger.warning(f"Diagnostic observer failed on {name}: {e}")
