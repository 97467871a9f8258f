"""
Handover Selector - Monitor Loop

Drives the decision engine on a fixed cadence. The monitor owns the
active-path token; the engine and advisor stay stateless.
"""

import asyncio
import logging
import threading
from typing import Callable, List, Optional, Tuple

from .models import (
    AccessPath, AdvisoryMetrics, DecisionRecord, HandoverEvent, PathMetrics, TrafficType
)
from .profiles import ProfileStore
from .switch import HandoverDecisionEngine
from .advisor import TrafficAdvisor
from .diagnostics import Observer

logger = logging.getLogger(__name__)

MetricSource = Callable[[], Tuple[Optional[PathMetrics], Optional[PathMetrics]]]


class HandoverMonitor:
    """
    Periodic evaluate-and-persist loop around the handover engine.

    Decisions are reported to listeners; no network-level switch is made.
    """

    def __init__(
        self,
        store: ProfileStore,
        metric_source: MetricSource,
        profile: Optional[str] = None,
        traffic_type: TrafficType = TrafficType.WEB,
        interval_seconds: float = 2.0,
        observer: Optional[Observer] = None
    ):
        self.store = store
        self.metric_source = metric_source
        self.traffic_type = traffic_type
        self.interval_seconds = interval_seconds
        self.observer = observer
        self.advisor = TrafficAdvisor(observer)
        self.current_path: Optional[AccessPath] = None
        self.running = False
        self._lock = threading.Lock()
        self._callbacks: List[Callable[[DecisionRecord], None]] = []
        self.set_profile(profile)

    def set_profile(self, name: Optional[str]) -> str:
        """Switch to a named profile (unknown names use the default)."""
        resolved = self.store.resolve_name(name)
        engine = HandoverDecisionEngine(self.store.resolve(resolved), self.observer)
        with self._lock:
            self.profile_name = resolved
            self.engine = engine
        logger.info(f"Loaded profile={resolved}")
        return resolved

    def on_update(self, callback: Callable[[DecisionRecord], None]):
        """Register callback for every tick record."""
        self._callbacks.append(callback)

    def tick(self) -> DecisionRecord:
        """
        Collect one snapshot, decide, persist the active path and notify.
        """
        try:
            wifi, cell = self.metric_source()
        except Exception as e:
            logger.error(f"Metric collection failed: {e}")
            record = DecisionRecord(profile=self.profile_name)
            self._notify(record)
            return record

        with self._lock:
            decision = self.engine.update(wifi, cell, self.current_path)

            if decision.event != HandoverEvent.NONE:
                logger.warning(
                    f"Handover triggered event={decision.event.value} path={decision.active_path.value}"
                )
                self.current_path = decision.active_path
            elif self.current_path is None:
                logger.info(f"Initial path set to {decision.active_path.value}")
                self.current_path = decision.active_path

            profile_name = self.profile_name

        advice = self.advisor.advise(self.traffic_type, AdvisoryMetrics.from_paths(wifi, cell))

        record = DecisionRecord(
            profile=profile_name,
            wifi=wifi or PathMetrics(),
            cell=cell or PathMetrics(),
            decision=decision,
            advice=advice
        )
        self._notify(record)
        return record

    def _notify(self, record: DecisionRecord):
        for callback in self._callbacks:
            try:
                callback(record)
            except Exception as e:
                logger.warning(f"Record listener failed: {e}")

    async def run(self, ticks: Optional[int] = None):
        """Tick every interval until stopped or `ticks` have elapsed."""
        self.running = True
        count = 0
        logger.info("Monitoring loop started")
        try:
            while self.running and (ticks is None or count < ticks):
                self.tick()
                count += 1
                if ticks is not None and count >= ticks:
                    break
                await asyncio.sleep(self.interval_seconds)
        finally:
            self.running = False
            logger.info("Monitoring loop stopped")

    def stop(self):
        self.running = False
