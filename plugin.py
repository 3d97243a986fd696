from collections import Counter
from dataclasses import dataclass, field, asdict
from typing import Callable, Optional, List
from datetime import datetime
import time
import pytest

# Markers that describe pytest mechanics rather than what a test covers
_MECHANICAL_MARKERS = {"parametrize", "usefixtures", "skip", "skipif"}


@dataclass
class TestEvent:
    """One line of the run's event stream (session, test or step level)."""
    __test__ = False

    event_type: str
    timestamp: str = field(
        default_factory=lambda: datetime.now().isoformat())
    nodeid: str = None
    name: str = None
    location: str = None
    outcome: str = None
    duration_seconds: float = None
    duration_ms: int = None
    message: str = None
    step_name: str = None
    markers: List[str] = None
    step_type: str = None  # "action", "info" or "check"
    details: dict = None

    def to_dict(self):
        return {k: v for k, v in asdict(self).items() if v is not None}


class ResultCollectorPlugin:
    """Pytest plugin that collects booking test results and emits events via callback.

    Besides test outcomes it tallies each test's steps, so a test_end event
    shows how many checks ran and how many of them failed.
    """

    def __init__(self, on_event: Callable[[TestEvent], None] = None):
        self.on_event = on_event
        self.results: List[TestEvent] = []
        self.outcomes: Counter = Counter()
        self.step_counts: Counter = Counter()
        self._started_at: float = None
        self._nodeid: str = None
        self._test_name: str = None

    def _emit(self, event: TestEvent):
        self.results.append(event)
        if self.on_event:
            self.on_event(event)

    def record_step(self, event: TestEvent):
        """Emit a step event for the running test and count it."""
        event.nodeid = self._nodeid
        event.name = self._test_name
        self.step_counts[event.step_type] += 1
        if event.step_type == "check" and event.outcome == "failed":
            self.step_counts["failed_checks"] += 1
        self._emit(event)

    def _finish_test(self, item, outcome: str, message: str = None):
        elapsed = time.time() - self._started_at if self._started_at else None
        self.outcomes[outcome] += 1
        self._emit(TestEvent(
            "test_end",
            nodeid=item.nodeid,
            name=item.name,
            outcome=outcome,
            duration_seconds=round(elapsed, 3) if elapsed else None,
            message=message,
            details=dict(self.step_counts) or None,
        ))
        self._nodeid = None
        self._test_name = None

    def pytest_sessionstart(self, session):
        self._emit(TestEvent("session_start"))

    def pytest_runtest_logstart(self, nodeid, location):
        self._started_at = time.time()
        self._nodeid = nodeid
        self._test_name = nodeid.split("::")[-1]
        self.step_counts = Counter()

    def pytest_runtest_setup(self, item):
        markers = sorted({m.name for m in item.iter_markers()} - _MECHANICAL_MARKERS)
        self._emit(TestEvent(
            "test_start",
            nodeid=item.nodeid,
            name=item.name,
            location=item.location[0],
            markers=markers or None,
        ))

    def pytest_runtest_makereport(self, item, call):
        if call.excinfo is None:
            if call.when == "call":
                self._finish_test(item, "passed")
            return
        # A failing teardown after a finished test was already reported
        if self._nodeid != item.nodeid:
            return
        outcome = "skipped" if call.excinfo.errisinstance(pytest.skip.Exception) else "failed"
        message = str(call.excinfo.value).replace("\n", "\n" + " " * 5)
        self._finish_test(item, outcome, message)

    def pytest_sessionfinish(self, session, exitstatus):
        self._emit(TestEvent(
            "session_end",
            outcome="passed" if exitstatus == 0 else "failed",
            details=dict(self.outcomes),
        ))


_current_plugin: Optional[ResultCollectorPlugin] = None


def set_current_plugin(plugin: Optional[ResultCollectorPlugin]):
    global _current_plugin
    _current_plugin = plugin


def log_step(name: str, outcome: str = "passed", message: str = None, duration_ms: int = None,
             step_type: str = "action", details: dict = None):
    """Log a test step event; a no-op when no run is collecting.

    Args:
        name: Step description
        outcome: "passed" or "failed"
        message: Optional error message
        duration_ms: Duration in milliseconds
        step_type: "action" (timed), "info" (no timing) or "check" (validation outcome)
        details: Optional structured payload, e.g. a validation result
    """
    if not _current_plugin:
        return
    _current_plugin.record_step(TestEvent(
        "step",
        step_name=name,
        outcome=outcome,
        message=message,
        duration_ms=duration_ms,
        step_type=step_type,
        details=details,
    ))
