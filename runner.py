"""Test runner for booking Playwright tests."""

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

import pytest

from booking_tests.config import get_settings
from booking_tests.plugin import ResultCollectorPlugin, set_current_plugin, TestEvent
from booking_tests.output import JSONLWriter, generate_output_filename
from booking_tests import console


class RunStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class RunSummary:
    """Summary of a test run."""
    run_id: str
    status: RunStatus
    started_at: datetime
    completed_at: Optional[datetime] = None
    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    duration_seconds: float = 0
    current_test: Optional[str] = None
    output_file: Optional[str] = None

    def record(self, outcome: str):
        """Count a finished test. Anything not passed or skipped counts as failed."""
        self.total += 1
        self.current_test = None
        if outcome == "passed":
            self.passed += 1
        elif outcome == "skipped":
            self.skipped += 1
        else:
            self.failed += 1

    def finish(self, exit_code: int):
        self.completed_at = datetime.now()
        self.duration_seconds = (self.completed_at - self.started_at).total_seconds()
        self.status = RunStatus.COMPLETED if exit_code == 0 else RunStatus.FAILED


def _step_icon(event: TestEvent) -> str:
    if event.step_type == "check":
        return console.info("?")
    if event.outcome == "failed":
        return console.error("x")
    return console.success("+")


def _print_test_start(event: TestEvent, run: RunSummary):
    run.current_test = event.name
    console.writeln(f"\n{console.label('TEST:')} {console.info(event.name)}")


def _print_step(event: TestEvent, run: RunSummary):
    duration = console.dim(f" ({event.duration_ms}ms)") if event.duration_ms else ""
    console.writeln(f"  [{_step_icon(event)}] {event.step_name}{duration}")
    if event.message and event.outcome == "failed":
        console.writeln(f"{' ' * 6}{console.error(event.message)}")


def _print_test_end(event: TestEvent, run: RunSummary):
    run.record(event.outcome)
    if event.outcome == "skipped":
        console.writeln(f"  => {console.warn('SKIPPED')}")
        return
    status = console.success("PASSED") if event.outcome == "passed" else console.error("FAILED")
    duration = console.dim(f" ({event.duration_seconds:.2f}s)") if event.duration_seconds else ""
    checks = (event.details or {}).get("check")
    if checks:
        duration += console.dim(f" [{checks} checks]")
    console.writeln(f"  => {status}{duration}")
    if event.message:
        console.writeln(f"{' ' * 5}{console.error('Error:')} {event.message}")


_PRINTERS = {
    "test_start": _print_test_start,
    "step": _print_step,
    "test_end": _print_test_end,
}


def _print_event(event: TestEvent, run: RunSummary):
    """Print a test event and update the run's counts."""
    printer = _PRINTERS.get(event.event_type)
    if printer:
        printer(event, run)


class TestRunner:
    """Runs the pytest suite in-process, streaming events to console and JSONL."""
    __test__ = False

    def __init__(self, settings=None):
        self.settings = settings or get_settings()
        self._runs: dict[str, RunSummary] = {}

    def create_run(self) -> str:
        run_id = str(uuid.uuid4())
        self._runs[run_id] = RunSummary(
            run_id=run_id,
            status=RunStatus.PENDING,
            started_at=datetime.now(),
        )
        return run_id

    def get_run(self, run_id: str) -> Optional[RunSummary]:
        return self._runs.get(run_id)

    def build_pytest_args(
        self,
        markers: Optional[List[str]] = None,
        headless: bool = True,
        browser: Optional[str] = None,
        ui: bool = True,
    ) -> List[str]:
        """Assemble the pytest command line for a run.

        Markers are OR-ed together; ``ui`` enables the live-site tests.
        """
        tests_dir = Path(__file__).parent / "tests"
        pytest_args = [str(tests_dir), "--browser", browser or self.settings.browser]
        if markers:
            pytest_args.extend(["-m", " or ".join(markers)])
        if not headless:
            pytest_args.append("--headed")
        if ui:
            pytest_args.append("--ui")
        return pytest_args

    def run_tests(
        self,
        run_id: str,
        markers: Optional[List[str]] = None,
        headless: bool = True,
        browser: Optional[str] = None,
        ui: bool = True,
        output_path: Optional[Path] = None,
    ) -> RunSummary:
        run = self._runs.get(run_id)
        if not run:
            raise ValueError(f"Test run {run_id} not found")

        run.status = RunStatus.RUNNING
        run.started_at = datetime.now()
        output_path = output_path or self.settings.reports_path / generate_output_filename()
        run.output_file = str(output_path)

        with JSONLWriter(output_path) as writer:
            def on_event(event: TestEvent):
                writer.write_event(event)
                _print_event(event, run)

            plugin = ResultCollectorPlugin(on_event=on_event)
            set_current_plugin(plugin)
            try:
                exit_code = pytest.main(self.build_pytest_args(markers, headless, browser, ui), plugins=[plugin])
            finally:
                set_current_plugin(None)

        run.finish(exit_code)
        return run


def run_tests_sync(
    markers: Optional[List[str]] = None,
    headless: bool = True,
    browser: Optional[str] = None,
    ui: bool = True,
    output_path: Optional[Path] = None,
) -> RunSummary:
    """Create a run and execute it in one call."""
    runner = TestRunner()
    return runner.run_tests(
        runner.create_run(),
        markers=markers,
        headless=headless,
        browser=browser,
        ui=ui,
        output_path=output_path,
    )
