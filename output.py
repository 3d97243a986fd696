"""JSONL sink for test run events."""

import json
from datetime import datetime
from pathlib import Path
from typing import TextIO, Optional

from booking_tests.plugin import TestEvent


class JSONLWriter:
    """Writes test events to JSONL format as they arrive."""

    def __init__(self, output_path: Path):
        self.output_path = output_path
        self.count = 0
        self._file: Optional[TextIO] = None

    def __enter__(self):
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.output_path, 'w', encoding='utf-8')
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._file:
            self._file.close()
            self._file = None

    def write_event(self, event: TestEvent):
        """Write a single event as a JSON line."""
        if not self._file:
            raise RuntimeError("JSONLWriter used outside of its context")
        self._file.write(json.dumps(event.to_dict(), ensure_ascii=False, default=str) + '\n')
        self._file.flush()
        self.count += 1


def generate_output_filename(prefix: str = "test_run", now: Optional[datetime] = None) -> str:
    """Generate timestamped output filename, e.g. 'test_run_1706367000.jsonl'."""
    timestamp = int((now or datetime.now()).timestamp())
    return f"{prefix}_{timestamp}.jsonl"
