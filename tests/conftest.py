import io
import time
from typing import List

import pytest
from rich.console import Console

from heapgen.heapgen_output import HeapgenOutput


class RecordingOutput(HeapgenOutput):
    """HeapgenOutput that also keeps every record it writes."""

    def __init__(self) -> None:
        super().__init__(Console(file=io.StringIO(), width=200, log_path=False))
        self.sizes: List[int] = []
        self.calls: List[int] = []
        self.call_times: List[float] = []
        self.fields: List[str] = []
        self.failures: List[int] = []
        self.summaries: List[tuple] = []
        self.disabled_notices = 0

    def log_size(self, size: int) -> None:
        self.sizes.append(size)
        super().log_size(size)

    def log_calls(self, calls: int) -> None:
        self.calls.append(calls)
        self.call_times.append(time.monotonic())
        super().log_calls(calls)

    def log_field(self, field: str) -> None:
        self.fields.append(field)
        super().log_field(field)

    def log_failure(self, calls: int, exc: BaseException) -> None:
        self.failures.append(calls)
        super().log_failure(calls, exc)

    def log_timer_disabled(self) -> None:
        self.disabled_notices += 1
        super().log_timer_disabled()

    def log_summary(self, calls: int, failures: int, elapsed: float) -> None:
        self.summaries.append((calls, failures))
        super().log_summary(calls, failures, elapsed)

    def text(self) -> str:
        return self.console.file.getvalue()


@pytest.fixture
def output() -> RecordingOutput:
    return RecordingOutput()
