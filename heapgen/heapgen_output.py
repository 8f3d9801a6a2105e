from typing import Optional

from rich.console import Console

from heapgen.heapgen_memory_size import memory_size_str


class HeapgenOutput:
    """Log sink: one timestamped console record per event."""

    # Color for failed allocations
    failure_color = "bold red"

    # Color for notices about the timer
    notice_color = "yellow4"

    def __init__(self, console: Optional[Console] = None) -> None:
        # where we write log records
        self.console = (
            console if console is not None else Console(stderr=True, log_path=False)
        )

    def log_size(self, size: int) -> None:
        self.console.log(f"size: {memory_size_str(size)}", highlight=False)

    def log_calls(self, calls: int) -> None:
        self.console.log(f"calls: {calls}", highlight=False)

    def log_field(self, field: str) -> None:
        self.console.log(field, highlight=False)

    def log_failure(self, calls: int, exc: BaseException) -> None:
        self.console.log(
            f"calls: {calls} {exc}",
            style=self.failure_color,
            markup=False,
            highlight=False,
        )

    def log_timer_disabled(self) -> None:
        self.console.log(
            "timer disabled; waiting for manual triggers",
            style=self.notice_color,
            highlight=False,
        )

    def log_summary(self, calls: int, failures: int, elapsed: float) -> None:
        """Report totals when the scheduler stops."""
        self.console.log(
            f"stopped after {calls} calls ({failures} failed) in {elapsed:3.3f}s",
            highlight=False,
        )
