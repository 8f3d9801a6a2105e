import math
from typing import Optional, Tuple


class HeapgenTimer:
    """
    A class to wrap the cadence of the heapgen tick thread: an initial
    delay, a period, and an optional limit on the number of ticks.
    Deadlines are in the same clock as the `now`/`finished` arguments
    (time.monotonic() in practice).
    """

    delay: Optional[float]
    period: float
    fixed_rate: bool
    repeat_count: int
    fired: int
    # last period boundary that has fired (or been folded into an overdue tick)
    boundary: float

    is_set: bool

    def __init__(self) -> None:
        self.reset()

    def set_timer(
        self,
        delay: Optional[float],
        period: float,
        fixed_rate: bool = True,
        repeat_count: int = 0,
    ) -> None:
        """
        Arm the timer. A delay of None waits one period before the first
        tick; a negative delay disables automatic firing altogether.
        """
        if not math.isfinite(period) or period <= 0:
            raise ValueError(f"period must be positive and finite, not {period}")
        if delay is not None and not math.isfinite(delay):
            raise ValueError(f"delay must be finite, not {delay}")
        if repeat_count < 0:
            raise ValueError(f"repeat_count must be non-negative, not {repeat_count}")
        self.delay = delay
        self.period = period
        self.fixed_rate = fixed_rate
        self.repeat_count = repeat_count
        self.fired = 0
        self.boundary = 0.0
        self.is_set = True

    def reset(self) -> None:
        """Reset the timer."""
        self.delay = None
        self.period = 0.0
        self.fixed_rate = True
        self.repeat_count = 0
        self.fired = 0
        self.boundary = 0.0
        self.is_set = False

    def get_timer(self) -> Tuple[Optional[float], float]:
        """Returns a tuple of (delay, period)."""
        return self.delay, self.period

    def is_disabled(self) -> bool:
        """True if the timer never fires on its own."""
        return not self.is_set or (self.delay is not None and self.delay < 0)

    def is_exhausted(self) -> bool:
        return self.repeat_count > 0 and self.fired >= self.repeat_count

    def first_deadline(self, now: float) -> Optional[float]:
        """When the first tick is due, or None if the timer never fires."""
        if self.is_disabled() or self.is_exhausted():
            return None
        if self.delay is None:
            self.boundary = now + self.period
        else:
            self.boundary = now + self.delay
        return self.boundary

    def next_deadline(self, finished: float) -> Optional[float]:
        """
        Records one tick (completed at `finished`) and returns when the
        next one is due, or None once the timer is exhausted.

        At a fixed rate ticks stay on the grid first_deadline + k * period.
        If a tick ran past one or more boundaries, a single overdue tick
        is due immediately and the ticks after it return to the grid;
        missed boundaries never fire as a burst.
        """
        self.fired += 1
        if self.is_exhausted():
            return None
        if not self.fixed_rate:
            return finished + self.period
        boundary = self.boundary + self.period
        if boundary >= finished:
            self.boundary = boundary
            return boundary
        # Fold every boundary up to `finished` into one overdue tick.
        boundary += math.floor((finished - boundary) / self.period) * self.period
        while boundary + self.period < finished:  # floor() can land one short
            boundary += self.period
        self.boundary = boundary
        return finished
