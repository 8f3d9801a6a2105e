import hypothesis.strategies as st
import pytest
from hypothesis import given

from heapgen.heapgen_timer import HeapgenTimer


def test_unset_timer_is_disabled() -> None:
    timer = HeapgenTimer()
    assert not timer.is_set
    assert timer.is_disabled()
    assert timer.first_deadline(10.0) is None


def test_first_deadline_defaults_to_one_period() -> None:
    timer = HeapgenTimer()
    timer.set_timer(None, 0.1)
    assert timer.first_deadline(10.0) == pytest.approx(10.1)
    assert timer.get_timer() == (None, 0.1)


def test_zero_delay_fires_immediately() -> None:
    timer = HeapgenTimer()
    timer.set_timer(0.0, 0.1, repeat_count=1)
    assert not timer.is_disabled()
    assert timer.first_deadline(10.0) == 10.0
    assert timer.next_deadline(10.01) is None
    assert timer.is_exhausted()


def test_negative_delay_disables() -> None:
    timer = HeapgenTimer()
    timer.set_timer(-1.0, 0.1)
    assert timer.is_disabled()
    assert timer.first_deadline(10.0) is None


def test_fixed_rate_ignores_tick_duration() -> None:
    timer = HeapgenTimer()
    timer.set_timer(None, 0.1)
    assert timer.first_deadline(10.0) == pytest.approx(10.1)
    assert timer.next_deadline(10.15) == pytest.approx(10.2)
    assert timer.next_deadline(10.2) == pytest.approx(10.3)


def test_fixed_rate_overrun_fires_once_then_returns_to_the_grid() -> None:
    timer = HeapgenTimer()
    timer.set_timer(None, 0.1)
    assert timer.first_deadline(10.0) == pytest.approx(10.1)
    # the tick due at 10.1 ran until 10.45, past the 10.2, 10.3 and 10.4 boundaries
    assert timer.next_deadline(10.45) == pytest.approx(10.45)
    # the overdue tick completes quickly; the next one is back on the grid
    assert timer.next_deadline(10.46) == pytest.approx(10.5)
    assert timer.next_deadline(10.52) == pytest.approx(10.6)


def test_fixed_delay_waits_after_completion() -> None:
    timer = HeapgenTimer()
    timer.set_timer(None, 0.1, fixed_rate=False)
    assert timer.first_deadline(10.0) == pytest.approx(10.1)
    assert timer.next_deadline(10.15) == pytest.approx(10.25)


def test_repeat_count() -> None:
    timer = HeapgenTimer()
    timer.set_timer(None, 0.1, repeat_count=3)
    deadline = timer.first_deadline(0.0)
    fired = 0
    while deadline is not None:
        fired += 1
        deadline = timer.next_deadline(deadline)
    assert fired == 3
    assert timer.is_exhausted()
    assert timer.first_deadline(5.0) is None


def test_invalid_arguments() -> None:
    timer = HeapgenTimer()
    with pytest.raises(ValueError):
        timer.set_timer(None, 0.0)
    with pytest.raises(ValueError):
        timer.set_timer(None, 0.1, repeat_count=-1)
    for value in (float("nan"), float("inf"), float("-inf")):
        with pytest.raises(ValueError):
            timer.set_timer(None, value)
        with pytest.raises(ValueError):
            timer.set_timer(value, 0.1)


def test_reset() -> None:
    timer = HeapgenTimer()
    timer.set_timer(0.5, 0.1, fixed_rate=False, repeat_count=2)
    timer.reset()
    assert not timer.is_set
    assert timer.get_timer() == (None, 0.0)
    assert timer.fixed_rate
    assert timer.fired == 0


@given(
    st.floats(min_value=0.001, max_value=10.0),
    st.floats(min_value=0.0, max_value=1000.0),
    st.floats(min_value=0.0, max_value=50.0),
)
def test_fixed_rate_never_schedules_in_the_past(
    period: float, start: float, elapsed: float
) -> None:
    timer = HeapgenTimer()
    timer.set_timer(None, period)
    first = timer.first_deadline(start)
    assert first is not None
    finished = first + elapsed
    deadline = timer.next_deadline(finished)
    assert deadline is not None
    assert deadline >= finished
    assert deadline <= max(first + period, finished)

    # whatever the overrun, the tick after it lands on the original grid
    following = timer.next_deadline(deadline)
    assert following is not None
    assert following > deadline - 1e-9
    assert following <= deadline + period + 1e-9
    steps = (following - first) / period
    assert steps == pytest.approx(round(steps), abs=1e-6)
