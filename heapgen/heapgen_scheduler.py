"""
Scheduled generation of large objects.

The scheduler owns the invocation counter. Each tick increments it,
allocates one LargeObject of the configured size, and logs the counter
and the object's second field. Ticks come from a single timer thread or
from manual triggers; either way they run one at a time.
"""

import enum
import threading
import time
from typing import Optional

from heapgen.heapgen_object_factory import AllocationFailure, ObjectFactory
from heapgen.heapgen_output import HeapgenOutput
from heapgen.heapgen_timer import HeapgenTimer


class SchedulerState(enum.Enum):
    IDLE = "idle"
    ARMED = "armed"
    RUNNING = "running"


class Scheduler:
    """Drives periodic invocations of an ObjectFactory and reports each one."""

    def __init__(
        self,
        factory: ObjectFactory,
        size: int,
        timer: HeapgenTimer,
        output: HeapgenOutput,
    ) -> None:
        if size < 0:
            raise ValueError(f"size must be non-negative, not {size}")
        self.__factory = factory
        self.__size = size
        self.__timer = timer
        self.__output = output
        self.__calls = 0
        self.__failures = 0
        self.__state = SchedulerState.IDLE
        self.__lock = threading.Lock()  # held for the whole of one tick
        self.__stop_event = threading.Event()
        self.__thread: Optional[threading.Thread] = None
        self.__start_time = time.monotonic()
        self.__stopped = False
        self.__output.log_size(size)

    @property
    def calls(self) -> int:
        return self.__calls

    @property
    def failures(self) -> int:
        return self.__failures

    @property
    def size(self) -> int:
        return self.__size

    @property
    def state(self) -> SchedulerState:
        return self.__state

    def is_alive(self) -> bool:
        """True while the timer thread may still fire ticks."""
        return self.__thread is not None and self.__thread.is_alive()

    def start(self) -> None:
        """Arm the timer and start firing ticks in a background thread."""
        if self.__stopped:
            raise RuntimeError("scheduler has been stopped")
        if self.__thread:
            return
        self.__start_time = time.monotonic()
        deadline = self.__timer.first_deadline(self.__start_time)
        if deadline is None:
            if self.__timer.is_disabled():
                self.__output.log_timer_disabled()
            return
        self.__state = SchedulerState.ARMED
        # Daemon thread, so a hung allocation never keeps the process alive.
        self.__thread = threading.Thread(target=self.run, args=(deadline,), daemon=True)
        self.__thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop firing ticks. An in-flight tick runs to completion."""
        self.__stop_event.set()
        thread = self.__thread
        if thread and thread is not threading.current_thread():
            thread.join(timeout)
        self.__thread = None
        with self.__lock:
            self.__state = SchedulerState.IDLE
            if self.__stopped:
                return
            self.__stopped = True
            self.__output.log_summary(
                self.__calls, self.__failures, time.monotonic() - self.__start_time
            )

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Wait for the timer thread to finish; returns False on timeout."""
        thread = self.__thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def trigger(self) -> bool:
        """Fire one tick now, from the calling thread.

        Returns True if the object was allocated and reported."""
        with self.__lock:
            if self.__stopped:
                raise RuntimeError("scheduler has been stopped")
            return self.__tick()

    def run(self, deadline: float) -> None:
        """Fire ticks until the timer is exhausted or stop is called.

        Executed in a separate thread."""
        next_deadline: Optional[float] = deadline
        while next_deadline is not None:
            if self.__stop_event.wait(max(0.0, next_deadline - time.monotonic())):
                return
            with self.__lock:
                if self.__stop_event.is_set():
                    return
                self.__tick()
            next_deadline = self.__timer.next_deadline(time.monotonic())
        with self.__lock:
            self.__state = SchedulerState.IDLE

    def __tick(self) -> bool:
        # Caller holds self.__lock.
        previous = self.__state
        self.__state = SchedulerState.RUNNING
        try:
            # Count the attempt before allocating, so failed ticks are counted too.
            self.__calls += 1
            calls = self.__calls
            self.__output.log_calls(calls)
            try:
                large_object = self.__factory.create(self.__size)
            except AllocationFailure as exc:
                self.__failures += 1
                self.__output.log_failure(calls, exc)
                return False
            self.__output.log_field(large_object.field_two)
            del large_object
            return True
        finally:
            self.__state = previous
