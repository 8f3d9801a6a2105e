"""heapgen: allocates a large random object on a fixed schedule.

    usage: heapgen [options]
    usage help: heapgen --help

   Builds the object factory, the log sink and the scheduler from the
   resolved settings, then runs until the timer is exhausted, the
   duration elapses, or the process receives SIGINT/SIGTERM.
"""

import signal
import sys
import threading
import time
from types import FrameType
from typing import List, Optional

import numpy as np

from heapgen.heapgen_config import ConfigurationError
from heapgen.heapgen_object_factory import ObjectFactory
from heapgen.heapgen_output import HeapgenOutput
from heapgen.heapgen_parseargs import HeapgenParseArgs
from heapgen.heapgen_scheduler import Scheduler
from heapgen.heapgen_settings import HeapgenSettings, resolve_settings
from heapgen.heapgen_timer import HeapgenTimer


class Heapgen:
    """Composition root."""

    # how often the main thread checks whether the scheduler finished
    poll_interval = 0.1

    def __init__(
        self, settings: HeapgenSettings, output: Optional[HeapgenOutput] = None
    ) -> None:
        self.settings = settings
        self.output = output if output is not None else HeapgenOutput()
        self.factory = ObjectFactory(np.random.default_rng(settings.seed))
        self.timer = HeapgenTimer()
        self.timer.set_timer(
            settings.delay,
            settings.period,
            fixed_rate=settings.fixed_rate,
            repeat_count=settings.repeat_count,
        )
        self.scheduler = Scheduler(
            self.factory, settings.size, self.timer, self.output
        )
        self.__done = threading.Event()

    def interrupt(self, signum: int, frame: Optional[FrameType]) -> None:
        """Signal handler: ask run() to stop."""
        self.__done.set()

    def run(self) -> None:
        """Run the scheduler until it finishes, the duration elapses, or interrupt() is called."""
        deadline = (
            time.monotonic() + self.settings.duration
            if self.settings.duration is not None
            else None
        )
        self.scheduler.start()
        try:
            while not self.__done.wait(self.poll_interval):
                if deadline is not None and time.monotonic() >= deadline:
                    break
                # A disabled timer never finishes by itself; keep the
                # process up until interrupted.
                if not self.timer.is_disabled() and self.scheduler.wait(0):
                    break
        finally:
            self.scheduler.stop()

    @staticmethod
    def main(argv: Optional[List[str]] = None) -> int:
        args = HeapgenParseArgs.parse_args(argv)
        try:
            settings = resolve_settings(args)
        except ConfigurationError as exc:
            print(f"heapgen: {exc}", file=sys.stderr)
            return 1
        heapgen = Heapgen(settings)
        for sig in (signal.SIGINT, signal.SIGTERM):
            signal.signal(sig, heapgen.interrupt)
        heapgen.run()
        return 0
