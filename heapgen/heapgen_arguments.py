import argparse

from heapgen.heapgen_config import DEFAULT_PERIOD, DEFAULT_SIZE


class HeapgenArguments(argparse.Namespace):
    """Encapsulates all arguments and default values for heapgen.

    Settings that may also come from the environment or the config file
    are None until given on the command line; the defaults shown in the
    help text live in the `default_*` attributes.
    """

    def __init__(self) -> None:
        super().__init__()
        self.version = False
        # JSON config file (default: ~/.heapgen/config.json)
        self.config = None
        # size of each generated object, e.g. "100M"
        self.size = None
        self.default_size = DEFAULT_SIZE
        # seconds between ticks
        self.period = None
        self.default_period = DEFAULT_PERIOD
        # seconds before the first tick (default: one period); negative disables the timer
        self.delay = None
        # fixed rate (True) or fixed delay between the end of one tick and the next (False)
        self.fixed_rate = None
        # stop after this many ticks (0 = never)
        self.repeat_count = None
        # stop after this many seconds
        self.duration = None
        # seed for the random source (default: unpredictable)
        self.seed = None
