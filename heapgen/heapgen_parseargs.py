import argparse
import re
import sys
from textwrap import dedent
from typing import Any, List, Optional

from heapgen.heapgen_arguments import HeapgenArguments
from heapgen.heapgen_config import heapgen_date, heapgen_version


def _colorize_help_for_rich(text: str) -> str:
    """Apply Python 3.14-style argparse colors using Rich markup.

    - usage and headings: bold blue
    - prog: bold magenta
    - long options (--foo): bold cyan
    - metavars (FOO): bold yellow
    """
    text = re.sub(
        r"^(usage:|options:|environment:)",
        r"[bold blue]\1[/bold blue]",
        text,
        flags=re.MULTILINE,
    )
    text = re.sub(
        r"(\[bold blue\]usage:\[/bold blue\] )(\S+)",
        r"\1[bold magenta]\2[/bold magenta]",
        text,
    )
    text = re.sub(
        r"(^  |, )(--[a-zA-Z][a-zA-Z0-9_-]*)",
        r"\1[bold cyan]\2[/bold cyan]",
        text,
        flags=re.MULTILINE,
    )
    text = re.sub(
        r"(\[/bold cyan\] )([A-Z][A-Z0-9_]*)\b",
        r"\1[bold yellow]\2[/bold yellow]",
        text,
    )
    return text


class RichArgParser(argparse.ArgumentParser):
    """ArgumentParser that uses Rich for colored output on Python < 3.14."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        if sys.version_info < (3, 14):
            from rich.console import Console

            self._console: Optional[Any] = Console()
        else:
            self._console = None
        super().__init__(*args, **kwargs)

    def _print_message(self, message: Optional[str], file: Any = None) -> None:
        if message:
            if self._console is not None and file is not sys.stderr:
                self._console.print(_colorize_help_for_rich(message), highlight=False)
            else:
                print(message, end="", file=file)


class HeapgenParseArgs:
    @staticmethod
    def parse_args(argv: Optional[List[str]] = None) -> HeapgenArguments:
        defaults = HeapgenArguments()
        usage = dedent(
            rf"""heapgen: a scheduled large-object allocator for memory load testing, version {heapgen_version} ({heapgen_date})

command-line:
  % heapgen [options]
or
  % python3 -m heapgen [options]
"""
        )
        epilog = dedent(
            """environment:
  every option except --config can also be set with an environment variable
  (HEAPGEN_SIZE, HEAPGEN_PERIOD, HEAPGEN_DELAY, HEAPGEN_FIXED_RATE,
  HEAPGEN_REPEAT_COUNT, HEAPGEN_DURATION, HEAPGEN_SEED) or a key of the same
  name in the JSON config file; the command line takes precedence.
"""
        )

        parser = RichArgParser(
            prog="heapgen",
            description=usage,
            epilog=epilog,
            formatter_class=argparse.RawTextHelpFormatter,
            allow_abbrev=False,
        )
        parser.add_argument(
            "--version",
            dest="version",
            action="store_const",
            const=True,
            default=defaults.version,
            help="prints the version number for this release of heapgen and exits",
        )
        parser.add_argument(
            "--config",
            dest="config",
            type=str,
            default=defaults.config,
            help="JSON file holding settings (default: ~/.heapgen/config.json)",
        )
        parser.add_argument(
            "--size",
            dest="size",
            type=str,
            default=defaults.size,
            help=f"size of each generated object, with optional K/M/G/T suffix (default: {defaults.default_size})",
        )
        parser.add_argument(
            "--period",
            dest="period",
            type=float,
            default=defaults.period,
            help=f"seconds between ticks (default: {defaults.default_period})",
        )
        parser.add_argument(
            "--delay",
            dest="delay",
            type=float,
            default=defaults.delay,
            help="seconds before the first tick; a negative delay disables the timer (default: one period)",
        )
        group = parser.add_mutually_exclusive_group(required=False)
        group.add_argument(
            "--fixed-rate",
            dest="fixed_rate",
            action="store_const",
            const=True,
            default=defaults.fixed_rate,
            help="start ticks at a fixed rate, regardless of how long each one takes (default)",
        )
        group.add_argument(
            "--fixed-delay",
            dest="fixed_rate",
            action="store_const",
            const=False,
            help="wait a full period after each tick completes",
        )
        parser.add_argument(
            "--repeat-count",
            dest="repeat_count",
            type=int,
            default=defaults.repeat_count,
            help="stop after this many ticks (default: 0, never)",
        )
        parser.add_argument(
            "--duration",
            dest="duration",
            type=float,
            default=defaults.duration,
            help="stop after this many seconds (default: run until interrupted)",
        )
        parser.add_argument(
            "--seed",
            dest="seed",
            type=int,
            default=defaults.seed,
            help="seed for the random source (default: unpredictable)",
        )
        args = parser.parse_args(argv, namespace=defaults)

        if args.version:
            print(f"heapgen version {heapgen_version} ({heapgen_date})")
            sys.exit(0)
        return args
