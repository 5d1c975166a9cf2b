#!/usr/bin/env python3
"""
count_foldings.py

Print the number of foldings of a strip of N segments, or of every strip
length up to N.

Usage:
    count-foldings 8                       # count for n = 8
    count-foldings --upto 10               # count for n = 1..10
    count-foldings -m incremental -u 14    # faster strategy
    count-foldings -j 8 11                 # exhaustive count on 8 processes

Defaults come from the variables in the next section; command line flags
override them.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from counting import CountingMethod, brute_force_parallel, count_range

logger = logging.getLogger(__name__)


# ----------------------------
# User-configurable variables
# ----------------------------

METHOD = CountingMethod.EXHAUSTIVE
UPTO = False                # report every n in 1..N
WORKERS: Optional[int] = None  # process count for the parallel exhaustive count
SHOW_PROGRESS = True        # progress bar on stderr for parallel runs (TTY only)


# ----------------------------
# Helpers
# ----------------------------

def _non_negative(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return value


def _progress_line(n: int, done: int, total: int, width: int = 30) -> str:
    """Status of a parallel count: stack prefixes finished out of the partition."""
    cells = min(total, width)
    filled = cells * done // total if total > 0 else 0
    return f"n={n} |{'=' * filled}{' ' * (cells - filled)}| {done}/{total} prefixes"


def _stderr_progress(n: int):
    def _hook(done: int, total: int) -> None:
        sys.stderr.write("\r" + _progress_line(n, done, total))
        if done == total:
            sys.stderr.write("\r\033[K")
        sys.stderr.flush()
    return _hook


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="count-foldings",
        description="Count the foldings of a strip of N stamps (one-dimensional map folding).",
    )
    parser.add_argument(
        "n",
        metavar="N",
        type=_non_negative,
        help="The number of segments in the map",
    )
    parser.add_argument(
        "-u", "--upto",
        action="store_true",
        default=UPTO,
        help="Count map foldings for every n from 1 to N",
    )
    parser.add_argument(
        "-m", "--method",
        choices=[m.value for m in CountingMethod],
        default=METHOD.value,
        help=f"Counting strategy (default: {METHOD.value})",
    )
    parser.add_argument(
        "-j", "--workers",
        type=int,
        default=WORKERS,
        help="Run the exhaustive count on this many processes",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging",
    )
    return parser


# ----------------------------
# Main
# ----------------------------

def main(argv: Optional[List[str]] = None) -> int:
    args = create_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    method = CountingMethod(args.method)
    n_max = args.n
    n_min = 1 if args.upto else n_max
    width = len(str(n_max)) + 1

    if args.workers is not None and method is not CountingMethod.EXHAUSTIVE:
        logger.warning("--workers only applies to the exhaustive method; ignoring it")

    try:
        if args.workers is not None and method is CountingMethod.EXHAUSTIVE:
            show = SHOW_PROGRESS and sys.stderr.isatty()
            for n in range(n_min, n_max + 1):
                count = brute_force_parallel(
                    n,
                    workers=args.workers,
                    progress=_stderr_progress(n) if show else None,
                )
                print(f"{n:>{width}} : {count}")
        else:
            for n, count in count_range(n_min, n_max, method):
                print(f"{n:>{width}} : {count}")
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
