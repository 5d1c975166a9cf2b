"""
counting.py

Count the foldable stack orderings of a strip of n segments.

Two strategies are provided:

- EXHAUSTIVE: test every permutation of 1..n with MapFolding.is_foldable.
  O(n! * n^2); kept as the reference method.
- INCREMENTAL: build stacks one segment at a time. Segment k+1 is inserted
  into every gap of each foldable stack of 1..k, and the extension survives
  only if its new crease crosses no earlier crease on the same side.
  Inserting a segment never changes the relative order of the others, so a
  crossing found at stage k stays a crossing at every later stage, and every
  permutation of 1..n is reached by exactly one sequence of insertions.

Counts are Python ints, so results stay exact for any n.

The exhaustive strategy also has a parallel form: the permutation space is
partitioned by stack prefix and each prefix is counted in a worker process.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from enum import Enum
from itertools import permutations
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from folding import Joint, MapFolding, Parity, joints_cross

logger = logging.getLogger(__name__)

ProgressHook = Callable[[int, int], None]


class CountingMethod(str, Enum):
    """Available counting strategies."""

    EXHAUSTIVE = "exhaustive"
    INCREMENTAL = "incremental"


@dataclass
class CountStats:
    examined: int = 0
    foldable: int = 0

    def __add__(self, other: "CountStats") -> "CountStats":
        return CountStats(
            examined=self.examined + other.examined,
            foldable=self.foldable + other.foldable,
        )


def factorial(n: int) -> int:
    out = 1
    for k in range(2, n + 1):
        out *= k
    return out


def _check_n(n: int) -> None:
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")


# ----------------------------
# Exhaustive enumeration
# ----------------------------

def prefix_partition(n: int, prefix_length: int) -> List[Tuple[int, ...]]:
    """
    All ordered prefixes of the given length drawn from 1..n.

    The permutations starting with each prefix are disjoint and together
    cover every permutation of 1..n.
    """
    _check_n(n)
    if not (0 <= prefix_length <= n):
        raise ValueError(f"prefix_length must satisfy 0 <= prefix_length <= {n}")
    return list(permutations(range(1, n + 1), prefix_length))


def count_with_prefix(n: int, prefix: Sequence[int] = ()) -> CountStats:
    """
    Exhaustively test every permutation of 1..n that starts with `prefix`.
    """
    _check_n(n)
    head = tuple(prefix)
    if len(set(head)) != len(head) or any(not (1 <= s <= n) for s in head):
        raise ValueError(f"prefix {head} is not a partial permutation of 1..{n}")

    remaining = [s for s in range(1, n + 1) if s not in head]
    stats = CountStats()
    for tail in permutations(remaining):
        stats.examined += 1
        if MapFolding.from_stack(head + tail).is_foldable():
            stats.foldable += 1
    return stats


def brute_force(n: int) -> int:
    """
    Count foldings by checking every permutation in standard stack notation.

    By convention the empty strip has no foldings.
    """
    _check_n(n)
    if n == 0:
        return 0
    return count_with_prefix(n).foldable


def brute_force_parallel(
    n: int,
    *,
    workers: Optional[int] = None,
    prefix_length: int = 1,
    progress: Optional[ProgressHook] = None,
) -> int:
    """
    Parallel exhaustive count over a process pool.

    The permutation space is split by stack prefix; partial counts are
    summed as workers finish, so completion order does not matter.
    """
    _check_n(n)
    if workers is not None and workers < 1:
        raise ValueError("workers must be positive")
    if n == 0:
        return 0

    prefixes = prefix_partition(n, min(prefix_length, n))
    logger.debug("n=%d: %d prefixes across %s workers", n, len(prefixes), workers or "default")

    total = CountStats()
    with ProcessPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(count_with_prefix, n, p) for p in prefixes]
        for done, fut in enumerate(as_completed(futures), start=1):
            total = total + fut.result()
            if progress is not None:
                progress(done, len(futures))

    assert total.examined == factorial(n)
    return total.foldable


# ----------------------------
# Incremental insertion
# ----------------------------

def insert_segment_everywhere(base: Tuple[int, ...], segment: int) -> Iterable[Tuple[int, ...]]:
    """
    Insert `segment` into base at every layer, bottom first.
    base is a stack of segments 1..segment-1.
    """
    m = len(base)
    for layer in range(m + 1):
        yield base[:layer] + (segment,) + base[layer:]


def top_crease_is_clear(stack: Tuple[int, ...]) -> bool:
    """
    True iff the crease joining the two highest-numbered segments crosses no
    other crease on its side of the stack.
    """
    m = len(stack)
    if m < 2:
        return True
    pos = MapFolding(stack).positions()
    new = Joint.between(pos[m - 1], pos[m])
    for s in range(Parity.of_crease(m - 1).first_segment(), m - 1, 2):
        if joints_cross(Joint.between(pos[s], pos[s + 1]), new):
            return False
    return True


def count_by_insertion(n: int) -> int:
    """
    Count foldings by growing foldable stacks one segment at a time.

    Depth-first over partial stacks; only stacks whose creases are pairwise
    non-crossing are ever extended.
    """
    _check_n(n)
    if n == 0:
        return 0

    count = 0
    pending: List[Tuple[int, ...]] = [(1,)]
    while pending:
        base = pending.pop()
        if len(base) == n:
            count += 1
            continue
        segment = len(base) + 1
        for ext in insert_segment_everywhere(base, segment):
            if top_crease_is_clear(ext):
                pending.append(ext)
    return count


# ----------------------------
# Dispatch
# ----------------------------

_STRATEGIES: Dict[CountingMethod, Callable[[int], int]] = {
    CountingMethod.EXHAUSTIVE: brute_force,
    CountingMethod.INCREMENTAL: count_by_insertion,
}


def count_foldings(n: int, method: CountingMethod | str = CountingMethod.EXHAUSTIVE) -> int:
    """Count the foldings of n segments with the chosen strategy."""
    _check_n(n)
    method = CountingMethod(method)
    return _STRATEGIES[method](n)


def count_range(
    start: int,
    end: int,
    method: CountingMethod | str = CountingMethod.EXHAUSTIVE,
) -> Iterator[Tuple[int, int]]:
    """
    Yield (n, count) for n = start..end inclusive, in increasing n.

    Each n is counted from scratch. Arguments are checked on the call, not
    on the first iteration.
    """
    _check_n(start)
    method = CountingMethod(method)

    def _counts() -> Iterator[Tuple[int, int]]:
        for n in range(start, end + 1):
            t0 = time.perf_counter()
            count = count_foldings(n, method)
            logger.debug("n=%d method=%s count=%d in %.3fs", n, method.value, count, time.perf_counter() - t0)
            yield n, count

    return _counts()
