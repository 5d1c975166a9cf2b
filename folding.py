"""
folding.py

One-dimensional map foldings (the stamp-folding problem) in standard stack
notation, with a foldability test based on crossing creases.

A strip of n segments is numbered 1..n in its unfolded order. A folded state
is written as the stack of segment numbers from the bottom layer (index 0) to
the top layer. Segments s and s+1 are joined by a crease; laid out in layer
order, each crease is a joint spanning the layers of its two segments.

Creases alternate sides of the stack: odd creases (2k-1, 2k) all sit on one
side and even creases (2k, 2k+1) on the other. A stack is foldable iff no two
joints on the same side cross.

Reference: https://mathworld.wolfram.com/StampFolding.html

Run directly for a small demo:
    python folding.py
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Sequence, Tuple


class FoldingError(ValueError):
    """Base class for malformed stack orderings."""


class RangeError(FoldingError):
    """The smallest value is not 1 or the largest is not the stack length."""


class CompletenessError(FoldingError):
    """Some segment in 1..n is missing (a duplicate always implies this)."""


class Parity(str, Enum):
    """Side of the stack a crease lies on."""

    ODD = "odd"
    EVEN = "even"

    def first_segment(self) -> int:
        return 1 if self is Parity.ODD else 2

    @classmethod
    def of_crease(cls, segment: int) -> "Parity":
        """Parity of the crease joining `segment` and `segment + 1`."""
        return cls.ODD if segment % 2 == 1 else cls.EVEN


@dataclass(frozen=True, order=True)
class Joint:
    """
    Span in layer space of one crease.

    low < high are the layer indices of the two joined segments.
    """

    low: int
    high: int

    def __post_init__(self) -> None:
        if self.low >= self.high:
            raise ValueError("Joint endpoints must satisfy low < high")

    @classmethod
    def between(cls, p: int, q: int) -> "Joint":
        return cls(p, q) if p < q else cls(q, p)

    def contains(self, x: int) -> bool:
        """True iff layer x lies strictly inside the span."""
        return self.low < x < self.high

    def __str__(self) -> str:
        return f"({self.low},{self.high})"


def joints_cross(j1: Joint, j2: Joint) -> bool:
    """
    Determine if two joints cross when drawn as arcs on the same side.

    They cross iff exactly one endpoint of j2 lies strictly inside j1.
    Joints sharing an endpoint never cross.
    """
    return j1.contains(j2.low) != j1.contains(j2.high)


def _validated(stack: Iterable[int]) -> Tuple[int, ...]:
    values = tuple(operator.index(v) for v in stack)
    n = len(values)
    if n == 0:
        return values

    lo, hi = min(values), max(values)
    if lo != 1 or hi != n:
        raise RangeError(
            f"Stack of length {n} must hold values 1..{n}, got min={lo} max={hi}"
        )

    present = [False] * (n + 1)  # 0th value is unused
    for segment in values:
        present[segment] = True

    missing = [s for s in range(1, n + 1) if not present[s]]
    if missing:
        raise CompletenessError(f"Stack is missing segments {missing}")
    return values


@dataclass(frozen=True)
class MapFolding:
    """
    A one-dimensional map folding in standard stack form.

    `stack[i]` is the segment in layer i, bottom layer first. Every instance
    is validated as a permutation of 1..n and stored as a tuple. The empty
    stack is accepted as the folding of an empty strip.
    """

    stack: Tuple[int, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "stack", _validated(self.stack))

    @classmethod
    def from_stack(cls, stack: Iterable[int]) -> "MapFolding":
        """
        Validate a stack ordering and wrap it.

        Raises RangeError if min != 1 or max != len(stack), CompletenessError
        if any value in 1..n is absent, and TypeError for non-integer values.
        """
        return cls(stack=tuple(stack))

    def __len__(self) -> int:
        return len(self.stack)

    def __iter__(self) -> Iterator[int]:
        return iter(self.stack)

    def positions(self) -> List[int]:
        """
        Inverse permutation: positions[s] is the layer holding segment s.

        Index 0 is unused and holds 0.
        """
        positions = [0] * (len(self.stack) + 1)
        for layer, segment in enumerate(self.stack):
            positions[segment] = layer
        return positions

    def joints(self, parity: Parity, positions: Sequence[int] | None = None) -> List[Joint]:
        """Joints of one parity class, ordered by their lower segment number."""
        pos = self.positions() if positions is None else positions
        n = len(self.stack)
        return [
            Joint.between(pos[s], pos[s + 1])
            for s in range(parity.first_segment(), n, 2)
        ]

    def is_foldable(self) -> bool:
        """
        Return True iff no two joints of the same parity cross.

        Each class is scanned independently; a new joint is tested against
        every joint already accepted in its class and the scan stops at the
        first crossing.
        """
        pos = self.positions()
        assert len(pos) == len(self.stack) + 1

        for parity in Parity:
            accepted: List[Joint] = []
            for new in self.joints(parity, pos):
                for old in accepted:
                    if joints_cross(old, new):
                        return False
                accepted.append(new)
        return True

    def __str__(self) -> str:
        return "[" + ",".join(map(str, self.stack)) + "]"


def _demo() -> None:
    print("=== Demo: foldability ===")
    for stack in ([1, 2, 3, 4, 5, 6, 7, 8], [5, 4, 3, 6, 2, 7, 1, 8], [1, 3, 2, 4]):
        f = MapFolding.from_stack(stack)
        print(f"{f}: positions={f.positions()[1:]} foldable={f.is_foldable()}")
    print()

    print("=== Demo: validation errors ===")
    for bad in ([0, 1, 2, 3, 4], [5, 3, 1, 2, 1]):
        try:
            MapFolding.from_stack(bad)
        except FoldingError as ex:
            print(f"{type(ex).__name__}: {ex}")
    print()


if __name__ == "__main__":
    _demo()
