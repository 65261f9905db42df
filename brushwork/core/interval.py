"""Half-open interval and rectangle algebra.

Box1 is a half-open integer interval [lo, hi); Box2 is a pair of Box1
forming an axis-aligned rectangle. Both are immutable and hashable so
they can be used as pydantic fields and dictionary keys.

The n_to_* helpers turn a noise scalar in [0, 1) into a discrete choice.
They are total: any input in the canonical domain yields a result, and
fitting helpers return None instead of failing when a request can't fit.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, TypeVar

from .types import LMR, TMB, Place

E = TypeVar("E", bound=Enum)


@dataclass(frozen=True)
class Box1:
    """A half-open interval [lo, hi).

    Constructing a Box1 with lo > hi is a programmer error and fails fast.
    """

    lo: int
    hi: int

    def __post_init__(self) -> None:
        assert self.lo <= self.hi, f"invalid Box1: lo={self.lo} > hi={self.hi}"

    @classmethod
    def from_point(cls, v: int) -> Box1:
        """The unit interval [v, v + 1)."""
        return cls(v, v + 1)

    @property
    def size(self) -> int:
        return self.hi - self.lo

    @property
    def is_empty(self) -> bool:
        return self.hi == self.lo

    @property
    def center(self) -> float:
        """Real-valued midpoint."""
        return self.lo + self.size / 2

    def union_cover(self, other: Box1) -> Box1:
        """Smallest interval containing both."""
        return Box1(min(self.lo, other.lo), max(self.hi, other.hi))

    def intersect(self, other: Box1) -> Box1:
        """Overlap of both intervals.

        Disjoint intervals give an empty interval placed at the nearer edge,
        so the result is always contained in both operands.
        """
        lo = max(self.lo, other.lo)
        hi = min(self.hi, other.hi)
        if hi < lo:
            hi = lo
        return Box1(lo, hi)

    def intersects(self, other: Box1) -> bool:
        """True if the intervals share at least one point."""
        return self.hi > other.lo and self.lo < other.hi and not (self.is_empty or other.is_empty)

    def contains(self, v: int) -> bool:
        return self.lo <= v < self.hi

    def contains_box(self, other: Box1) -> bool:
        """True if other lies entirely inside this interval.

        The empty interval is contained in every interval.
        """
        if other.is_empty:
            return True
        return self.lo <= other.lo and other.hi <= self.hi

    def subtract(self, other: Box1) -> tuple[Box1, ...]:
        """Remove other from this interval.

        Returns:
            Zero, one or two non-empty disjoint pieces, left to right,
            whose union is exactly self minus other.
        """
        if self.is_empty:
            return ()
        if not self.intersects(other):
            return (self,)
        pieces = []
        if self.lo < other.lo:
            pieces.append(Box1(self.lo, other.lo))
        if other.hi < self.hi:
            pieces.append(Box1(other.hi, self.hi))
        return tuple(pieces)

    def shift(self, dv: int) -> Box1:
        return Box1(self.lo + dv, self.hi + dv)

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.lo, self.hi))


@dataclass(frozen=True)
class Box2:
    """An axis-aligned rectangle built from two half-open intervals."""

    x: Box1
    y: Box1

    @classmethod
    def from_corners(cls, x0: int, y0: int, x1: int, y1: int) -> Box2:
        """Rectangle [x0, x1) x [y0, y1)."""
        return cls(Box1(x0, x1), Box1(y0, y1))

    @classmethod
    def from_point(cls, p: Place) -> Box2:
        return cls(Box1.from_point(p.x), Box1.from_point(p.y))

    @property
    def lo(self) -> Place:
        return Place(self.x.lo, self.y.lo)

    @property
    def hi(self) -> Place:
        return Place(self.x.hi, self.y.hi)

    @property
    def size(self) -> int:
        """Area in cells."""
        return self.x.size * self.y.size

    @property
    def is_empty(self) -> bool:
        return self.x.is_empty or self.y.is_empty

    @property
    def center(self) -> tuple[float, float]:
        return (self.x.center, self.y.center)

    def union_cover(self, other: Box2) -> Box2:
        return Box2(self.x.union_cover(other.x), self.y.union_cover(other.y))

    def intersect(self, other: Box2) -> Box2:
        return Box2(self.x.intersect(other.x), self.y.intersect(other.y))

    def intersects(self, other: Box2) -> bool:
        return self.x.intersects(other.x) and self.y.intersects(other.y)

    def contains(self, p: Place) -> bool:
        return self.x.contains(p[0]) and self.y.contains(p[1])

    def contains_box(self, other: Box2) -> bool:
        if other.is_empty:
            return True
        return self.x.contains_box(other.x) and self.y.contains_box(other.y)

    def subtract(self, other: Box2) -> tuple[Box2, ...]:
        """Remove other from this rectangle.

        The remainder is split into up to four disjoint bands: full-height
        slabs left and right of the overlap, then the parts below and above
        it within the overlapping columns.
        """
        if self.is_empty:
            return ()
        if not self.intersects(other):
            return (self,)
        pieces = [Box2(x, self.y) for x in self.x.subtract(other.x)]
        overlap_x = self.x.intersect(other.x)
        pieces.extend(Box2(overlap_x, y) for y in self.y.subtract(other.y))
        return tuple(pieces)

    def extend(self, n: int) -> Box2:
        """Grow by n cells on every side."""
        return Box2(Box1(self.x.lo - n, self.x.hi + n), Box1(self.y.lo - n, self.y.hi + n))

    def points(self) -> Iterator[Place]:
        """Iterate every cell, column by column from the bottom-left."""
        for x in range(self.x.lo, self.x.hi):
            for y in range(self.y.lo, self.y.hi):
                yield Place(x, y)


def lmr_of(box: Box1, v: int) -> LMR:
    """Position of v within box: first cell L, last cell R, otherwise M."""
    if v == box.lo:
        return LMR.L
    if v == box.hi - 1:
        return LMR.R
    return LMR.M


def tmb_of(box: Box1, v: int) -> TMB:
    """Vertical position of v within box (y-up): lowest B, highest T."""
    if v == box.lo:
        return TMB.B
    if v == box.hi - 1:
        return TMB.T
    return TMB.M


# -----------------------------------------------------------------------------
# Noise-to-choice helpers
# -----------------------------------------------------------------------------


def n_to_bool(n: float) -> bool:
    return n < 0.5


def n_to_enum(n: float, enum_cls: type[E]) -> E:
    """Pick an enum member, each equally likely over n in [0, 1)."""
    members = list(enum_cls)
    return members[n_to_range(n, len(members))]


def n_to_range(n: float, top: int) -> int:
    """Map n in [0, 1) to an integer in [0, top)."""
    assert top > 0, "n_to_range needs a non-empty range"
    return int(math.floor(n * top)) % top


def n_to_box1(n: float, box: Box1) -> int:
    """Map n in [0, 1) to a point inside box."""
    assert box.size > 0, f"n_to_box1 on empty interval {box}"
    return box.lo + n_to_range(n, box.size)


def n_to_fitted_box1(n: float, size: int, span: Box1) -> Box1 | None:
    """Place an interval of exactly `size` inside `span`.

    The offset is chosen by n. Returns None when size exceeds span.
    """
    if size < 0 or span.size < size:
        return None
    start = span.lo + n_to_range(n, span.size - size + 1)
    return Box1(start, start + size)


def open_ranges(span: Box1, taken: Iterable[Box1]) -> list[Box1]:
    """The pieces of span not covered by any interval in taken, left to right."""
    remaining = [span] if not span.is_empty else []
    for box in taken:
        remaining = [piece for r in remaining for piece in r.subtract(box)]
    return sorted(remaining, key=lambda b: b.lo)
