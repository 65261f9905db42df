"""Foundational types for brushwork.

This module defines the small value types used throughout the generator:
- Place: integer grid coordinates (x, y)
- LR / LMR: horizontal orientation (left/right, left/mid/right)
- TB / TMB: vertical orientation (top/bottom, top/mid/bottom)

Coordinates use a y-up convention: x increases to the right, y increases
upward, and the level floor sits at negative y.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class Place(NamedTuple):
    """An integer cell coordinate in level space."""

    x: int
    y: int

    def __add__(self, other: object) -> Place:
        """Add a tuple offset to this place."""
        if isinstance(other, tuple) and len(other) == 2:
            return Place(self.x + other[0], self.y + other[1])
        return NotImplemented

    def __sub__(self, other: object) -> Place:
        """Subtract a tuple offset from this place."""
        if isinstance(other, tuple) and len(other) == 2:
            return Place(self.x - other[0], self.y - other[1])
        return NotImplemented

    @property
    def left(self) -> Place:
        return Place(self.x - 1, self.y)

    @property
    def right(self) -> Place:
        return Place(self.x + 1, self.y)

    @property
    def above(self) -> Place:
        return Place(self.x, self.y + 1)

    @property
    def below(self) -> Place:
        return Place(self.x, self.y - 1)


class LR(Enum):
    """Left or right, e.g. the rising side of a slope."""

    L = "left"
    R = "right"

    @property
    def index(self) -> int:
        """Atlas offset: L=0, R=1."""
        return _LR_INDEX[self]

    @property
    def sign(self) -> int:
        """Signed direction: L=-1, R=+1."""
        return _LR_SIGN[self]

    def flip(self) -> LR:
        """Get the opposite side."""
        return LR.R if self is LR.L else LR.L


class LMR(Enum):
    """Left, middle or right position within a horizontal span."""

    L = "left"
    M = "mid"
    R = "right"

    @property
    def index(self) -> int:
        """Atlas offset: L=0, M=1, R=2."""
        return _LMR_INDEX[self]


class TB(Enum):
    """Top or bottom."""

    T = "top"
    B = "bottom"

    @property
    def index(self) -> int:
        """Atlas offset: T=0, B=1."""
        return 0 if self is TB.T else 1


class TMB(Enum):
    """Top, middle or bottom position within a vertical span."""

    T = "top"
    M = "mid"
    B = "bottom"

    @property
    def index(self) -> int:
        """Atlas offset: T=0, M=1, B=2."""
        return _TMB_INDEX[self]


# Lookup tables for orientation properties
_LR_INDEX: dict[LR, int] = {LR.L: 0, LR.R: 1}
_LR_SIGN: dict[LR, int] = {LR.L: -1, LR.R: 1}
_LMR_INDEX: dict[LMR, int] = {LMR.L: 0, LMR.M: 1, LMR.R: 2}
_TMB_INDEX: dict[TMB, int] = {TMB.T: 0, TMB.M: 1, TMB.B: 2}
