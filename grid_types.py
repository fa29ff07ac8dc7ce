"""
Shared type definitions for the rope grid system.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# =============================================================================
# Positions and Deltas
# =============================================================================


@dataclass(frozen=True)
class Delta:
    """A signed displacement between two positions."""

    row_delta: int
    col_delta: int

    def __mul__(self, factor: int) -> Delta:
        return Delta(self.row_delta * factor, self.col_delta * factor)

    def signum(self) -> Delta:
        """Unit step towards the target: at most one cell per axis."""
        return Delta(_sign(self.row_delta), _sign(self.col_delta))

    def __str__(self) -> str:
        return f"({self.row_delta}, {self.col_delta})"


@dataclass(frozen=True)
class Position:
    """A cell coordinate. Signed before normalization, non-negative on a grid."""

    row: int = 0
    col: int = 0

    def __add__(self, delta: Delta) -> Position:
        return Position(self.row + delta.row_delta, self.col + delta.col_delta)

    def __sub__(self, other: Position) -> Delta:
        return Delta(self.row - other.row, self.col - other.col)

    def chebyshev_distance(self, other: Position) -> int:
        return max(abs(self.row - other.row), abs(self.col - other.col))

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


# =============================================================================
# Directions
# =============================================================================


class Direction(Enum):
    """Axis direction for moves and traversal."""

    R = "R"  # Right (increasing col)
    L = "L"  # Left (decreasing col)
    D = "D"  # Down (increasing row)
    U = "U"  # Up (decreasing row)

    @property
    def delta(self) -> Delta:
        return _DIRECTION_DELTAS[self]

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.R, Direction.L)

    @property
    def is_reversed(self) -> bool:
        """True if traversal runs towards lower indices."""
        return self in (Direction.L, Direction.U)


_DIRECTION_DELTAS = {
    Direction.R: Delta(0, 1),
    Direction.L: Delta(0, -1),
    Direction.D: Delta(1, 0),
    Direction.U: Delta(-1, 0),
}


class Direction9(Enum):
    """The 8-neighbourhood plus the centre cell."""

    UP_LEFT = (-1, -1)
    UP = (-1, 0)
    UP_RIGHT = (-1, 1)
    RIGHT = (0, 1)
    DOWN_RIGHT = (1, 1)
    DOWN = (1, 0)
    DOWN_LEFT = (1, -1)
    LEFT = (0, -1)
    CENTER = (0, 0)

    @property
    def delta(self) -> Delta:
        return Delta(*self.value)
