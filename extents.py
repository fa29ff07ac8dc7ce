"""
Bounding-box computation for a motion script.

The head's path is replayed once with signed coordinates to find the smallest
rectangle that holds it. The simulation then runs on a grid of exactly that
size, with every coordinate shifted to be non-negative.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from grid_types import Position
from motion_parser import Operation

__all__ = ["Extents", "compute_grid_extents"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Extents:
    """Inclusive (min, max) bounds per axis."""

    row_range: tuple[int, int] = (0, 0)
    col_range: tuple[int, int] = (0, 0)

    @property
    def rows(self) -> int:
        return self.row_range[1] - self.row_range[0] + 1

    @property
    def cols(self) -> int:
        return self.col_range[1] - self.col_range[0] + 1

    def include(self, pos: Position) -> Extents:
        return Extents(
            (min(self.row_range[0], pos.row), max(self.row_range[1], pos.row)),
            (min(self.col_range[0], pos.col), max(self.col_range[1], pos.col)),
        )

    def normalized(self) -> Extents:
        """Same size, shifted so both ranges start at 0."""
        row_span = abs(self.row_range[0]) + self.row_range[1] + 1
        col_span = abs(self.col_range[0]) + self.col_range[1] + 1
        return Extents((0, row_span - 1), (0, col_span - 1))

    def normalized_pos(self, pos: Position) -> Position:
        """Translate a raw signed position into grid coordinates."""
        return Position(pos.row + abs(self.row_range[0]), pos.col + abs(self.col_range[0]))


def compute_grid_extents(ops: Iterable[Operation]) -> Extents:
    """
    Replay head-only movement from (0, 0) and accumulate the bounding box.

    Both bounds start at (0, 0), since the head occupies it before any move.
    Operations may be single steps or multi-step moves; a straight move only
    ever extends the box at its end point.
    """
    extents = Extents()
    pos = Position()
    for op in ops:
        pos = pos + op.delta
        extents = extents.include(pos)

    logger.info(
        "compute_grid_extents: rows=%s cols=%s (grid %dx%d)",
        extents.row_range,
        extents.col_range,
        extents.rows,
        extents.cols,
    )
    return extents
