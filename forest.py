"""
Tree visibility and scenic scores over a height map.

Uses the same direction-parameterized traversal as the rope simulation:
whole-grid sweeps for visibility, bounded sight lines for scenic scores.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

from grid import Grid
from grid_types import Direction, Position

__all__ = ["Forest", "HeightMap", "TREE_VISIBLE", "parse_heightmap", "read_heightmap"]

logger = logging.getLogger(__name__)

HeightMap = Grid[int]

# Lower than any tree, so an edge tree is always visible from outside
TREE_VISIBLE = -1


def parse_heightmap(text: str) -> HeightMap:
    """
    Parse a block of digit rows into a height map.

    Raises:
        ValueError: On a non-digit character or rows of different lengths
    """
    lines = [line.strip() for line in text.strip().splitlines() if line.strip()]
    cols = len(lines[0]) if lines else 0

    mismatched = [(i, len(line)) for i, line in enumerate(lines) if len(line) != cols]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths in height map\n"
            f"  Expected: {cols} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Row {row_idx}: {actual_cols} columns - \"{lines[row_idx]}\"\n"
        raise ValueError(error_msg)

    heightmap: HeightMap = Grid(len(lines), cols, 0)
    for row, line in enumerate(lines):
        for col, char in enumerate(line):
            if not (char.isascii() and char.isdigit()):
                raise ValueError(
                    f"Invalid height '{char}'\n"
                    f"  Row {row}, column {col}: \"{line}\"\n"
                    f"  Heights must be single digits (0-9)"
                )
            heightmap[Position(row, col)] = int(char)
    return heightmap


class Forest:
    """A height map plus, per direction, the tallest tree in front of each cell."""

    def __init__(self, heightmap: HeightMap) -> None:
        self.heightmap = heightmap
        self.visibility_grids: dict[Direction, HeightMap] = {}

    @classmethod
    def from_text(cls, text: str) -> Forest:
        return cls(parse_heightmap(text))

    def compute_visibility_grids(self) -> None:
        """Sweep every axis in every direction, recording the max height seen so far."""
        for direction in Direction:
            blocking: HeightMap = Grid(self.heightmap.rows, self.heightmap.cols, TREE_VISIBLE)
            for axis in self.heightmap.grid_pos_iter(direction):
                max_height = TREE_VISIBLE
                for pos in axis:
                    blocking[pos] = max_height
                    max_height = max(max_height, self.heightmap[pos])
            self.visibility_grids[direction] = blocking

    def is_tree_visible(self, pos: Position) -> bool:
        if not self.visibility_grids:
            self.compute_visibility_grids()
        height = self.heightmap[pos]
        return any(height > grid[pos] for grid in self.visibility_grids.values())

    def count_visible_trees(self) -> int:
        count = sum(1 for pos in self.heightmap.positions() if self.is_tree_visible(pos))
        logger.info("count_visible_trees: %d of %d", count, len(self.heightmap))
        return count

    def viewing_distance(self, origin: Position, direction: Direction) -> int:
        """Trees seen from origin up to and including the first one as tall or taller."""
        tree_height = self.heightmap[origin]
        distance = 0
        for pos in self.heightmap.pos_iter_from(origin, direction):
            distance += 1
            if self.heightmap[pos] >= tree_height:
                break
        return distance

    def tree_scenic_score(self, origin: Position) -> int:
        return math.prod(self.viewing_distance(origin, d) for d in Direction)

    def highest_scenic_score(self) -> int:
        if len(self.heightmap) == 0:
            raise ValueError("Cannot score an empty forest")
        return max(self.tree_scenic_score(pos) for pos in self.heightmap.positions())


def read_heightmap(path: str | Path) -> HeightMap:
    """Read and parse a height map file. I/O errors propagate unchanged."""
    with open(path, encoding="utf-8") as f:
        return parse_heightmap(f.read())


def part1(path: str | Path) -> int:
    return Forest(read_heightmap(path)).count_visible_trees()


def part2(path: str | Path) -> int:
    return Forest(read_heightmap(path)).highest_scenic_score()
