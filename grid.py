"""
Dense fixed-size 2D grid with direction-parameterized traversal.

Cells are stored row-major in a flat list. Traversal never mutates the grid:
every traversal method returns a lazy iterator of Positions that the caller
uses to index the grid.
"""

from __future__ import annotations

from typing import Generic, Iterator, TypeVar

from grid_types import Direction, Position

__all__ = ["Grid"]

V = TypeVar("V")


class Grid(Generic[V]):
    """
    A rows x cols grid of values, addressed by Position.

    Every cell starts out holding the same default object, and fill() shares
    its value the same way. Use immutable values (ints, frozen dataclasses);
    a mutable default such as a list would be aliased by every cell.
    """

    def __init__(self, rows: int, cols: int, default: V) -> None:
        if rows < 0 or cols < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self._cells: list[V] = [default] * (rows * cols)

    # =========================================================================
    # Cell access
    # =========================================================================

    def contains(self, pos: Position) -> bool:
        return 0 <= pos.row < self.rows and 0 <= pos.col < self.cols

    def element_index(self, pos: Position) -> int:
        """Linear (row-major) index of a position."""
        if not self.contains(pos):
            raise IndexError(
                f"Position {pos} out of bounds\n"
                f"  Grid size: {self.rows} rows x {self.cols} cols"
            )
        return pos.row * self.cols + pos.col

    def pos_from_index(self, index: int) -> Position:
        """Inverse of element_index."""
        if not 0 <= index < len(self._cells):
            raise IndexError(
                f"Index {index} out of bounds\n"
                f"  Grid size: {self.rows} rows x {self.cols} cols"
            )
        return Position(index // self.cols, index % self.cols)

    def __getitem__(self, pos: Position) -> V:
        return self._cells[self.element_index(pos)]

    def __setitem__(self, pos: Position, value: V) -> None:
        self._cells[self.element_index(pos)] = value

    def __len__(self) -> int:
        return len(self._cells)

    def fill(self, value: V) -> None:
        self._cells = [value] * (self.rows * self.cols)

    # =========================================================================
    # Traversal
    # =========================================================================

    def axis_length(self, direction: Direction) -> int:
        """Number of cells along one axis walked in the given direction."""
        return self.cols if direction.is_horizontal else self.rows

    def bounds_in_direction_of(self, direction: Direction, origin: Position) -> range:
        """
        Index range along origin's axis holding the cells strictly beyond
        origin in the given direction, up to the edge of the grid.

        The range is always ascending; pos_iter_along_axis reverses it for
        L and U.
        """
        match direction:
            case Direction.R:
                return range(origin.col + 1, self.cols)
            case Direction.L:
                return range(0, origin.col)
            case Direction.D:
                return range(origin.row + 1, self.rows)
            case Direction.U:
                return range(0, origin.row)
        raise ValueError(f"Unknown direction: {direction}")

    def pos_iter_along_axis(
        self,
        axis_index: int,
        direction: Direction,
        bounds: range | None = None,
    ) -> Iterator[Position]:
        """
        Iterate positions along one row (R/L) or one column (D/U).

        Args:
            axis_index: Row number for R/L, column number for D/U
            direction: Order of traversal (ascending for R/D, descending for L/U)
            bounds: Optional sub-range of indices along the axis

        Returns:
            Lazy iterator of Positions
        """
        if bounds is None:
            bounds = range(self.axis_length(direction))
        indices = reversed(bounds) if direction.is_reversed else iter(bounds)
        if direction.is_horizontal:
            return (Position(axis_index, col) for col in indices)
        return (Position(row, axis_index) for row in indices)

    def pos_iter_from(self, origin: Position, direction: Direction) -> Iterator[Position]:
        """Positions beyond origin in the given direction, nearest first."""
        bounds = self.bounds_in_direction_of(direction, origin)
        axis_index = origin.row if direction.is_horizontal else origin.col
        return self.pos_iter_along_axis(axis_index, direction, bounds)

    def grid_pos_iter(self, direction: Direction) -> Iterator[Iterator[Position]]:
        """One axis iterator per row (R/L) or per column (D/U)."""
        axis_count = self.rows if direction.is_horizontal else self.cols
        return (self.pos_iter_along_axis(i, direction) for i in range(axis_count))

    def positions(self) -> Iterator[Position]:
        """Every position, row-major."""
        for axis in self.grid_pos_iter(Direction.R):
            yield from axis

    def rows_of_values(self) -> list[list[V]]:
        return [
            self._cells[row * self.cols:(row + 1) * self.cols]
            for row in range(self.rows)
        ]

    def __str__(self) -> str:
        return "\n".join("".join(str(v) for v in row) for row in self.rows_of_values())
