"""
Rope-chain simulation on a grid sized from the motion script.

A chain of knots follows the head one unit step at a time. After every step
each knot that no longer touches the knot before it moves one cell per axis
towards it. The cells visited by the last knot are counted.

Two passes: compute_grid_extents scans the script for bounds, then the
simulation replays it inside a grid of exactly that size.
"""

from __future__ import annotations

import logging
import os
import sys
from copy import deepcopy
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Iterable

from extents import Extents, compute_grid_extents
from grid import Grid
from grid_types import Direction9, Position
from motion_parser import Operation, ParseOpError, expand_single_steps, parse_ops, read_ops

__all__ = [
    "KNOT_COUNTS",
    "RopeSimulation",
    "SimulationRun",
    "Tile",
    "TileKind",
    "count_visited",
    "main",
    "part1",
    "part1_compute",
    "part2",
    "part2_compute",
    "part_compute",
    "parse_knot_count",
    "prepare_simulation",
    "simulation_from_ops",
]

logger = logging.getLogger(__name__)

KNOT_COUNTS = dict(short=2, long=10)


# =============================================================================
# Tiles
# =============================================================================


class TileKind(IntEnum):
    """What a grid cell shows, in increasing precedence."""

    EMPTY = 0
    START = 1
    VISITED = 2
    KNOT = 3
    HEAD = 4


@dataclass(frozen=True)
class Tile:
    """A rendered grid cell. KNOT tiles carry the knot index."""

    kind: TileKind = TileKind.EMPTY
    knot: int = 0

    def rank(self) -> tuple[int, int]:
        # Lower knot index wins when knots overlap
        return (self.kind, -self.knot)

    def __str__(self) -> str:
        match self.kind:
            case TileKind.EMPTY:
                return "."
            case TileKind.START:
                return "s"
            case TileKind.VISITED:
                return "#"
            case TileKind.KNOT:
                return str(self.knot)
            case TileKind.HEAD:
                return "H"
        raise ValueError(f"Unknown tile kind: {self.kind}")


EMPTY_TILE = Tile()


# =============================================================================
# Simulation
# =============================================================================


class RopeSimulation:
    """Knot positions, the tile grid they live on, and the tail's visited set."""

    def __init__(self, start: Position, extents: Extents, knot_count: int) -> None:
        """
        Args:
            start: Starting cell of every knot, in grid coordinates
            extents: Normalized extents giving the grid size
            knot_count: Number of knots including the head (at least 2)
        """
        if knot_count < 2:
            raise ValueError(f"A rope needs at least 2 knots, got {knot_count}")
        self.grid: Grid[Tile] = Grid(extents.rows, extents.cols, EMPTY_TILE)
        self.knots: list[Position] = [start] * knot_count
        self.start = start
        self.visited: set[Position] = set()
        self.grid[start] = Tile(TileKind.START)

    @property
    def head(self) -> Position:
        return self.knots[0]

    @property
    def tail(self) -> Position:
        return self.knots[-1]

    def is_knots_touching(self, head_index: int, tail_index: int) -> bool:
        tail_pos = self.knots[tail_index]
        head_pos = self.knots[head_index]
        return any(tail_pos + d.delta == head_pos for d in Direction9)

    def move_tail_towards_head(self, head_index: int, tail_index: int) -> None:
        step = (self.knots[head_index] - self.knots[tail_index]).signum()
        self.knots[tail_index] = self.knots[tail_index] + step

    def process_op(self, op: Operation) -> None:
        """Move the head by op, let every following knot catch up, record the tail."""
        self.knots[0] = self.knots[0] + op.delta

        for front_index in range(len(self.knots) - 1):
            tail_index = front_index + 1
            if not self.is_knots_touching(front_index, tail_index):
                self.move_tail_towards_head(front_index, tail_index)

        tail = self.knots[-1]
        if not self.grid.contains(tail):
            raise IndexError(f"Tail {tail} left the {self.grid.rows}x{self.grid.cols} grid")
        self.visited.add(tail)

    def simulate(self, ops: Iterable[Operation]) -> None:
        for op in ops:
            self.process_op(op)

    def tail_visited_count(self) -> int:
        return len(self.visited)

    def reset_grid(self) -> None:
        self.grid.fill(EMPTY_TILE)

    def update_grid(self) -> None:
        """Redraw tiles from the start cell, the visited set and the knots."""
        self.reset_grid()
        self.grid[self.start] = Tile(TileKind.START)
        for pos in self.visited:
            self.grid[pos] = Tile(TileKind.VISITED)

        for knot_index, knot_pos in enumerate(self.knots):
            if knot_index == 0:
                new_tile = Tile(TileKind.HEAD)
            else:
                new_tile = Tile(TileKind.KNOT, knot_index)
            if new_tile.rank() > self.grid[knot_pos].rank():
                self.grid[knot_pos] = new_tile

    def __str__(self) -> str:
        return str(self.grid)


@dataclass
class SimulationRun:
    """A simulation together with its single-step ops and replay cursor."""

    simulation: RopeSimulation
    ops: list[Operation]
    current_op_index: int = 0

    @property
    def finished(self) -> bool:
        return self.current_op_index >= len(self.ops)

    def step(self) -> bool:
        """Apply the next op. Returns False if there was none left."""
        if self.finished:
            return False
        self.simulation.process_op(self.ops[self.current_op_index])
        self.current_op_index += 1
        return True

    def run(self) -> int:
        """Replay the remaining ops and return the visited count."""
        while self.step():
            pass
        return self.simulation.tail_visited_count()

    def copy(self) -> SimulationRun:
        return deepcopy(self)


def simulation_from_ops(ops: Iterable[Operation], knot_count: int) -> SimulationRun:
    """Set up a simulation sized to fit the given (possibly multi-step) ops."""
    single_steps = list(expand_single_steps(ops))
    extents = compute_grid_extents(single_steps)
    origin = extents.normalized_pos(Position())
    simulation = RopeSimulation(origin, extents.normalized(), knot_count)
    logger.debug(
        "simulation_from_ops: %d single steps, %d knots, start %s",
        len(single_steps),
        knot_count,
        origin,
    )
    return SimulationRun(simulation, single_steps)


def prepare_simulation(text: str, knot_count: int) -> SimulationRun:
    """
    Parse a motion script and set up a simulation sized to fit it.

    Raises:
        ParseOpError: If any line of the script is malformed
    """
    return simulation_from_ops(parse_ops(text), knot_count)


def count_visited(ops: Iterable[Operation], knot_count: int) -> int:
    count = simulation_from_ops(ops, knot_count).run()
    logger.info("count_visited: %d knots visited %d cells", knot_count, count)
    return count


def part_compute(text: str, knot_count: int) -> int:
    return count_visited(parse_ops(text), knot_count)


def part1_compute(text: str) -> int:
    return part_compute(text, KNOT_COUNTS["short"])


def part2_compute(text: str) -> int:
    return part_compute(text, KNOT_COUNTS["long"])


def part1(path: str | Path) -> int:
    return count_visited(read_ops(path), KNOT_COUNTS["short"])


def part2(path: str | Path) -> int:
    return count_visited(read_ops(path), KNOT_COUNTS["long"])


# =============================================================================
# Command line
# =============================================================================


def parse_knot_count(arg: str) -> int:
    """
    Resolve a preset name ("short", "long") or an integer of at least 2.

    Raises:
        ValueError: If arg is neither
    """
    if arg in KNOT_COUNTS:
        return KNOT_COUNTS[arg]
    if arg.isascii() and arg.isdecimal() and int(arg) >= 2:
        return int(arg)
    raise ValueError(
        f"Invalid knot count '{arg}'\n"
        f"  Expected an integer >= 2 or one of: {', '.join(KNOT_COUNTS)}"
    )


def main(argv: list[str]) -> int:
    """Usage: rope.py INPUT [KNOTS|short|long]. Prints the tail's visited count."""
    logging.basicConfig(
        level=os.environ.get("ROPEGRID_LOG_LEVEL", "WARNING").upper(),
        format="%(levelname)s: %(message)s",
    )

    if len(argv) < 2:
        print(f"usage: {argv[0]} INPUT [KNOTS|short|long]", file=sys.stderr)
        return 2

    try:
        knot_count = parse_knot_count(argv[2] if len(argv) > 2 else "short")
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    try:
        count = count_visited(read_ops(argv[1]), knot_count)
    except (OSError, UnicodeDecodeError, ParseOpError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(count)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
