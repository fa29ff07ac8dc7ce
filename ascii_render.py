"""
ASCII rendering for grids.

Draws a grid as a bordered block of characters, one character (padded to
cell_width) per cell, coloured per cell with simple_chalk.
"""

from __future__ import annotations

from typing import Callable, TypeVar

import simple_chalk as chalk  # type: ignore[import-untyped]

from forest import Forest
from grid import Grid
from grid_types import Position
from rope import RopeSimulation, Tile, TileKind

__all__ = ["render_forest", "render_grid_simple", "render_simulation", "tile_color"]

V = TypeVar("V")

Colorizer = Callable[[str], str]


def _plain(s: str) -> str:
    return s


def render_grid_simple(
    grid: Grid[V],
    title: str = "",
    cell_width: int = 1,
    highlight_pos: Position | None = None,
    cell_color: Callable[[Position, V], Colorizer] | None = None,
    border_color: Colorizer = _plain,
) -> list[str]:
    """
    Render a grid as a simple character display.

    Args:
        grid: The grid to render
        title: Optional title centred in the top border
        cell_width: Characters per cell (default 1)
        highlight_pos: Optional position to highlight
        cell_color: Optional function returning a colorizer for a cell
        border_color: Colorizer for the border

    Returns:
        List of strings representing the rendered grid lines
    """
    inner_width = grid.cols * cell_width
    title = f" {title} " if title else ""

    # Top border with title
    if title and len(title) <= inner_width:
        title_start = (inner_width - len(title)) // 2
        title_line = (
            "┌" +
            "─" * title_start +
            title +
            "─" * (inner_width - title_start - len(title)) +
            "┐"
        )
    else:
        title_line = "┌" + "─" * inner_width + "┐"

    lines = [border_color(title_line)]
    for r_idx, row in enumerate(grid.rows_of_values()):
        line_parts = [border_color("│")]
        for c_idx, value in enumerate(row):
            pos = Position(r_idx, c_idx)
            content = str(value).center(cell_width)
            if pos == highlight_pos:
                content = chalk.bgWhite.black(content)
            elif cell_color is not None:
                content = cell_color(pos, value)(content)
            line_parts.append(content)
        line_parts.append(border_color("│"))
        lines.append("".join(line_parts))

    lines.append(border_color("└" + "─" * inner_width + "┘"))
    return lines


def tile_color(pos: Position, tile: Tile) -> Colorizer:
    match tile.kind:
        case TileKind.HEAD:
            return chalk.redBright
        case TileKind.KNOT:
            return chalk.yellow
        case TileKind.VISITED:
            return chalk.green
        case TileKind.START:
            return chalk.cyan
    return chalk.white


def render_simulation(
    simulation: RopeSimulation,
    cell_width: int = 1,
    color: bool = True,
) -> str:
    """Refresh the simulation's tiles and render them."""
    simulation.update_grid()
    lines = render_grid_simple(
        simulation.grid,
        title=f"{len(simulation.knots)} knots",
        cell_width=cell_width,
        cell_color=tile_color if color else None,
        border_color=chalk.blue if color else _plain,
    )
    return "\n".join(lines)


def render_forest(forest: Forest, color: bool = True, highlight_pos: Position | None = None) -> str:
    """Render a height map with visible trees in green."""

    def visibility_color(pos: Position, height: int) -> Colorizer:
        return chalk.green if forest.is_tree_visible(pos) else chalk.blue

    lines = render_grid_simple(
        forest.heightmap,
        title="forest",
        highlight_pos=highlight_pos,
        cell_color=visibility_color if color else None,
    )
    return "\n".join(lines)
