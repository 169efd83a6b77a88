"""
ASCII rendering for bouncy-wall grids and route traces.

Each cell is one character: its canonical map character, or on a traced cell
the diagonal glyph of the orientation the route follows there.
"""

from __future__ import annotations

import logging
from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from cell_types import TRACE_BACKSLASH, TRACE_SLASH, CellKind, Grid, Orientation

logger = logging.getLogger(__name__)

Colorizer = Callable[[str], str]

KIND_COLORS: dict[CellKind, Colorizer] = {
    CellKind.VACANT: lambda s: s,
    CellKind.WALL: chalk.blue,
    CellKind.PIT: chalk.magenta,
    CellKind.WATER: chalk.cyan,
    CellKind.BOUNCY_WALL: chalk.yellow,
}

TRACE_COLOR: Colorizer = chalk.green


def trace_glyph(bits: int) -> str | None:
    """Glyph for a trace mask byte, or None when the cell is not on the route."""
    if bits == TRACE_BACKSLASH:
        return Orientation.BACKSLASH.glyph
    if bits == TRACE_SLASH:
        return Orientation.SLASH.glyph
    if bits == TRACE_BACKSLASH | TRACE_SLASH:
        # Both orientations on one cell; not expected for a valid route
        return "X"
    return None


def render_cells(
    grid: Grid,
    trace: bytes | None = None,
    color: bool = True,
    cell_width: int = 1,
    title: str | None = None,
) -> str:
    """
    Render a grid, optionally with a route trace drawn over it.

    Args:
        grid: The grid to render
        trace: Optional per-cell mask from bouncy_walls.trace()
        color: Colour cells with simple_chalk (False gives plain text)
        cell_width: Characters per cell (glyph centred)
        title: Optional title placed in the top border

    Returns:
        Rendered string, one line per grid row plus a border
    """
    if trace is not None and len(trace) != len(grid):
        raise ValueError(f"Trace has {len(trace)} cells, grid has {len(grid)}")

    def paint(colorizer: Colorizer, text: str) -> str:
        return colorizer(text) if color else text

    inner_width = grid.width * cell_width
    top = "─" * inner_width
    if title is not None:
        label = f" {title} "
        if len(label) <= inner_width:
            start = (inner_width - len(label)) // 2
            top = "─" * start + label + "─" * (inner_width - start - len(label))

    lines = ["┌" + top + "┐"]
    for y, row in enumerate(grid.rows()):
        parts = ["│"]
        for x, kind in enumerate(row):
            bits = trace[y * grid.width + x] if trace is not None else 0
            if bits == TRACE_BACKSLASH | TRACE_SLASH:
                logger.warning("Cell (%d, %d) traced in both orientations", y, x)
            glyph = trace_glyph(bits)
            if glyph is not None:
                parts.append(paint(TRACE_COLOR, glyph.center(cell_width)))
            else:
                parts.append(paint(KIND_COLORS[kind], kind.char.center(cell_width)))
        parts.append("│")
        lines.append("".join(parts))
    lines.append("└" + "─" * inner_width + "┘")

    return "\n".join(lines)


def render_route_summary(grid: Grid, routes: list[int]) -> str:
    """One line per route: its number and representative state."""
    if not routes:
        return "No routes"

    lines: list[str] = []
    for number, index in enumerate(routes, start=1):
        vertex = grid.vertex_at(index)
        lines.append(f"#{number}: {vertex.orientation.glyph} at ({vertex.y}, {vertex.x})")
    return "\n".join(lines)
