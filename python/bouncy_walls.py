"""
Diagonal route finding over grids with bouncy walls.

A token moves only diagonally. When a diagonal step is blocked by a solid
cell it turns 90 degrees along whichever orthogonal neighbour is solid, as
long as exactly one of them is. Turning against a bouncy wall is a bounce,
tagged with the side it happened on. A route is a connected set of traversal
states that bounces on all four sides.

Three stages:
- explore: iterative depth-first search over (orientation, y, x) states
- find_routes: one representative vertex per qualifying component
- trace: per-cell orientation mask of the component around a representative
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator

from cell_types import (
    Bounce,
    CellKind,
    Grid,
    Vertex,
)

logger = logging.getLogger(__name__)

# Called once for every newly visited vertex
VisitFn = Callable[[Vertex], None]


# =============================================================================
# Edge Rule
# =============================================================================


def edges(grid: Grid, vertex: Vertex) -> Iterator[tuple[Vertex, Bounce]]:
    """
    Yield the outgoing edges of a traversal state.

    For each of the two diagonal steps (dy, dx) of the vertex's orientation:
    - Off the grid: no edge
    - Onto a non-solid cell: keep going straight, same orientation
    - Onto a solid cell: look at the vertical neighbour V = (y+dy, x) and the
      horizontal neighbour H = (y, x+dx)
      * V solid, H open: slide along the vertical wall to (y, x+dx), a TOP or
        BOTTOM bounce if both the blocker and V are bouncy walls
      * H solid, V open: slide along the horizontal wall to (y+dy, x), a LEFT
        or RIGHT bounce if both the blocker and H are bouncy walls
      * Otherwise a flat or open corner: dead end

    Args:
        grid: The grid being explored
        vertex: A state on a non-solid cell

    Yields:
        (next_vertex, bounce) pairs; bounce is Bounce(0) when the edge records
        no bounce event
    """
    y, x = vertex.y, vertex.x
    flipped = vertex.orientation.flipped

    for dy, dx in vertex.orientation.steps:
        ny, nx = y + dy, x + dx
        blocker = grid.get(ny, nx)
        if blocker is None:
            continue

        if not blocker.is_solid:
            yield Vertex(vertex.orientation, ny, nx), Bounce(0)
            continue

        vertical = grid.kinds[ny * grid.width + x]
        horizontal = grid.kinds[y * grid.width + nx]

        if vertical.is_solid and not horizontal.is_solid:
            bounce = Bounce(0)
            if blocker is CellKind.BOUNCY_WALL and vertical is CellKind.BOUNCY_WALL:
                bounce = Bounce.TOP if dy == -1 else Bounce.BOTTOM
            yield Vertex(flipped, y, nx), bounce
        elif horizontal.is_solid and not vertical.is_solid:
            bounce = Bounce(0)
            if blocker is CellKind.BOUNCY_WALL and horizontal is CellKind.BOUNCY_WALL:
                bounce = Bounce.LEFT if dx == -1 else Bounce.RIGHT
            yield Vertex(flipped, ny, x), bounce


# =============================================================================
# Search
# =============================================================================


def new_visited(grid: Grid) -> list[bool]:
    """Fresh visited array covering every vertex of the grid."""
    return [False] * grid.vertex_count


def explore(
    grid: Grid,
    start: Vertex,
    visited: list[bool],
    on_visit: VisitFn | None = None,
) -> Bounce:
    """
    Depth-first search from start, marking vertices in visited.

    Uses an explicit stack. Vertices already marked in visited are never
    expanded again, so sharing one visited array across calls explores each
    vertex at most once overall.

    Args:
        grid: The grid being explored
        start: Starting vertex, on a non-solid cell
        visited: Visited flags indexed by Grid.vertex_index, updated in place
        on_visit: Optional callback, invoked once per newly visited vertex

    Returns:
        Union of the bounce flags of every edge examined
    """
    bounce = Bounce(0)

    stack = [start]
    visited[grid.vertex_index(start)] = True

    while stack:
        vertex = stack.pop()
        if on_visit is not None:
            on_visit(vertex)

        for next_vertex, edge_bounce in edges(grid, vertex):
            bounce |= edge_bounce
            index = grid.vertex_index(next_vertex)
            if visited[index]:
                continue
            visited[index] = True
            stack.append(next_vertex)

    return bounce


# =============================================================================
# Routes and Traces
# =============================================================================


def find_routes(grid: Grid) -> list[int]:
    """
    Find one representative vertex index per route.

    Non-solid cells are scanned in row-major order, each in both
    orientations. Every unvisited vertex starts a new exploration sharing one
    visited array; if that component bounced on all four sides, the starting
    vertex is kept as its representative.
    """
    visited = new_visited(grid)
    representatives: list[int] = []

    for cell, kind in enumerate(grid.kinds):
        if kind.is_solid:
            continue
        for index in (cell, cell + len(grid)):
            if visited[index]:
                continue
            bounce = explore(grid, grid.vertex_at(index), visited)
            if bounce == Bounce.ALL:
                representatives.append(index)

    logger.debug(
        "Found %d route(s) in %dx%d grid", len(representatives), grid.height, grid.width
    )
    return representatives


def _start_vertex(grid: Grid, representative: int) -> Vertex:
    if not 0 <= representative < grid.vertex_count:
        raise ValueError(
            f"Representative {representative} out of range for {grid.height}x{grid.width} grid"
        )
    vertex = grid.vertex_at(representative)
    if grid.is_solid(vertex.y, vertex.x):
        raise ValueError(f"Representative {representative} lies on a solid cell at ({vertex.y}, {vertex.x})")
    return vertex


def trace(grid: Grid, representative: int) -> bytes:
    """
    Per-cell orientation mask of the route containing representative.

    Bit k of mask[y * width + x] is set when the route passes through (y, x)
    while following orientation k.

    Raises:
        ValueError: If representative is out of range or on a solid cell
    """
    start = _start_vertex(grid, representative)
    mask = bytearray(len(grid))

    def mark(vertex: Vertex) -> None:
        mask[vertex.y * grid.width + vertex.x] |= 1 << vertex.orientation

    explore(grid, start, new_visited(grid), mark)
    return bytes(mask)


def component_of(grid: Grid, representative: int) -> set[int]:
    """All vertex indices reachable from representative."""
    start = _start_vertex(grid, representative)
    reached: set[int] = set()
    explore(grid, start, new_visited(grid), lambda v: reached.add(grid.vertex_index(v)))
    return reached


def bounce_flags_of(grid: Grid, representative: int) -> Bounce:
    """Bounce flags observed anywhere in the component of representative."""
    return explore(grid, _start_vertex(grid, representative), new_visited(grid))
