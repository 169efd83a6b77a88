"""
Rotation and reflection checks for route finding.

The edge rule treats all four sides alike, so rotating or mirroring a map
must not change how many routes it has, nor the shape of each route's trace.
"""

import random
from typing import Callable

import pytest

from bouncy_walls import find_routes, trace
from cell_parser import format_cells, parse_cells
from cell_types import TRACE_BACKSLASH, TRACE_SLASH, Grid
from route_session import SAMPLE_MAP

SMALL_ROOM = "bbbb\nb..b\nb..b\nbbbb"

WIDE_ROOM = """
bbbbbbbbb
b.......b
b..~.,..b
b.......b
bbbbbbbbb
"""


# =============================================================================
# Rotation Utilities
# =============================================================================


def rotate_grid_90(grid: Grid) -> Grid:
    """
    Rotate a Grid 90° clockwise.

    Position (y, x) → (x, height - 1 - y)
    """
    kinds = [grid.kinds[0]] * len(grid)
    for y in range(grid.height):
        for x in range(grid.width):
            kinds[x * grid.height + (grid.height - 1 - y)] = grid.kinds[y * grid.width + x]
    return Grid(grid.width, grid.height, tuple(kinds))


def mirror_grid(grid: Grid) -> Grid:
    """Mirror a Grid left to right."""
    return Grid(grid.height, grid.width, tuple(kind for row in grid.rows() for kind in reversed(row)))


def traced_cells(grid: Grid) -> list[frozenset[tuple[int, int]]]:
    """Cells covered by each route, as a sorted list of cell sets."""
    shapes = []
    for representative in find_routes(grid):
        mask = trace(grid, representative)
        shapes.append(
            frozenset(
                (y, x)
                for y in range(grid.height)
                for x in range(grid.width)
                if mask[y * grid.width + x]
            )
        )
    return sorted(shapes, key=sorted)


def rotate_cells_90(cells: frozenset[tuple[int, int]], height: int) -> frozenset[tuple[int, int]]:
    return frozenset((x, height - 1 - y) for y, x in cells)


def seeded_map(seed: int) -> Grid:
    rng = random.Random(seed)
    height = rng.randint(4, 12)
    width = rng.randint(4, 12)
    inner = [
        "b" + "".join(rng.choice("......b#~") for _ in range(width - 2)) + "b"
        for _ in range(height - 2)
    ]
    return parse_cells("\n".join(["b" * width, *inner, "b" * width]))


MAPS: list[Callable[[], Grid]] = [
    lambda: parse_cells(SAMPLE_MAP),
    lambda: parse_cells(SMALL_ROOM),
    lambda: parse_cells(WIDE_ROOM),
]


# =============================================================================
# Tests
# =============================================================================


class TestRotationUtilities:
    """Sanity checks for the helpers themselves."""

    def test_rotate_small_grid(self) -> None:
        """A 2x3 map becomes 3x2."""
        grid = parse_cells("b.#\n~,.")

        assert format_cells(rotate_grid_90(grid)) == "~b\n,.\n.#"

    def test_four_rotations_are_identity(self) -> None:
        """Rotating four times returns the original grid."""
        grid = parse_cells(SAMPLE_MAP)
        rotated = grid
        for _ in range(4):
            rotated = rotate_grid_90(rotated)

        assert rotated == grid

    def test_mirror_twice_is_identity(self) -> None:
        grid = parse_cells(SAMPLE_MAP)

        assert mirror_grid(mirror_grid(grid)) == grid


class TestRouteSymmetry:
    """Route counts and shapes survive rotation and mirroring."""

    @pytest.mark.parametrize("make_grid", MAPS)
    def test_route_count_under_rotation(self, make_grid: Callable[[], Grid]) -> None:
        """Every rotation has the same number of routes."""
        grid = make_grid()
        expected = len(find_routes(grid))

        rotated = grid
        for _ in range(3):
            rotated = rotate_grid_90(rotated)
            assert len(find_routes(rotated)) == expected

    @pytest.mark.parametrize("make_grid", MAPS)
    def test_route_count_under_mirror(self, make_grid: Callable[[], Grid]) -> None:
        """A mirrored map has the same number of routes."""
        grid = make_grid()

        assert len(find_routes(mirror_grid(grid))) == len(find_routes(grid))

    def test_seeded_maps_have_routes(self) -> None:
        """The seeded maps used below do contain routes."""
        assert sum(len(find_routes(seeded_map(seed))) for seed in range(15)) > 0

    @pytest.mark.parametrize("seed", range(15))
    def test_route_shapes_under_rotation(self, seed: int) -> None:
        """Each route's cells rotate with the map."""
        grid = seeded_map(seed)
        rotated = rotate_grid_90(grid)

        expected = sorted(
            (rotate_cells_90(cells, grid.height) for cells in traced_cells(grid)), key=sorted
        )
        assert traced_cells(rotated) == expected

    @pytest.mark.parametrize("seed", range(15))
    def test_rotation_swaps_orientations(self, seed: int) -> None:
        """A quarter turn exchanges the two diagonal families."""
        grid = seeded_map(seed)
        rotated = rotate_grid_90(grid)

        def bit_totals(g: Grid) -> tuple[int, int]:
            backslash = slash = 0
            for representative in find_routes(g):
                mask = trace(g, representative)
                backslash += sum(1 for bits in mask if bits & TRACE_BACKSLASH)
                slash += sum(1 for bits in mask if bits & TRACE_SLASH)
            return backslash, slash

        backslash, slash = bit_totals(grid)
        assert bit_totals(rotated) == (slash, backslash)
