"""
Shared type definitions for the bouncy-wall route finder.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum, IntFlag
from typing import Iterator

# Largest allowed height and width of a grid
MAX_SIZE = 24

# Bits of a trace mask byte
TRACE_BACKSLASH = 1
TRACE_SLASH = 2


class CellKind(Enum):
    """What occupies a single grid cell."""

    VACANT = "."
    WALL = "#"
    PIT = ","
    WATER = "~"
    BOUNCY_WALL = "b"

    @property
    def is_solid(self) -> bool:
        """Walls and bouncy walls block diagonal movement."""
        return self in (CellKind.WALL, CellKind.BOUNCY_WALL)

    @property
    def char(self) -> str:
        """Canonical character used when writing a grid back out."""
        return self.value


class Orientation(IntEnum):
    """Which diagonal family a traversal state is following."""

    BACKSLASH = 0  # "\": steps (-1, -1) and (+1, +1)
    SLASH = 1  # "/": steps (+1, -1) and (-1, +1)

    @property
    def flipped(self) -> Orientation:
        return Orientation(1 - self.value)

    @property
    def steps(self) -> tuple[tuple[int, int], tuple[int, int]]:
        """The two (dy, dx) steps of this family, in exploration order."""
        if self is Orientation.BACKSLASH:
            return ((-1, -1), (1, 1))
        return ((1, -1), (-1, 1))

    @property
    def glyph(self) -> str:
        return "\\" if self is Orientation.BACKSLASH else "/"


class Bounce(IntFlag):
    """Sides on which a bounce off a bouncy wall has been observed."""

    TOP = 1
    LEFT = 2
    BOTTOM = 4
    RIGHT = 8

    ALL = TOP | LEFT | BOTTOM | RIGHT


@dataclass(frozen=True)
class Vertex:
    """A traversal state: a non-solid cell plus the diagonal being followed."""

    orientation: Orientation
    y: int
    x: int


@dataclass(frozen=True)
class Grid:
    """
    An immutable rectangular grid of cell kinds.

    Cells are stored flat in row-major order. Both dimensions are bounded
    by MAX_SIZE.
    """

    height: int
    width: int
    kinds: tuple[CellKind, ...]

    def __post_init__(self) -> None:
        if not (0 <= self.height <= MAX_SIZE and 0 <= self.width <= MAX_SIZE):
            raise ValueError(
                f"Grid size {self.height}x{self.width} is outside 0..{MAX_SIZE} in some dimension"
            )
        if len(self.kinds) != self.height * self.width:
            raise ValueError(
                f"Grid of {self.height}x{self.width} needs {self.height * self.width} cells, "
                f"got {len(self.kinds)}"
            )

    def __len__(self) -> int:
        return len(self.kinds)

    def in_bounds(self, y: int, x: int) -> bool:
        return 0 <= y < self.height and 0 <= x < self.width

    def get(self, y: int, x: int) -> CellKind | None:
        """Cell kind at (y, x), or None when outside the grid."""
        if not self.in_bounds(y, x):
            return None
        return self.kinds[y * self.width + x]

    def is_solid(self, y: int, x: int) -> bool:
        kind = self.get(y, x)
        return kind is not None and kind.is_solid

    def rows(self) -> Iterator[tuple[CellKind, ...]]:
        for y in range(self.height):
            yield self.kinds[y * self.width : (y + 1) * self.width]

    # -------------------------------------------------------------------------
    # Vertex <-> linear index
    # -------------------------------------------------------------------------

    @property
    def vertex_count(self) -> int:
        return 2 * len(self.kinds)

    def vertex_index(self, vertex: Vertex) -> int:
        return vertex.orientation * len(self.kinds) + vertex.y * self.width + vertex.x

    def vertex_at(self, index: int) -> Vertex:
        if not 0 <= index < self.vertex_count:
            raise IndexError(f"Vertex index {index} out of range 0..{self.vertex_count - 1}")
        layer, cell = divmod(index, len(self.kinds))
        y, x = divmod(cell, self.width)
        return Vertex(Orientation(layer), y, x)
