"""
Text map parsing for the bouncy-wall route finder.

Map format:
- One line per grid row; width is the length of the longest line
- Shorter lines are padded with vacant cells
- Leading newlines and trailing whitespace are ignored
- Characters:
  * ' ' or '.': Vacant
  * '#': Wall
  * ',', 'p', 'P': Pit
  * '~', 'w', 'W': Water
  * 'b', 'B': Bouncy wall
"""

from __future__ import annotations

from enum import Enum

from cell_types import MAX_SIZE, CellKind, Grid

__all__ = [
    "CHAR_KINDS",
    "VACANT_CHAR",
    "InvalidCharError",
    "ParseError",
    "ParseErrorKind",
    "TooLargeError",
    "format_cells",
    "parse_cells",
]

VACANT_CHAR = "."

CHAR_KINDS: dict[str, CellKind] = {
    " ": CellKind.VACANT,
    ".": CellKind.VACANT,
    "#": CellKind.WALL,
    ",": CellKind.PIT,
    "p": CellKind.PIT,
    "P": CellKind.PIT,
    "~": CellKind.WATER,
    "w": CellKind.WATER,
    "W": CellKind.WATER,
    "b": CellKind.BOUNCY_WALL,
    "B": CellKind.BOUNCY_WALL,
}


class ParseErrorKind(Enum):
    INVALID_CHAR = "invalid_char"
    TOO_LARGE = "too_large"


class ParseError(ValueError):
    """Raised when map text cannot be turned into a Grid."""

    kind: ParseErrorKind


class InvalidCharError(ParseError):
    """The map contains a character with no cell kind."""

    kind = ParseErrorKind.INVALID_CHAR

    def __init__(self, char: str, line: int, column: int, line_text: str) -> None:
        self.char = char
        self.line = line
        self.column = column
        super().__init__(
            f"Invalid character {char!r}\n"
            f"  Line {line}: \"{line_text}\"\n"
            f"  Position: column {column}\n"
            f"  Valid characters:\n"
            f"    - ' ' or '.': Vacant\n"
            f"    - '#': Wall\n"
            f"    - ',', 'p', 'P': Pit\n"
            f"    - '~', 'w', 'W': Water\n"
            f"    - 'b', 'B': Bouncy wall"
        )


class TooLargeError(ParseError):
    """The map is taller or wider than MAX_SIZE."""

    kind = ParseErrorKind.TOO_LARGE

    def __init__(self, height: int, width: int) -> None:
        self.height = height
        self.width = width
        super().__init__(
            f"Map is too large: {height} rows x {width} columns\n"
            f"  Maximum: {MAX_SIZE} rows x {MAX_SIZE} columns"
        )


def parse_cells(text: str) -> Grid:
    """
    Parse a text map into a Grid.

    The size check runs before any character is examined, so an oversized
    map with bad characters reports TooLargeError.

    Args:
        text: Raw map text

    Returns:
        The parsed Grid

    Raises:
        TooLargeError: If the map has more than MAX_SIZE rows or columns
        InvalidCharError: At the first unmapped character, in row-major order
    """
    body = text.rstrip().lstrip("\n")
    lines = [line.removesuffix("\r") for line in body.split("\n")] if body else []

    height = len(lines)
    width = max((len(line) for line in lines), default=0)
    if height > MAX_SIZE or width > MAX_SIZE:
        raise TooLargeError(height, width)

    kinds: list[CellKind] = []
    for line_idx, line in enumerate(lines):
        for col_idx, char in enumerate(line.ljust(width, VACANT_CHAR)):
            kind = CHAR_KINDS.get(char)
            if kind is None:
                raise InvalidCharError(char, line_idx, col_idx, line)
            kinds.append(kind)

    return Grid(height, width, tuple(kinds))


def format_cells(grid: Grid) -> str:
    """Write a Grid back out using the canonical character of each cell."""
    return "\n".join("".join(kind.char for kind in row) for row in grid.rows())
