"""
Edit/select state for a route finder front end.

A front end feeds every text edit to RouteSession.edit() and every route
choice to RouteSession.select(). Each edit re-parses the whole map and
re-enumerates routes; any selected trace is dropped.
"""

from __future__ import annotations

import logging

from bouncy_walls import find_routes, trace
from cell_parser import ParseError, parse_cells
from cell_types import Grid

logger = logging.getLogger(__name__)

SAMPLE_MAP = """#bbbbbbbb##
bb......bbb
b
b.........b
b.........b
bbbb....bbb
###bbb.bb##
"""


class RouteSession:
    """
    Current grid, its routes, and the selected route's trace.

    When an edit fails to parse, error is set. By default the grid and routes
    are then cleared; with retain_on_error=True the last valid grid and its
    routes stay available until an edit parses again.
    """

    def __init__(self, text: str = SAMPLE_MAP, retain_on_error: bool = False) -> None:
        self.retain_on_error = retain_on_error
        self.text = ""
        self._grid: Grid | None = None
        self._routes: list[int] = []
        self._error: ParseError | None = None
        self._selected: int | None = None
        self._trace: bytes | None = None
        self.edit(text)

    @property
    def grid(self) -> Grid | None:
        return self._grid

    @property
    def routes(self) -> list[int]:
        return list(self._routes)

    @property
    def route_count(self) -> int:
        return len(self._routes)

    @property
    def error(self) -> ParseError | None:
        return self._error

    @property
    def selected(self) -> int | None:
        """Position in routes of the selected route, if any."""
        return self._selected

    @property
    def trace(self) -> bytes | None:
        return self._trace

    def edit(self, text: str) -> ParseError | None:
        """Replace the map text, returning the parse error if there is one."""
        self.text = text
        self._selected = None
        self._trace = None

        try:
            grid = parse_cells(text)
        except ParseError as e:
            logger.info("Map rejected (%s)", e.kind.value)
            self._error = e
            if not self.retain_on_error:
                self._grid = None
                self._routes = []
            return e

        self._error = None
        self._grid = grid
        self._routes = find_routes(grid)
        return None

    def select(self, index: int | None) -> bytes | None:
        """
        Select routes[index] and compute its trace.

        Passing None clears the selection.

        Raises:
            IndexError: If index is not a valid position in routes
        """
        if index is None:
            self._selected = None
            self._trace = None
            return None

        if self._grid is None or not 0 <= index < len(self._routes):
            raise IndexError(f"Route {index} out of range (have {len(self._routes)})")

        self._selected = index
        self._trace = trace(self._grid, self._routes[index])
        return self._trace
