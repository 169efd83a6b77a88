#!/usr/bin/env python3
"""
Demo of route finding on a few small maps.
"""

import logging

from ascii_render import render_cells, render_route_summary
from bouncy_walls import find_routes, trace
from cell_parser import ParseError, parse_cells
from route_session import SAMPLE_MAP

MAPS = dict(
    sample=SAMPLE_MAP,
    box="""
bbbbbb
b....b
b....b
b....b
b....b
bbbbbb
""",
    walls="""
######
#....#
#....#
######
""",
    pools="""
bbbbbbb
b..~..b
b.,,,.b
b..~..b
bbbbbbb
""",
    single="#",
    oversized="#\n" * 25,
    typo="bb@bb",
)


def show(name: str, text: str) -> None:
    """Parse one map and print every route it has."""
    print(f"Map: {name}")
    print("-" * 40)

    try:
        grid = parse_cells(text)
    except ParseError as e:
        print(f"Rejected ({e.kind.value}):")
        print(e)
        print()
        return

    routes = find_routes(grid)
    print(render_cells(grid, title=name))
    print(render_route_summary(grid, routes))
    for number, representative in enumerate(routes, start=1):
        print()
        print(render_cells(grid, trace(grid, representative), title=f"route {number}"))
    print()


def main() -> None:
    """Show every built-in map."""
    for name, text in MAPS.items():
        show(name, text)


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format='%(levelname)s: %(message)s')
    main()
