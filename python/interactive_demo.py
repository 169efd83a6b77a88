"""
Interactive route browser for bouncy-wall maps.
Shows a map and lets you step through its routes with keyboard commands.
"""

from __future__ import annotations

import logging
from pathlib import Path

import readchar, sys
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_cells, render_route_summary
from route_session import SAMPLE_MAP, RouteSession


class InteractiveDemo:
    """Interactive browser over the routes of one map."""

    def __init__(self, session: RouteSession, map_path: Path | None = None) -> None:
        self.session = session
        self.map_path = map_path
        self.console = Console()
        self.status_message = "Ready"
        if session.route_count:
            session.select(0)

    def generate_display(self) -> Panel:
        """Generate the current display with grid, routes and status."""
        session = self.session
        grid = session.grid

        if grid is None:
            status = Text()
            status.append("ERROR: Map could not be parsed!\n\n", style="bold red")
            status.append(str(session.error))
            status.append("\n\nKeys: R - Reload map, Q - Quit\n")
            return Panel(status, title="Bouncy Walls - Error", border_style="red")

        status = Text()
        status.append("Size: ", style="bold")
        status.append(f"{grid.height}x{grid.width}\n")
        status.append("Routes: ", style="bold")
        status.append(f"{session.route_count}\n\n")

        title = None
        if session.selected is not None:
            title = f"route {session.selected + 1}/{session.route_count}"
        grid_text = render_cells(grid, session.trace, cell_width=2, title=title)
        status.append(Text.from_ansi(grid_text))
        status.append("\n\n")
        status.append(render_route_summary(grid, session.routes))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  N - Next route\n")
        status.append("  P - Previous route\n")
        status.append("  C - Clear selection\n")
        status.append("  R - Reload map\n")
        status.append("  Q - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Bouncy Walls Route Browser", border_style="green", width=80)

    def step_route(self, delta: int) -> None:
        """Move the selection forwards or backwards, wrapping around."""
        count = self.session.route_count
        if count == 0:
            self.status_message = "✗ No routes in this map"
            return

        current = self.session.selected
        index = 0 if current is None else (current + delta) % count
        self.session.select(index)
        self.status_message = f"✓ Showing route {index + 1} of {count}"

    def reload_map(self) -> None:
        """Re-read the map file and treat it as a full edit."""
        if self.map_path is None:
            text = SAMPLE_MAP
        else:
            text = self.map_path.read_text(encoding="utf-8")

        error = self.session.edit(text)
        if error is not None:
            self.status_message = f"✗ Reload failed: {error.kind.value}"
            return

        self.status_message = f"✓ Reloaded, {self.session.route_count} route(s)"
        if self.session.route_count:
            self.session.select(0)

    def run(self) -> None:
        """Run the interactive browser."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())

                    key = readchar.readkey()

                    if key.lower() == 'q':
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key.lower() == 'n':
                        self.step_route(1)
                    elif key.lower() == 'p':
                        self.step_route(-1)
                    elif key.lower() == 'c':
                        self.session.select(None)
                        self.status_message = "Selection cleared"
                    elif key.lower() == 'r':
                        self.reload_map()
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


def render_snapshot(text: str) -> str:
    """Render a map and its first route once, without a live display."""
    session = RouteSession(text)
    if session.grid is None:
        return f"ERROR: Map rejected:\n{session.error}"

    if session.route_count:
        session.select(0)
    return (
        render_cells(session.grid, session.trace, cell_width=2)
        + "\n"
        + render_route_summary(session.grid, session.routes)
    )


def main(map_path: Path | None) -> None:
    """Run the browser on a map file, or on the sample map."""
    text = SAMPLE_MAP if map_path is None else map_path.read_text(encoding="utf-8")
    session = RouteSession(text, retain_on_error=True)
    InteractiveDemo(session, map_path).run()


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == 'sublime':
        # Running from IDE - just render the sample map and its first route
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s: %(message)s')

        print('Running from IDE - rendering sample map')
        print()

        print(render_snapshot(SAMPLE_MAP))
    else:
        main(Path(sys.argv[1]) if len(sys.argv) > 1 else None)
