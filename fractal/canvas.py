"""Terminal canvas: curses display surface for the explorer.

Owns color-pair registration, cell drawing and the status line. The
FrameRenderer calls draw_cell() as its emit target.
"""

from __future__ import annotations

import curses
import logging

from fractal.coloring import PAIR_COLORS, shade_glyph
from fractal.viewport import GridDimensions, Viewport

logger = logging.getLogger(__name__)

# Status line layout
STATUS_ROW = 0
STATUS_FORMAT = "CPU: {cpu:5.1f}% x={x:.6f} y={y:.6f} scale={scale:.6f}"
STATUS_SEPARATOR = "  | "


class TerminalColorError(RuntimeError):
    """Raised when the terminal cannot display colors."""


class TerminalCanvas:
    """Thin wrapper over a curses window."""

    def __init__(self, stdscr):
        self._screen = stdscr

    def init_colors(self) -> None:
        """Register one color pair per band on the terminal's default background.

        Raises:
            TerminalColorError: if the terminal has no color support.
        """
        if not curses.has_colors():
            raise TerminalColorError("terminal does not support colors")

        curses.start_color()
        curses.use_default_colors()
        for pair, fg in enumerate(PAIR_COLORS, start=1):
            curses.init_pair(pair, fg, -1)
        logger.debug("Registered %d color pairs", len(PAIR_COLORS))

    def configure(self) -> None:
        """Raw-ish, non-blocking keyboard input with a hidden cursor."""
        curses.cbreak()
        curses.noecho()
        try:
            curses.curs_set(0)
        except curses.error:
            logger.debug("Terminal cannot hide the cursor")
        self._screen.keypad(True)
        self._screen.nodelay(True)

    def grid(self) -> GridDimensions:
        rows, cols = self._screen.getmaxyx()
        return GridDimensions(rows=max(rows, 1), cols=max(cols, 1))

    def draw_cell(self, row: int, col: int, shade: int, color: int) -> None:
        """Draw one glyph in the given color pair."""
        try:
            self._screen.addstr(row, col, shade_glyph(shade), curses.color_pair(color))
        except curses.error:
            # curses draws the bottom-right cell, then fails to advance the cursor
            rows, cols = self._screen.getmaxyx()
            if (row, col) != (rows - 1, cols - 1):
                raise

    def draw_status(self, cpu: float, view: Viewport, hint: str = "") -> None:
        """Status line: CPU usage, viewport, then ``hint``; cut to the window width."""
        text = STATUS_FORMAT.format(
            cpu=cpu, x=view.center_x, y=view.center_y, scale=view.scale,
        )
        if hint:
            text = f"{text}{STATUS_SEPARATOR}{hint}"
        _, cols = self._screen.getmaxyx()
        # Leave the last column free so the write never wraps
        self._screen.addstr(STATUS_ROW, 0, text[:max(cols - 1, 0)])

    def clear(self) -> None:
        self._screen.erase()

    def refresh(self) -> None:
        self._screen.refresh()

    def read_key(self) -> int:
        """Next key code, or -1 when no key is waiting."""
        return self._screen.getch()
