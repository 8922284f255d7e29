"""Keyboard controls: command set, key bindings, and their effect on the viewport."""

from __future__ import annotations

import curses
import enum

from fractal.viewport import (
    GridDimensions, Viewport, ZOOM_IN_FACTOR, ZOOM_OUT_FACTOR, pan, zoom_center,
)


class Command(enum.Enum):
    """Commands understood by the explorer loop."""

    PAN_UP = "pan_up"
    PAN_DOWN = "pan_down"
    PAN_LEFT = "pan_left"
    PAN_RIGHT = "pan_right"
    ZOOM_IN = "zoom_in"
    ZOOM_OUT = "zoom_out"
    QUIT = "quit"


KEY_BINDINGS: dict[int, Command] = {
    curses.KEY_UP: Command.PAN_UP,
    curses.KEY_DOWN: Command.PAN_DOWN,
    curses.KEY_LEFT: Command.PAN_LEFT,
    curses.KEY_RIGHT: Command.PAN_RIGHT,
    ord("k"): Command.PAN_UP,
    ord("j"): Command.PAN_DOWN,
    ord("h"): Command.PAN_LEFT,
    ord("l"): Command.PAN_RIGHT,
    ord("z"): Command.ZOOM_IN,
    ord("x"): Command.ZOOM_OUT,
    ord("q"): Command.QUIT,
}

HELP_TEXT = "arrows/hjkl: pan  z: zoom in  x: zoom out  q: quit"

# (d_cols, d_rows) per pan command
_PAN_DIRECTIONS = {
    Command.PAN_UP: (0, -1),
    Command.PAN_DOWN: (0, 1),
    Command.PAN_LEFT: (-1, 0),
    Command.PAN_RIGHT: (1, 0),
}


def command_for_key(key: int) -> Command | None:
    """Look up the command bound to a curses key code (None if unbound)."""
    return KEY_BINDINGS.get(key)


def apply_command(view: Viewport, command: Command, grid: GridDimensions) -> Viewport:
    """Return the viewport after a pan/zoom command.

    QUIT leaves the viewport unchanged; stopping the loop is the caller's job.
    """
    if command in _PAN_DIRECTIONS:
        d_cols, d_rows = _PAN_DIRECTIONS[command]
        return pan(view, grid, d_cols, d_rows)
    if command is Command.ZOOM_IN:
        return zoom_center(view, ZOOM_IN_FACTOR, grid)
    if command is Command.ZOOM_OUT:
        return zoom_center(view, ZOOM_OUT_FACTOR, grid)
    return view
