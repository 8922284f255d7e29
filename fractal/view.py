"""Explorer view: the interaction loop for the terminal Mandelbrot explorer.

This is the coordinator for interactive mode. It:
- Owns the current Viewport and grid size
- Polls the canvas for keys and maps them to Commands
- Applies pan/zoom commands and re-renders the full frame synchronously
- Redraws the status line (CPU%, center, scale) after every poll
"""

from __future__ import annotations

import curses
import logging
import time

from fractal.canvas import TerminalCanvas
from fractal.compute import MAX_ITER, ComputeBackend, get_default_backend
from fractal.controls import HELP_TEXT, Command, apply_command, command_for_key
from fractal.render import render
from fractal.sampler import Sampler, ThrottledSampler
from fractal.viewport import DEFAULT_VIEWPORT, Viewport

logger = logging.getLogger(__name__)

# Seconds between CPU usage refreshes on the status line
DEFAULT_CPU_INTERVAL = 2.0

# Seconds to idle when no key is waiting
DEFAULT_POLL_INTERVAL = 0.02

NO_KEY = -1


class ExplorerView:
    """Interactive pan/zoom loop over a TerminalCanvas."""

    def __init__(
        self,
        canvas: TerminalCanvas,
        viewport: Viewport = DEFAULT_VIEWPORT,
        backend: ComputeBackend | None = None,
        max_iter: int = MAX_ITER,
        sampler: ThrottledSampler | None = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        self._canvas = canvas
        self._viewport = viewport
        self._backend = backend if backend is not None else get_default_backend()
        self._max_iter = max_iter
        self._sampler = sampler if sampler is not None else ThrottledSampler(
            Sampler(), DEFAULT_CPU_INTERVAL,
        )
        self._poll_interval = poll_interval
        self._grid = canvas.grid()
        self._frames = 0

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def frames_rendered(self) -> int:
        return self._frames

    # -- Loop --

    def run(self) -> Viewport:
        """Render, then process keys until QUIT. Returns the final viewport."""
        self._redraw()
        self._draw_status()

        while True:
            key = self._canvas.read_key()
            if key == curses.KEY_RESIZE:
                self._grid = self._canvas.grid()
                logger.info("Resized to %dx%d", self._grid.cols, self._grid.rows)
                self._redraw()
            else:
                command = command_for_key(key)
                if command is Command.QUIT:
                    break
                if command is not None:
                    self.handle(command)

            self._draw_status()
            if key == NO_KEY and self._poll_interval > 0:
                time.sleep(self._poll_interval)

        logger.info(
            "Exiting at x=%r y=%r scale=%r after %d frames",
            self._viewport.center_x, self._viewport.center_y,
            self._viewport.scale, self._frames,
        )
        return self._viewport

    def handle(self, command: Command) -> None:
        """Apply a pan/zoom command and re-render before returning."""
        self._viewport = apply_command(self._viewport, command, self._grid)
        logger.debug("%s -> %s", command.name, self._viewport)
        self._redraw()

    # -- Drawing --

    def _redraw(self) -> None:
        self._canvas.clear()
        render(
            self._grid, self._viewport, self._canvas.draw_cell,
            self._backend, self._max_iter,
        )
        self._frames += 1

    def _draw_status(self) -> None:
        self._canvas.draw_status(self._sampler.value(), self._viewport, HELP_TEXT)
        self._canvas.refresh()
