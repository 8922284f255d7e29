"""Frame renderer: viewport -> escape counts -> bands -> emit per cell.

The renderer knows nothing about how cells are drawn. It hands every
(row, col, shade_index, color_index) to an ``emit`` callable, one call
per cell in row-major order.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

import numpy as np

from fractal.coloring import band_grid, shade_glyph
from fractal.compute import MAX_ITER, ComputeBackend, get_default_backend
from fractal.viewport import GridDimensions, Viewport, build_point_grid

logger = logging.getLogger(__name__)

EmitFn = Callable[[int, int, int, int], None]


def compute_bands(
    grid: GridDimensions,
    view: Viewport,
    backend: ComputeBackend | None = None,
    max_iter: int = MAX_ITER,
) -> tuple[np.ndarray, np.ndarray]:
    """Return (shades, colors) arrays of shape (rows, cols) for one frame."""
    if backend is None:
        backend = get_default_backend()

    t0 = time.perf_counter()
    cx, cy = build_point_grid(grid, view)
    counts = backend.escape_counts(cx, cy, max_iter)
    shades, colors = band_grid(counts, max_iter)

    logger.debug(
        "Rendered %dx%d at x=%.6g y=%.6g scale=%.3g in %.1f ms",
        grid.cols, grid.rows, view.center_x, view.center_y, view.scale,
        (time.perf_counter() - t0) * 1000.0,
    )
    return shades, colors


def render(
    grid: GridDimensions,
    view: Viewport,
    emit: EmitFn,
    backend: ComputeBackend | None = None,
    max_iter: int = MAX_ITER,
) -> None:
    """Classify every cell and call ``emit(row, col, shade, color)`` once per cell.

    Cells are visited row-major: row 0..rows-1 outer, col 0..cols-1 inner.
    Exceptions raised by ``emit`` propagate to the caller.
    """
    shades, colors = compute_bands(grid, view, backend, max_iter)
    shade_rows = shades.tolist()
    color_rows = colors.tolist()

    for row in range(grid.rows):
        shade_row = shade_rows[row]
        color_row = color_rows[row]
        for col in range(grid.cols):
            emit(row, col, shade_row[col], color_row[col])


def render_text(
    grid: GridDimensions,
    view: Viewport,
    backend: ComputeBackend | None = None,
    max_iter: int = MAX_ITER,
) -> str:
    """Render one frame as plain PALETTE glyphs, one line per grid row."""
    lines = [[" "] * grid.cols for _ in range(grid.rows)]

    def emit(row: int, col: int, shade: int, color: int) -> None:
        lines[row][col] = shade_glyph(shade)

    render(grid, view, emit, backend, max_iter)
    return "\n".join("".join(line) for line in lines)
