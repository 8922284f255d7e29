"""Viewport geometry: screen-to-complex mapping, zoom and pan transforms.

The grid maps onto the complex plane as

    cx = center_x + (col - cols/2) * scale / cols
    cy = center_y + (row - rows/2) * scale / cols

``cols`` is used for both axes on purpose: terminal cells are roughly
twice as tall as they are wide, and dividing by the column count keeps
the picture close to square on a typical terminal.

All transforms are pure and return a new Viewport.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

import numpy as np

# Number of grid columns moved per pan command
PAN_CELLS = 5

# Keyboard zoom factors (< 1 zooms in, > 1 zooms out)
ZOOM_IN_FACTOR = 0.1
ZOOM_OUT_FACTOR = 1.0 / ZOOM_IN_FACTOR


@dataclass(frozen=True)
class Viewport:
    """Visible region of the complex plane.

    ``scale`` is the real-axis width spread across the grid's columns and
    must stay positive.
    """

    center_x: float = -0.5
    center_y: float = 0.0
    scale: float = 3.0


@dataclass(frozen=True)
class GridDimensions:
    """Character grid size; both dimensions are at least 1."""

    rows: int
    cols: int


@dataclass(frozen=True)
class ScreenAnchor:
    """Grid cell that stays fixed during a zoom (sx = column, sy = row)."""

    sx: int
    sy: int


DEFAULT_VIEWPORT = Viewport()


def to_complex(
    row: float,
    col: float,
    grid: GridDimensions,
    view: Viewport,
) -> tuple[float, float]:
    """Map a grid cell to its point (cx, cy) in the complex plane."""
    cols = float(grid.cols)
    rows = float(grid.rows)
    cx = view.center_x + (col - cols / 2.0) * view.scale / cols
    cy = view.center_y + (row - rows / 2.0) * view.scale / cols
    return cx, cy


def build_point_grid(
    grid: GridDimensions,
    view: Viewport,
) -> tuple[np.ndarray, np.ndarray]:
    """Vectorized to_complex() over the whole grid.

    Returns two (rows, cols) float64 arrays. The operation order matches
    to_complex() so both agree bit for bit.
    """
    cols = float(grid.cols)
    rows = float(grid.rows)

    col_vals = np.arange(grid.cols, dtype=np.float64)
    row_vals = np.arange(grid.rows, dtype=np.float64)

    cx_vals = view.center_x + (col_vals - cols / 2.0) * view.scale / cols
    cy_vals = view.center_y + (row_vals - rows / 2.0) * view.scale / cols

    # meshgrid: cx varies along columns, cy along rows
    cx_grid, cy_grid = np.meshgrid(cx_vals, cy_vals)
    return cx_grid, cy_grid


def zoom_at(
    view: Viewport,
    factor: float,
    grid: GridDimensions,
    anchor: ScreenAnchor,
) -> Viewport:
    """Rescale the viewport by ``factor`` keeping the point under ``anchor`` fixed.

    The anchor's complex coordinate t is computed with the old viewport; each
    center coordinate then moves along the line towards t:

        new_center = t + (old_center - t) * (new_scale / old_scale)

    No lower bound is placed on the resulting scale. Deep zooms run into
    float64 resolution long before they underflow.

    Raises:
        ValueError: if ``factor`` is not a finite positive number, which
            would flip or destroy the scale.
    """
    if not (math.isfinite(factor) and factor > 0.0):
        raise ValueError(f"Zoom factor must be finite and positive, got {factor!r}")

    old_scale = view.scale
    new_scale = old_scale * factor

    tx, ty = to_complex(anchor.sy, anchor.sx, grid, view)
    ratio = new_scale / old_scale

    return Viewport(
        center_x=tx + (view.center_x - tx) * ratio,
        center_y=ty + (view.center_y - ty) * ratio,
        scale=new_scale,
    )


def center_anchor(grid: GridDimensions) -> ScreenAnchor:
    """The cell at the grid's center (integer midpoint)."""
    return ScreenAnchor(sx=grid.cols // 2, sy=grid.rows // 2)


def zoom_center(view: Viewport, factor: float, grid: GridDimensions) -> Viewport:
    """zoom_at() anchored on the grid's center cell."""
    return zoom_at(view, factor, grid, center_anchor(grid))


def pan_step(view: Viewport, grid: GridDimensions) -> float:
    """Distance in the complex plane moved by one pan command."""
    step = view.scale / grid.cols  # one grid column in complex units
    return step * PAN_CELLS


def pan(view: Viewport, grid: GridDimensions, d_cols: int, d_rows: int) -> Viewport:
    """Translate the center by whole pan steps along each axis.

    ``d_cols`` / ``d_rows`` count pan steps (a keypress is -1, 0 or +1);
    positive values move right / down.
    """
    distance = pan_step(view, grid)
    center_x = view.center_x
    center_y = view.center_y
    if d_cols:
        center_x += distance * d_cols
    if d_rows:
        center_y += distance * d_rows
    return replace(view, center_x=center_x, center_y=center_y)
