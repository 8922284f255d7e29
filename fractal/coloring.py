"""Band mapping: escape-time counts to (glyph, color pair) indices.

A count is split into PALETTE_SIZE glyph bands and COLOR_COUNT color
bands. Color pair 0 belongs to curses ("no override"), so color indices
start at 1; a count of exactly MAX_ITER lands in the extra pair
COLOR_COUNT + 1, which is how interior points get their own color.
"""

import curses

import numpy as np

from fractal.compute import MAX_ITER

# Glyphs ordered from sparse to dense (increasing iteration count)
PALETTE = " .:-=+*!/?&#%@"
PALETTE_SIZE = len(PALETTE)

# Number of color bands below MAX_ITER
COLOR_COUNT = 6

# Foreground colors for pairs 1..COLOR_COUNT+1, drawn on the default background
PAIR_COLORS = (
    curses.COLOR_BLUE,
    curses.COLOR_WHITE,
    curses.COLOR_GREEN,
    curses.COLOR_YELLOW,
    curses.COLOR_RED,
    curses.COLOR_MAGENTA,
    curses.COLOR_CYAN,
)


def band(n: int, max_iter: int = MAX_ITER) -> tuple[int, int]:
    """Return (shade_index, color_index) for an escape count ``n``."""
    shade = min(n * PALETTE_SIZE // max_iter, PALETTE_SIZE - 1)
    color = n * COLOR_COUNT // max_iter + 1
    return shade, color


def band_grid(
    counts: np.ndarray,
    max_iter: int = MAX_ITER,
) -> tuple[np.ndarray, np.ndarray]:
    """Vectorized band() over an int array of counts.

    Returns:
        (shades, colors): two int64 arrays shaped like ``counts``.
    """
    counts = np.asarray(counts, dtype=np.int64)
    shades = np.minimum(counts * PALETTE_SIZE // max_iter, PALETTE_SIZE - 1)
    colors = counts * COLOR_COUNT // max_iter + 1
    return shades, colors


def shade_glyph(shade: int) -> str:
    """Glyph for a shade index."""
    return PALETTE[shade]
