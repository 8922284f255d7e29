"""Numba JIT-compiled escape-time backend.

Uses @njit for a 10-50x speedup over the NumPy backend on deep zooms,
where most points run close to MAX_ITER. This module is optional: if numba
is not installed, get_default_backend() falls back to the NumPy backend
automatically.

IMPORTANT: The JIT-compiled functions use explicit loops (not NumPy
vectorization) since Numba compiles them to native machine code. The loop
body mirrors compute.classify() exactly. Rendering stays single-threaded,
so there is no parallel=True / prange here.
"""

from __future__ import annotations

import logging

import numpy as np
from numba import njit

from fractal.compute import ESCAPE_RADIUS_SQ, MAX_ITER

logger = logging.getLogger(__name__)


@njit(cache=True)
def _classify_single(cx, cy, max_iter, radius_sq):
    """Escape-time count for a single point (Numba-compiled)."""
    x = 0.0
    y = 0.0
    n = 0
    while x * x + y * y <= radius_sq and n < max_iter:
        x_t = x * x - y * y + cx
        y = 2 * x * y + cy
        x = x_t
        n += 1
    return n


@njit(cache=True)
def _escape_counts_numba(c_re, c_im, max_iter, radius_sq):
    """Classify flattened (N,) float64 arrays, returning (N,) int32 counts."""
    n_points = c_re.shape[0]
    counts = np.zeros(n_points, dtype=np.int32)
    for i in range(n_points):
        counts[i] = _classify_single(c_re[i], c_im[i], max_iter, radius_sq)
    return counts


class NumbaBackend:
    """Numba JIT escape-time backend."""

    def escape_counts(
        self,
        cx: np.ndarray,
        cy: np.ndarray,
        max_iter: int = MAX_ITER,
    ) -> np.ndarray:
        """Return escape iteration counts for every point, shaped like ``cx``."""
        cx = np.ascontiguousarray(cx, dtype=np.float64)
        cy = np.ascontiguousarray(cy, dtype=np.float64)
        counts = _escape_counts_numba(
            cx.ravel(), cy.ravel(), int(max_iter), ESCAPE_RADIUS_SQ,
        )
        return counts.reshape(cx.shape)

    @classmethod
    def warmup(cls) -> None:
        """Trigger JIT compilation with a tiny problem so the first frame is fast."""
        tiny = np.zeros(4, dtype=np.float64)
        _escape_counts_numba(tiny, tiny, 2, ESCAPE_RADIUS_SQ)
        logger.debug("Numba escape-time kernel compiled")
