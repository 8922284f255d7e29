"""NumPy vectorized escape-time backend.

All points of the grid advance through each iteration simultaneously.
Points that have escaped are frozen by a boolean mask, so the work per
step shrinks as the orbit population thins out.

The arithmetic duplicates compute.classify() operation for operation, in
float64, so the counts match the scalar reference exactly. See
test_numpy_backend.py for cross-validation tests.
"""

from __future__ import annotations

import numpy as np

from fractal.compute import ESCAPE_RADIUS_SQ, MAX_ITER


class NumpyBackend:
    """Pure NumPy vectorized escape-time backend."""

    def escape_counts(
        self,
        cx: np.ndarray,
        cy: np.ndarray,
        max_iter: int = MAX_ITER,
    ) -> np.ndarray:
        """Return escape iteration counts for every point.

        Args:
            cx: float64 array of real parts.
            cy: float64 array of imaginary parts, same shape as ``cx``.
            max_iter: Iteration bound.

        Returns:
            int32 array shaped like ``cx``.
        """
        return escape_counts_batch(cx, cy, max_iter)


def escape_counts_batch(
    cx: np.ndarray,
    cy: np.ndarray,
    max_iter: int = MAX_ITER,
) -> np.ndarray:
    """Masked vectorized escape-time iteration over flattened points."""
    cx = np.asarray(cx, dtype=np.float64)
    cy = np.asarray(cy, dtype=np.float64)
    shape = cx.shape

    c_re = cx.ravel()
    c_im = cy.ravel()
    n_points = c_re.shape[0]

    x = np.zeros(n_points, dtype=np.float64)
    y = np.zeros(n_points, dtype=np.float64)
    counts = np.zeros(n_points, dtype=np.int32)

    # Indices of orbits still inside the escape circle
    active = np.arange(n_points)

    with np.errstate(over="ignore", invalid="ignore"):
        for _ in range(max_iter):
            xa = x[active]
            ya = y[active]
            inside = xa * xa + ya * ya <= ESCAPE_RADIUS_SQ
            if not inside.all():
                active = active[inside]
                xa = xa[inside]
                ya = ya[inside]
            if active.size == 0:
                break

            x_t = xa * xa - ya * ya + c_re[active]
            y[active] = 2 * xa * ya + c_im[active]
            x[active] = x_t
            counts[active] += 1

    return counts.reshape(shape)
