"""Fractal compute: escape-time classifier, ComputeBackend Protocol, backend selection.

``classify`` is the scalar reference for the escape-time iteration. The
ComputeBackend Protocol abstracts the vectorized contract used by the
renderer. Two backends are auto-selected via try/except ImportError:
  Numba > NumPy
Every backend must agree with ``classify`` element for element.
"""

from __future__ import annotations

import logging
from typing import Protocol

import numpy as np

logger = logging.getLogger(__name__)

# Iteration bound; a point that survives this many steps is "in the set"
MAX_ITER = 1000

# Squared escape radius (|z| > 2 guarantees divergence)
ESCAPE_RADIUS_SQ = 4.0

BACKEND_NAMES = ("auto", "numpy", "numba")


def classify(cx: float, cy: float, max_iter: int = MAX_ITER) -> int:
    """Return the number of iterations of z <- z^2 + c before |z|^2 > 4.

    Starts at z = 0 with c = cx + cy*i. Returns ``max_iter`` when the orbit
    stays bounded for that many steps. The loop condition is written as
    ``<= 4.0`` so that a NaN modulus terminates instead of spinning until
    ``max_iter``.
    """
    x = 0.0
    y = 0.0
    n = 0
    while x * x + y * y <= ESCAPE_RADIUS_SQ and n < max_iter:
        x_t = x * x - y * y + cx
        y = 2 * x * y + cy
        x = x_t
        n += 1
    return n


class ComputeBackend(Protocol):
    """Protocol for pluggable escape-time backends."""

    def escape_counts(
        self,
        cx: np.ndarray,
        cy: np.ndarray,
        max_iter: int = MAX_ITER,
    ) -> np.ndarray:
        """Classify every point of two same-shaped float64 arrays.

        Returns an int32 array of the same shape whose values equal
        ``classify(cx[i], cy[i], max_iter)``.
        """
        ...


def get_default_backend() -> ComputeBackend:
    """Auto-select the best available compute backend.

    Priority: Numba > NumPy.
    """
    try:
        from fractal._numba_backend import NumbaBackend
        logger.info("Using Numba compute backend")
        return NumbaBackend()
    except ImportError:
        pass

    from fractal._numpy_backend import NumpyBackend
    logger.info("Using NumPy compute backend")
    return NumpyBackend()


def get_backend(name: str = "auto") -> ComputeBackend:
    """Return the backend called ``name`` ("auto", "numpy" or "numba").

    Raises:
        ValueError: for an unknown name.
        ImportError: when "numba" is requested but numba is not installed.
    """
    if name == "auto":
        return get_default_backend()
    if name == "numpy":
        from fractal._numpy_backend import NumpyBackend
        return NumpyBackend()
    if name == "numba":
        from fractal._numba_backend import NumbaBackend
        return NumbaBackend()
    raise ValueError(
        f"Unknown backend {name!r}; expected one of {', '.join(BACKEND_NAMES)}"
    )
