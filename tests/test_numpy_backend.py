"""Tests for fractal/_numpy_backend.py: vectorized escape-time cross-validation.

Verifies that the batch iteration produces exactly the counts of the
scalar compute.classify() reference.
"""

import math

import numpy as np

from fractal.compute import MAX_ITER, classify
from fractal._numpy_backend import NumpyBackend, escape_counts_batch


class TestEscapeCountsBatch:
    """Cross-validate batch counts against scalar counts."""

    def test_known_points(self):
        cx = np.array([0.0, -1.0, 5.0, 1.0, -2.0])
        cy = np.array([0.0, 0.0, 5.0, 0.0, 0.0])
        counts = escape_counts_batch(cx, cy)
        np.testing.assert_array_equal(counts, [MAX_ITER, MAX_ITER, 1, 3, MAX_ITER])

    def test_matches_scalar_on_random_points(self):
        rng = np.random.default_rng(1234)
        cx = rng.uniform(-2.2, 0.8, size=300)
        cy = rng.uniform(-1.3, 1.3, size=300)
        counts = escape_counts_batch(cx, cy, max_iter=200)

        for i in range(cx.shape[0]):
            assert counts[i] == classify(float(cx[i]), float(cy[i]), 200), (
                f"Point {i}: batch={counts[i]}, scalar={classify(cx[i], cy[i], 200)}"
            )

    def test_matches_scalar_near_boundary(self):
        """Boundary points take many iterations; counts must still agree."""
        cx = np.linspace(-0.76, -0.74, 25)
        cy = np.full(25, 0.1)
        counts = escape_counts_batch(cx, cy)
        expected = [classify(float(x), 0.1) for x in cx]
        np.testing.assert_array_equal(counts, expected)

    def test_preserves_shape(self):
        cx = np.zeros((3, 4))
        cy = np.zeros((3, 4))
        counts = escape_counts_batch(cx, cy, max_iter=5)
        assert counts.shape == (3, 4)
        assert counts.dtype == np.int32
        assert np.all(counts == 5)

    def test_non_finite_inputs(self):
        cx = np.array([math.nan, math.inf, 0.0])
        cy = np.array([0.0, 0.0, math.nan])
        counts = escape_counts_batch(cx, cy)
        expected = [classify(float(a), float(b)) for a, b in zip(cx, cy)]
        np.testing.assert_array_equal(counts, expected)

    def test_empty_input(self):
        counts = escape_counts_batch(np.zeros(0), np.zeros(0))
        assert counts.shape == (0,)


class TestNumpyBackend:
    """Test the backend wrapper."""

    def test_escape_counts_delegates(self):
        backend = NumpyBackend()
        cx = np.array([[0.0, 5.0]])
        cy = np.array([[0.0, 5.0]])
        counts = backend.escape_counts(cx, cy)
        np.testing.assert_array_equal(counts, [[MAX_ITER, 1]])

    def test_custom_max_iter(self):
        backend = NumpyBackend()
        counts = backend.escape_counts(np.zeros(2), np.zeros(2), max_iter=7)
        np.testing.assert_array_equal(counts, [7, 7])
