"""Tolerance helpers used when comparing floating point statistics."""

from __future__ import annotations

import numpy as np

DEFAULT_EPSILON = 1e-9
VARIANCE_EPSILON = 1e-10


def approx_equal(a: float, b: float, epsilon: float = DEFAULT_EPSILON) -> bool:
    """Return ``True`` when ``|a - b| < epsilon``."""

    return abs(a - b) < epsilon


def prefix_sums(values: np.ndarray) -> np.ndarray:
    """Column-wise cumulative sums with a leading row of zeros.

    For a ``(n, d)`` input the result has shape ``(n + 1, d)`` so that
    ``out[end] - out[start]`` is the sum over ``[start, end)``.
    """

    out = np.zeros((values.shape[0] + 1,) + values.shape[1:], dtype=float)
    np.cumsum(values, axis=0, out=out[1:])
    return out
