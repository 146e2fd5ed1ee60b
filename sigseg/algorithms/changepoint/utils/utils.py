"""Miscellaneous helpers shared by the costs and estimators."""

from __future__ import annotations

from itertools import tee
from math import ceil

import numpy as np

from ..exceptions import SegmentBoundsError, SegmentLengthError, UninitializedDataError


def pairwise(iterable):
    """Yield consecutive pairs from ``iterable``."""

    a, b = tee(iterable)
    next(b, None)
    return zip(a, b)


def sanity_check(n_samples: int, n_bkps: int, jump: int, min_size: int) -> bool:
    """Return ``True`` when segmentation parameters admit a solution."""

    if n_samples <= 0:
        return False
    if jump <= 0:
        return False
    n_admissible = n_samples // jump
    if n_bkps > n_admissible:
        return False
    if n_bkps * ceil(min_size / jump) * jump + min_size > n_samples:
        return False
    return True


def as_signal(signal) -> np.ndarray:
    """Return ``signal`` as a float array of shape ``(n_samples, n_dims)``.

    One-dimensional input is treated as a univariate series. Lists, pandas
    Series and DataFrames are converted with :func:`numpy.asarray`.
    """

    if signal is None:
        raise UninitializedDataError("Data not initialized: signal is None.")
    try:
        array = np.array(signal, dtype=float)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Signal must contain numeric values: {exc}") from exc
    if array.ndim == 0:
        raise ValueError("Signal must be one- or two-dimensional, got a scalar")
    if array.ndim == 1:
        return array.reshape(-1, 1)
    if array.ndim != 2:
        raise ValueError(f"Signal must be one- or two-dimensional, got {array.ndim} dimensions")
    return array


def resolve_bounds(
    start: int | None,
    end: int | None,
    n_samples: int,
    min_size: int = 1,
) -> tuple[int, int]:
    """Apply defaults to ``[start, end)`` and validate it against the signal."""

    start = 0 if start is None else int(start)
    end = n_samples if end is None else int(end)
    if end - start < min_size:
        raise SegmentLengthError(
            f"Segment [{start}, {end}) is too short: length must be at least {min_size}."
        )
    if start < 0 or end > n_samples:
        raise SegmentBoundsError(
            f"Segment [{start}, {end}) is out of bounds for a signal of length {n_samples}."
        )
    return start, end
