"""Utility helpers for the change point package."""

from .numeric import (
    DEFAULT_EPSILON,
    VARIANCE_EPSILON,
    approx_equal,
    prefix_sums,
)
from .utils import as_signal, pairwise, resolve_bounds, sanity_check

__all__ = [
    "DEFAULT_EPSILON",
    "VARIANCE_EPSILON",
    "approx_equal",
    "as_signal",
    "pairwise",
    "prefix_sums",
    "resolve_bounds",
    "sanity_check",
]
