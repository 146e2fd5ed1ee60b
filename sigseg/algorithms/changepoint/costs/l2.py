"""Least-squares cost."""

from __future__ import annotations

import numpy as np

from ..base import BaseCost
from ..utils import prefix_sums

_ROUNDING = 64 * np.finfo(float).eps


class CostL2(BaseCost):
    """Least squared deviation cost.

    ``fit`` builds prefix sums of the signal and of its square so that each
    segment is scored in constant time as ``sum(x**2) - sum(x)**2 / n``.
    The signal is centered first; the cost is shift invariant and centering
    keeps the prefix sums small.

    When that difference is within the rounding error of the prefix sums the
    segment is rescored from its own samples, and residues at the rounding
    level of the segment values are zeroed, so constant segments cost exactly
    0 while small but genuine deviations are kept.
    """

    model = "l2"

    def __init__(self) -> None:
        super().__init__()
        self._sum: np.ndarray | None = None
        self._sum_sq: np.ndarray | None = None
        self._centered: np.ndarray | None = None

    def _fit(self, signal: np.ndarray) -> None:
        centered = signal - signal.mean(axis=0) if signal.shape[0] else signal
        self._centered = centered
        self._sum = prefix_sums(centered)
        self._sum_sq = prefix_sums(centered * centered)

    def _cost(self, start: int, end: int) -> float:
        n = end - start
        seg_sum = self._sum[end] - self._sum[start]
        seg_sum_sq = self._sum_sq[end] - self._sum_sq[start]
        per_dim = seg_sum_sq - seg_sum * seg_sum / n
        unresolved = per_dim <= _ROUNDING * self._sum_sq[end]
        if unresolved.any():
            per_dim = np.where(unresolved, self._direct_cost(start, end), per_dim)
        return float(per_dim.sum())

    def _direct_cost(self, start: int, end: int) -> np.ndarray:
        segment = self._centered[start:end]
        deviations = segment - segment.mean(axis=0)
        per_dim = (deviations * deviations).sum(axis=0)
        n = end - start
        noise = n * (2 * n * np.finfo(float).eps * np.abs(segment).max(axis=0)) ** 2
        return np.where(per_dim > noise, per_dim, 0.0)
