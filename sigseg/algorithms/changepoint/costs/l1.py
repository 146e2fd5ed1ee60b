"""Least absolute deviation cost."""

from __future__ import annotations

import numpy as np

from ..base import BaseCost


class CostL1(BaseCost):
    """Least absolute deviation cost.

    The median of each segment is recomputed on every call, which keeps the
    memory footprint linear at the price of an ``O(n log n)`` evaluation.
    Robust to spikes and heavy-tailed noise.
    """

    model = "l1"

    def _fit(self, signal: np.ndarray) -> None:
        pass

    def _cost(self, start: int, end: int) -> float:
        sub = self.signal[start:end]
        med = np.median(sub, axis=0)
        return float(np.abs(sub - med).sum())
