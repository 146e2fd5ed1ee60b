"""Poisson likelihood cost for count data."""

from __future__ import annotations

import numpy as np
from scipy.special import xlogy

from ..base import BaseCost, LikelihoodCost
from ..exceptions import UninitializedDataError
from ..utils import DEFAULT_EPSILON, prefix_sums


class CostPoisson(BaseCost, LikelihoodCost):
    """Poisson likelihood cost with one rate per segment and dimension.

    With ``S`` the segment total and ``n`` its length, the metric is
    ``2 * (S - S log S + S log n)``, i.e. ``-2 log L`` without the
    ``log(x!)`` terms, which do not depend on the segmentation. Segments
    whose total is numerically zero cost zero.
    """

    model = "poisson"

    def __init__(self) -> None:
        super().__init__()
        self._sum: np.ndarray | None = None

    def _fit(self, signal: np.ndarray) -> None:
        negative = np.argwhere(signal < -DEFAULT_EPSILON)
        if negative.size:
            row, col = negative[0]
            raise ValueError(
                "Input data must be non-negative for the Poisson likelihood cost; "
                f"found {signal[row, col]} at sample {row}, dimension {col}."
            )
        self._sum = prefix_sums(np.maximum(signal, 0.0))

    def _cost(self, start: int, end: int) -> float:
        n = end - start
        totals = self._sum[end] - self._sum[start]
        positive = totals > DEFAULT_EPSILON
        per_dim = np.where(positive, 2.0 * (totals - xlogy(totals, totals) + xlogy(totals, n)), 0.0)
        total = float(per_dim.sum())
        if not np.isfinite(total):
            return float("inf")
        return total

    def likelihood_metric(self, start: int, end: int) -> float:
        return self.compute_cost(start, end)

    def segment_parameter_count(self, segment_length: int) -> int:
        if self.signal is None:
            raise UninitializedDataError("fit() must be called before segment_parameter_count().")
        return self.signal.shape[1]
