"""Bernoulli likelihood cost for binary sequences."""

from __future__ import annotations

import numpy as np
from scipy.special import xlogy

from ..base import BaseCost, LikelihoodCost
from ..exceptions import UninitializedDataError
from ..utils import DEFAULT_EPSILON, prefix_sums


class CostBernoulli(BaseCost, LikelihoodCost):
    """Bernoulli likelihood cost with one success probability per segment.

    Samples must be 0 or 1 (within ``DEFAULT_EPSILON``). With ``S`` successes
    and ``F`` failures over ``n`` samples the metric is
    ``-2 * (S log S + F log F - n log n)``; pure segments cost zero.
    """

    model = "bernoulli"

    def __init__(self) -> None:
        super().__init__()
        self._successes: np.ndarray | None = None

    def _fit(self, signal: np.ndarray) -> None:
        near_one = np.abs(signal - 1.0) < DEFAULT_EPSILON
        near_zero = np.abs(signal) < DEFAULT_EPSILON
        invalid = np.argwhere(~(near_one | near_zero))
        if invalid.size:
            row, col = invalid[0]
            raise ValueError(
                "Input data must be 0 or 1 for the Bernoulli likelihood cost; "
                f"found {signal[row, col]} at sample {row}, dimension {col}."
            )
        self._successes = prefix_sums(near_one.astype(float))

    def _cost(self, start: int, end: int) -> float:
        n = float(end - start)
        successes = self._successes[end] - self._successes[start]
        failures = n - successes
        per_dim = -2.0 * (xlogy(successes, successes) + xlogy(failures, failures) - xlogy(n, n))
        # S == 0 or S == n gives an exact fit.
        pure = (successes < DEFAULT_EPSILON) | (failures < DEFAULT_EPSILON)
        return float(np.where(pure, 0.0, per_dim).sum())

    def likelihood_metric(self, start: int, end: int) -> float:
        return self.compute_cost(start, end)

    def segment_parameter_count(self, segment_length: int) -> int:
        if self.signal is None:
            raise UninitializedDataError("fit() must be called before segment_parameter_count().")
        return self.signal.shape[1]
