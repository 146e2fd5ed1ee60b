"""Binomial likelihood cost for success counts out of known trials."""

from __future__ import annotations

import numpy as np
from scipy.special import xlogy

from ..base import BaseCost, LikelihoodCost
from ..utils import DEFAULT_EPSILON, prefix_sums


class CostBinomial(BaseCost, LikelihoodCost):
    """Binomial likelihood cost with one success probability per segment.

    The signal has two columns: successes ``k`` and trials ``n`` per sample,
    both integers with ``0 <= k <= n`` and ``n >= 1``. With ``K`` and ``N``
    the segment totals the cost is ``-(K log K + (N-K) log(N-K) - N log N)``,
    the negative log-likelihood at ``p = K / N`` without binomial
    coefficients. Segments with no successes or no failures cost zero.
    """

    model = "binomial"

    def __init__(self) -> None:
        super().__init__()
        self._sum: np.ndarray | None = None

    def _fit(self, signal: np.ndarray) -> None:
        if signal.shape[1] != 2:
            raise ValueError(
                "The binomial cost expects two columns (successes, trials), "
                f"got {signal.shape[1]}."
            )
        if not np.all(np.isfinite(signal)):
            raise ValueError("Input data for the binomial cost must be finite.")
        rounded = np.round(signal)
        fractional = np.argwhere(np.abs(signal - rounded) > DEFAULT_EPSILON)
        if fractional.size:
            row, col = fractional[0]
            raise ValueError(
                "Successes and trials must be integers; "
                f"found {signal[row, col]} at sample {row}, column {col}."
            )
        successes, trials = rounded[:, 0], rounded[:, 1]
        for mask, message in (
            (trials < 1, "trials must be at least 1"),
            (successes < 0, "successes must be non-negative"),
            (successes > trials, "successes must not exceed trials"),
        ):
            bad = np.flatnonzero(mask)
            if bad.size:
                raise ValueError(f"Invalid binomial sample {bad[0]}: {message}.")
        self._sum = prefix_sums(rounded)

    def _cost(self, start: int, end: int) -> float:
        successes, trials = self._sum[end] - self._sum[start]
        failures = trials - successes
        if successes <= DEFAULT_EPSILON or failures <= DEFAULT_EPSILON:
            return 0.0
        cost = -(xlogy(successes, successes) + xlogy(failures, failures) - xlogy(trials, trials))
        if not np.isfinite(cost):
            return float("inf")
        return max(0.0, float(cost))

    def likelihood_metric(self, start: int, end: int) -> float:
        return 2.0 * self.compute_cost(start, end)

    def segment_parameter_count(self, segment_length: int) -> int:
        return 1
