"""Gaussian likelihood cost."""

from __future__ import annotations

import logging

import numpy as np

from ..base import BaseCost, LikelihoodCost
from ..exceptions import UninitializedDataError
from ..utils import VARIANCE_EPSILON, prefix_sums

logger = logging.getLogger(__name__)


class CostNormal(BaseCost, LikelihoodCost):
    """Cost based on the Gaussian log-likelihood with a per-segment mean and variance.

    For each dimension the metric is ``n * log(var_mle)``, which equals
    ``-2 * log L`` up to the ``n * (log(2 pi) + 1)`` term shared by every
    segmentation. Variances are floored at ``VARIANCE_EPSILON`` so that
    constant segments stay finite. Dimensions are treated as independent.
    """

    model = "normal"

    def __init__(self) -> None:
        super().__init__()
        self._sum: np.ndarray | None = None
        self._sum_sq: np.ndarray | None = None

    def _fit(self, signal: np.ndarray) -> None:
        self._sum = prefix_sums(signal)
        self._sum_sq = prefix_sums(signal * signal)
        logger.debug("Prefix sums computed for %d samples x %d dims.", *signal.shape)

    def _cost(self, start: int, end: int) -> float:
        n = end - start
        seg_sum = self._sum[end] - self._sum[start]
        seg_sum_sq = self._sum_sq[end] - self._sum_sq[start]
        variance = np.maximum(seg_sum_sq - seg_sum * seg_sum / n, 0.0) / n
        clamped = np.maximum(variance, VARIANCE_EPSILON)
        metric = float(np.sum(n * np.log(clamped)))
        if not np.isfinite(metric):
            logger.warning(
                "Gaussian metric is not finite for segment [%d, %d); returning +inf.", start, end
            )
            return float("inf")
        return metric

    def likelihood_metric(self, start: int, end: int) -> float:
        return self.compute_cost(start, end)

    def segment_parameter_count(self, segment_length: int) -> int:
        if self.signal is None:
            raise UninitializedDataError("fit() must be called before segment_parameter_count().")
        # mean and variance per dimension
        return 2 * self.signal.shape[1]
