"""Autoregressive cost fitted by least squares."""

from __future__ import annotations

import logging
import math

import numpy as np

from ..base import BaseCost, LikelihoodCost
from ..exceptions import CostFunctionError
from ..utils import VARIANCE_EPSILON

logger = logging.getLogger(__name__)


class CostAR(BaseCost, LikelihoodCost):
    """Residual sum of squares of an AR(``order``) model fitted on each segment.

    Every sample ``y[t]`` of the segment with at least ``order`` predecessors
    inside the segment is regressed on ``y[t-1], ..., y[t-order]``, plus a
    constant when ``include_intercept`` is set. Segments whose design matrix
    is rank deficient (e.g. a constant segment with an intercept) cost
    ``+inf``.

    The likelihood metric is ``n_eff * log(RSS / n_eff)`` with
    ``n_eff = n - order``, the Gaussian ``-2 log L`` of the residuals up to
    terms that only depend on the segment length.

    Parameters
    ----------
    order : int, default=1
        Number of lagged values in the regression.
    include_intercept : bool, default=True
        Whether a constant term is fitted alongside the lags.
    """

    model = "ar"

    def __init__(self, order: int = 1, include_intercept: bool = True) -> None:
        super().__init__()
        if isinstance(order, bool) or not isinstance(order, (int, np.integer)) or order < 1:
            raise ValueError(f"order must be an integer >= 1, got {order!r}")
        self.order = int(order)
        self.include_intercept = bool(include_intercept)
        self._values: np.ndarray | None = None
        self._rss: dict[tuple[int, int], float] = {}

    @property
    def min_size(self) -> int:
        # At least as many regression rows as coefficients.
        return max(self.order + 1, self.order + self._n_coefficients)

    @property
    def _n_coefficients(self) -> int:
        return self.order + int(self.include_intercept)

    def _fit(self, signal: np.ndarray) -> None:
        if signal.shape[1] != 1:
            raise ValueError(
                f"The AR cost only supports univariate signals, got {signal.shape[1]} dimensions."
            )
        if signal.shape[0] < self.order + 1:
            raise ValueError(
                f"Signal length ({signal.shape[0]}) must be at least order + 1 ({self.order + 1})."
            )
        if not np.all(np.isfinite(signal)):
            raise ValueError("Input data for the AR cost must be finite.")
        self._values = signal[:, 0]
        self._rss = {}

    def _cost(self, start: int, end: int) -> float:
        key = (start, end)
        if key not in self._rss:
            self._rss[key] = self._residual_sum_of_squares(start, end)
        return self._rss[key]

    def _residual_sum_of_squares(self, start: int, end: int) -> float:
        y = self._values[start:end]
        p = self.order
        if self.include_intercept and np.ptp(y) == 0.0:
            # Lags and intercept are collinear.
            return float("inf")
        columns = [y[p - lag : y.shape[0] - lag] for lag in range(1, p + 1)]
        if self.include_intercept:
            columns.insert(0, np.ones(y.shape[0] - p))
        design = np.column_stack(columns)
        target = y[p:]
        try:
            coefs, _, rank, _ = np.linalg.lstsq(design, target, rcond=None)
        except np.linalg.LinAlgError as exc:
            logger.error("AR(%d) least squares failed on [%d, %d): %s", p, start, end, exc)
            raise CostFunctionError(
                f"AR({p}) fit failed on segment [{start}, {end}): {exc}"
            ) from exc
        if rank < design.shape[1]:
            logger.debug("AR(%d) design on [%d, %d) is rank deficient.", p, start, end)
            return float("inf")
        residuals = target - design @ coefs
        rss = float(residuals @ residuals)
        if not math.isfinite(rss):
            return float("inf")
        return rss

    def likelihood_metric(self, start: int, end: int) -> float:
        rss = self.compute_cost(start, end)
        n_eff = (end - start) - self.order
        if not math.isfinite(rss) or n_eff <= 0:
            logger.warning("AR(%d) fit on [%d, %d) is unusable.", self.order, start, end)
            return float("inf")
        variance = rss / n_eff
        if variance < VARIANCE_EPSILON:
            logger.warning(
                "AR(%d) residual variance on [%d, %d) is %.3g; the likelihood is unbounded.",
                self.order,
                start,
                end,
                variance,
            )
            return float("inf")
        return n_eff * math.log(variance)

    def segment_parameter_count(self, segment_length: int) -> int:
        # Coefficients plus the residual variance.
        return self._n_coefficients + 1
