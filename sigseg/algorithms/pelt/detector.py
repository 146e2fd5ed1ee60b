"""PELT change point detector with fixed or information-criteria penalties."""

from __future__ import annotations

import logging
import math

import numpy as np

from ..base import BaseSegmenter
from ..changepoint.detection import (
    Pelt,
    PenaltySelectionOptions,
    PenaltySelectionResult,
    PenaltySelector,
    SelectionMethod,
)

__all__ = ["PeltDetector"]

logger = logging.getLogger(__name__)


class PeltDetector(BaseSegmenter):
    """Change point detector wrapping :class:`Pelt`.

    Parameters
    ----------
    model : str, default="l2"
        Segment cost, one of ``"l1"``, ``"l2"``, ``"rbf"``, ``"normal"``,
        ``"poisson"``, ``"bernoulli"``, ``"binomial"`` or ``"ar"``.
    min_size : int, default=2
        Minimum segment length.
    jump : int, default=5
        Stride of the candidate change point grid.
    penalty : float or {"bic", "aic", "aicc"}, default=10.0
        Penalty per change point. A criterion name selects the penalty
        automatically; this needs a likelihood cost (``"normal"``,
        ``"poisson"``, ``"bernoulli"``, ``"binomial"`` or ``"ar"``).
    cost_params : dict, optional
        Keyword arguments forwarded to the cost constructor.
    min_penalty, max_penalty : float, optional
        Bounds of the searched penalty grid when ``penalty`` is a criterion.
    n_penalty_steps : int, default=50
        Number of penalties on the grid.
    axis : int, default=0
        Time axis of the input.

    Attributes
    ----------
    penalty_ : float
        Penalty used by the last prediction.
    selection_ : PenaltySelectionResult or None
        Full selection outcome when ``penalty`` is a criterion name.
    """

    _tags = {
        "capability:univariate": True,
        "capability:multivariate": True,
        "fit_is_empty": False,
        "returns_dense": True,
        "detector_type": "change_point_detection",
    }

    def __init__(
        self,
        *,
        model: str = "l2",
        min_size: int = 2,
        jump: int = 5,
        penalty: float | str = 10.0,
        cost_params: dict | None = None,
        min_penalty: float | None = None,
        max_penalty: float | None = None,
        n_penalty_steps: int = 50,
        axis: int = 0,
    ) -> None:
        self.penalty = penalty
        self.model = model
        self.min_size = min_size
        self.jump = jump
        self.cost_params = cost_params
        self.min_penalty = min_penalty
        self.max_penalty = max_penalty
        self.n_penalty_steps = n_penalty_steps
        self._estimator: Pelt | None = None
        self._train_signal: np.ndarray | None = None
        self._change_points: np.ndarray | None = None
        self.penalty_: float | None = None
        self.selection_: PenaltySelectionResult | None = None
        super().__init__(axis=axis)

    def _selection_method(self) -> SelectionMethod | None:
        if isinstance(self.penalty, str):
            try:
                return SelectionMethod(self.penalty)
            except ValueError:
                raise ValueError(
                    f"penalty must be a non-negative number or one of "
                    f"{[m.value for m in SelectionMethod]}, got {self.penalty!r}"
                ) from None
        penalty = float(self.penalty)
        if math.isnan(penalty) or penalty < 0:
            raise ValueError(f"penalty must be non-negative, got {self.penalty}")
        return None

    def _fit(self, X, y=None):
        method = self._selection_method()
        estimator = Pelt(
            model=self.model,
            min_size=int(self.min_size),
            jump=int(self.jump),
            params=self.cost_params,
        )
        # Penalty selection fits the cost itself during predict.
        if method is None:
            estimator.fit(X)
        self._estimator = estimator
        self._train_signal = X
        self._change_points = None
        self.penalty_ = None
        self.selection_ = None
        return self

    def _predict(self, X):
        if self._estimator is None:
            raise RuntimeError("PeltDetector must be fitted before predict")
        method = self._selection_method()
        refit = self._train_signal is None or not np.array_equal(X, self._train_signal)
        if refit:
            self._train_signal = X

        if method is None:
            if refit or self._estimator.n_samples is None:
                self._estimator.fit(X)
            self.penalty_ = float(self.penalty)
            self.selection_ = None
            bkps = self._estimator.detect(self.penalty_)
        else:
            if refit or self.selection_ is None:
                options = PenaltySelectionOptions(
                    method=method,
                    min_penalty=self.min_penalty,
                    max_penalty=self.max_penalty,
                    n_steps=int(self.n_penalty_steps),
                )
                self.selection_ = PenaltySelector(self._estimator).fit_and_select(X, options)
                self.penalty_ = self.selection_.selected_penalty
            bkps = self.selection_.optimal_breakpoints
            logger.debug("Using %s-selected penalty %.6g.", method.value, self.penalty_)

        bkps = np.asarray(bkps, dtype=int)
        bkps = np.unique(bkps[(bkps > 0) & (bkps < X.shape[0])])
        self._change_points = bkps
        return bkps

    @property
    def change_points_(self) -> np.ndarray:
        if self._change_points is None:
            raise RuntimeError("Predict must be called before accessing change_points_")
        return self._change_points.copy()
