"""Automatic penalty selection for PELT with information criteria."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

import numpy as np

from ..base import supports_likelihood
from ..exceptions import (
    DetectionCancelled,
    NoSuitablePenaltyError,
    PeltError,
    SegmentationError,
    UninitializedDataError,
    UnsupportedCostError,
)
from ..utils import approx_equal, as_signal, pairwise
from .pelt import Pelt

logger = logging.getLogger(__name__)


class SelectionMethod(str, Enum):
    """Information criterion used to rank candidate segmentations."""

    BIC = "bic"
    AIC = "aic"
    AICC = "aicc"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


@dataclass(frozen=True)
class PenaltySelectionOptions:
    """Penalty grid and criterion for :meth:`PenaltySelector.fit_and_select`.

    Bounds left to ``None`` are derived from the signal length and the cost's
    parameter count.
    """

    method: SelectionMethod = SelectionMethod.BIC
    min_penalty: float | None = None
    max_penalty: float | None = None
    n_steps: int = 50

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", SelectionMethod(self.method))
        if isinstance(self.n_steps, bool) or not isinstance(self.n_steps, (int, np.integer)):
            raise TypeError(f"n_steps must be an integer, got {type(self.n_steps).__name__}")
        if self.n_steps < 1:
            raise ValueError(f"n_steps must be at least 1, got {self.n_steps}")
        for name in ("min_penalty", "max_penalty"):
            value = getattr(self, name)
            if value is not None and not (math.isfinite(value) and value > 0):
                raise ValueError(f"{name} must be a positive finite number, got {value}")
        if (
            self.min_penalty is not None
            and self.max_penalty is not None
            and self.max_penalty < self.min_penalty
        ):
            raise ValueError(
                f"max_penalty ({self.max_penalty}) must not be lower than "
                f"min_penalty ({self.min_penalty})"
            )


@dataclass(frozen=True)
class PenaltyDiagnostic:
    """Outcome of one penalty on the grid.

    ``change_points`` is ``-1`` when detection failed for that penalty.
    """

    penalty: float
    score: float
    change_points: int


@dataclass(frozen=True)
class PenaltySelectionResult:
    selected_penalty: float
    optimal_breakpoints: list[int]
    method: SelectionMethod
    score: float
    diagnostics: tuple[PenaltyDiagnostic, ...] = field(default_factory=tuple)


class PenaltySelector:
    """Sweep a penalty grid and keep the segmentation with the best criterion.

    The wrapped :class:`Pelt` must carry a cost implementing
    :class:`~sigseg.algorithms.changepoint.base.LikelihoodCost`. Every
    candidate is scored as ``L + complexity`` where ``L`` is the summed
    ``-2 log-likelihood`` of its segments and the complexity term depends on
    the criterion:

    * BIC: ``k ln N``
    * AIC: ``2k``
    * AICc: ``2k + 2k(k+1)/(N-k-1)``

    with ``k`` the number of segment parameters plus the number of change
    points.
    """

    def __init__(self, estimator: Pelt) -> None:
        if estimator is None:
            raise TypeError("estimator must be a Pelt instance, got None")
        if getattr(estimator, "cost", None) is None:
            raise ValueError("estimator must carry a cost function")
        for name in ("min_size", "jump"):
            value = getattr(estimator, name, None)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
                raise ValueError(f"estimator.{name} must be an integer >= 1, got {value!r}")
        self.estimator = estimator

    def fit_and_select(
        self,
        signal,
        options: PenaltySelectionOptions,
        should_stop: Callable[[], bool] | None = None,
    ) -> PenaltySelectionResult:
        """Fit the estimator on ``signal`` and select a penalty.

        Raises
        ------
        UnsupportedCostError
            If the estimator's cost has no likelihood.
        NoSuitablePenaltyError
            If every penalty on the grid produced an infinite or NaN score.
        DetectionCancelled
            If ``should_stop`` returned true.
        """

        if signal is None:
            raise UninitializedDataError("Data not initialized: signal is None.")
        if options is None:
            raise ValueError("options must be provided")
        cost = self.estimator.cost
        if not supports_likelihood(cost):
            raise UnsupportedCostError(
                f"{type(cost).__name__} does not provide a likelihood; "
                f"{options.method.value.upper()} penalty selection is not available."
            )

        signal = as_signal(signal)
        n_samples = signal.shape[0]
        self.estimator.fit(signal)
        penalties = self._penalty_grid(n_samples, options)
        logger.info(
            "Selecting PELT penalty with %s over %d candidates in [%.6g, %.6g].",
            options.method.value.upper(),
            len(penalties),
            penalties[0],
            penalties[-1],
        )

        diagnostics = []
        segmentations = []
        for penalty in penalties:
            if should_stop is not None and should_stop():
                raise DetectionCancelled("Penalty selection cancelled.")
            try:
                bkps = self.estimator.detect(penalty, should_stop=should_stop)
            except DetectionCancelled:
                raise
            except (SegmentationError, ValueError, ArithmeticError) as exc:
                logger.warning("Skipping penalty %.6g: detection failed (%s).", penalty, exc)
                diagnostics.append(PenaltyDiagnostic(float(penalty), float("nan"), -1))
                segmentations.append(None)
                continue
            except Exception as exc:
                raise PeltError(f"PELT detection failed for penalty {penalty}: {exc}") from exc

            score = self._score(bkps, n_samples, options.method)
            logger.debug(
                "Penalty %.6g: %d change points, %s=%.6g.",
                penalty,
                len(bkps),
                options.method.value,
                score,
            )
            diagnostics.append(PenaltyDiagnostic(float(penalty), score, len(bkps)))
            segmentations.append(list(bkps))

        best = self._select(diagnostics)
        if best is None:
            logger.error(
                "No finite %s score among %d penalty candidates.",
                options.method.value.upper(),
                len(diagnostics),
            )
            raise NoSuitablePenaltyError(
                "Could not find a suitable penalty: all candidates produced "
                f"infinite/NaN scores ({len(diagnostics)} of {len(diagnostics)} unusable)."
            )

        chosen = diagnostics[best]
        logger.info(
            "Selected penalty %.6g with %d change points (%s=%.6g).",
            chosen.penalty,
            chosen.change_points,
            options.method.value,
            chosen.score,
        )
        return PenaltySelectionResult(
            selected_penalty=chosen.penalty,
            optimal_breakpoints=segmentations[best],
            method=options.method,
            score=chosen.score,
            diagnostics=tuple(diagnostics),
        )

    def _penalty_grid(self, n_samples: int, options: PenaltySelectionOptions) -> np.ndarray:
        min_penalty = options.min_penalty
        if min_penalty is None:
            n_params = self._sample_parameter_count(n_samples)
            min_penalty = max(0.1, n_params * math.log(max(2, n_samples)))
        max_penalty = options.max_penalty
        if max_penalty is None:
            n_log_n = n_samples * math.log(n_samples) if n_samples > 1 else 0.0
            max_penalty = max(n_log_n, 20.0 * min_penalty, 1.1 * min_penalty + 1.0)
        if max_penalty < min_penalty:
            raise ValueError(
                f"max_penalty ({max_penalty}) must not be lower than min_penalty ({min_penalty})"
            )
        if options.n_steps == 1:
            return np.array([min_penalty], dtype=float)
        return np.geomspace(min_penalty, max_penalty, options.n_steps)

    def _sample_parameter_count(self, n_samples: int) -> int:
        length = max(self.estimator.min_size, min(n_samples, 10))
        try:
            return int(self.estimator.cost.segment_parameter_count(length))
        except (SegmentationError, ValueError, TypeError) as exc:
            logger.debug("Parameter count unavailable (%s); assuming 2.", exc)
            return 2

    def _score(self, bkps: list[int], n_samples: int, method: SelectionMethod) -> float:
        cost = self.estimator.cost
        min_size = self.estimator.min_size
        likelihood = 0.0
        n_params = 0
        for start, end in pairwise([0] + sorted(bkps) + [n_samples]):
            if end - start < min_size:
                logger.debug("Segment [%d, %d) is shorter than min_size=%d.", start, end, min_size)
                return float("inf")
            try:
                metric = float(cost.likelihood_metric(start, end))
                n_params += int(cost.segment_parameter_count(end - start))
            except (SegmentationError, ValueError, ArithmeticError) as exc:
                logger.debug("Likelihood failed on [%d, %d): %s", start, end, exc)
                return float("inf")
            if not math.isfinite(metric):
                return float("inf")
            likelihood += metric

        k = n_params + len(bkps)
        if method is SelectionMethod.BIC:
            return likelihood + k * math.log(n_samples)
        aic = likelihood + 2.0 * k
        if method is SelectionMethod.AIC:
            return aic
        if n_samples <= k + 1:
            return float("inf")
        return aic + 2.0 * k * (k + 1) / (n_samples - k - 1)

    @staticmethod
    def _select(diagnostics: list[PenaltyDiagnostic]) -> int | None:
        best = None
        for i, diag in enumerate(diagnostics):
            if not math.isfinite(diag.score):
                continue
            if best is None:
                best = i
                continue
            current = diagnostics[best]
            if approx_equal(diag.score, current.score):
                if diag.change_points < current.change_points:
                    best = i
            elif diag.score < current.score:
                best = i
        return best
