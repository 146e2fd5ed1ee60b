"""Penalised change point detection (PELT)."""

from __future__ import annotations

import logging
import math
import warnings
from typing import Callable

import numpy as np

from ..base import BaseCost, BaseEstimator
from ..costs import cost_factory
from ..exceptions import BadSegmentationParameters, DetectionCancelled, UninitializedDataError
from ..utils import sanity_check

logger = logging.getLogger(__name__)


def _check_positive_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 1:
        raise BadSegmentationParameters(f"{name} must be at least 1, got {value}")
    return int(value)


class Pelt(BaseEstimator):
    """PELT change point detection algorithm.

    Minimises the sum of segment costs plus ``penalty`` per segment over all
    partitions whose boundaries lie on the ``jump`` grid and whose segments
    hold at least ``min_size`` samples. Candidate start points that can no
    longer be optimal are pruned, which keeps the search close to linear for
    costs that are additive under segment extension. With ``jump > 1`` the
    result is only optimal over the coarser grid.

    Parameters
    ----------
    model : str, default="l2"
        Cost model name passed to :func:`cost_factory`.
    custom_cost : BaseCost, optional
        Cost instance to use instead of ``model``.
    min_size : int, default=1
        Minimum segment length.
    jump : int, default=1
        Stride of the candidate boundary grid.
    params : dict, optional
        Keyword arguments for the cost constructor.
    """

    def __init__(
        self,
        model: str = "l2",
        custom_cost: BaseCost | None = None,
        min_size: int = 1,
        jump: int = 1,
        params: dict | None = None,
    ) -> None:
        if custom_cost is not None:
            if not isinstance(custom_cost, BaseCost):
                raise TypeError(
                    f"custom_cost must be a BaseCost instance, got {type(custom_cost).__name__}"
                )
            self.cost = custom_cost
        else:
            self.cost = cost_factory(model=model, **(params or {}))
        min_size = _check_positive_int("min_size", min_size)
        self.jump = _check_positive_int("jump", jump)
        if min_size < self.cost.min_size:
            warnings.warn(
                f"min_size={min_size} is below the minimum of the {self.cost.model!r} cost; "
                f"using {self.cost.min_size}",
                UserWarning,
            )
        self.min_size = max(min_size, self.cost.min_size)
        self.n_samples: int | None = None

    def fit(self, signal) -> "Pelt":
        """Fit the cost function to ``signal`` and return ``self``."""

        if signal is None:
            raise UninitializedDataError("Data not initialized: signal is None.")
        self.cost.fit(signal)
        self.n_samples = self.cost.signal.shape[0]
        return self

    def detect(self, penalty: float, should_stop: Callable[[], bool] | None = None) -> list[int]:
        """Return the sorted change points of the fitted signal for ``penalty``.

        ``should_stop`` is polled before every candidate boundary; when it
        returns true the search is abandoned with :class:`DetectionCancelled`.
        """

        if self.n_samples is None:
            raise UninitializedDataError("fit() must be called before detect().")
        penalty = float(penalty)
        if math.isnan(penalty) or penalty < 0:
            raise ValueError(f"penalty must be non-negative, got {penalty}")
        if not sanity_check(
            n_samples=self.n_samples,
            n_bkps=1,
            jump=self.jump,
            min_size=self.min_size,
        ):
            logger.info(
                "Signal of length %d cannot hold a change point with min_size=%d and jump=%d.",
                self.n_samples,
                self.min_size,
                self.jump,
            )
            return []
        previous = self._seg(penalty, should_stop)
        return self._backtrack(previous)

    def fit_and_detect(self, signal, penalty: float) -> list[int]:
        return self.fit(signal).detect(penalty)

    def predict(self, pen: float) -> list[int]:
        return self.detect(pen)

    def fit_predict(self, signal, pen: float) -> list[int]:
        return self.fit_and_detect(signal, pen)

    def _seg(self, pen: float, should_stop: Callable[[], bool] | None) -> np.ndarray:
        """Run the pruned dynamic program.

        Returns, for every reachable boundary ``t``, the start of the last
        segment of the best partition of ``[0, t)`` (``-1`` elsewhere).
        """

        n_samples = self.n_samples
        best = np.full(n_samples + 1, np.inf)
        previous = np.full(n_samples + 1, -1, dtype=int)
        reached = np.zeros(n_samples + 1, dtype=bool)
        best[0] = 0.0
        reached[0] = True

        indices = [k for k in range(0, n_samples, self.jump) if k >= self.min_size]
        indices.append(n_samples)

        admissible: list[int] = []
        n_pruned = 0
        for bkp in indices:
            if should_stop is not None and should_stop():
                raise DetectionCancelled(f"PELT search cancelled at boundary {bkp}.")
            new_adm = (bkp - self.min_size) // self.jump * self.jump
            if not admissible or admissible[-1] != new_adm:
                admissible.append(new_adm)

            # Admissible points are ascending and ties keep the first, i.e. smallest, start.
            # A boundary reachable only through infinite costs still keeps its smallest start.
            candidates = []
            best_cost = np.inf
            best_start = -1
            for start in admissible:
                if start < 0 or not reached[start]:
                    continue
                total = best[start] + self.cost.error(start, bkp) + pen
                candidates.append((start, total))
                if best_start < 0 or total < best_cost:
                    best_cost = total
                    best_start = start
            if best_start < 0:
                continue

            best[bkp] = best_cost
            previous[bkp] = best_start
            reached[bkp] = True

            kept = [start for start, total in candidates if total <= best_cost + pen]
            n_pruned += len(candidates) - len(kept)
            admissible = kept

        logger.debug(
            "PELT finished: %d boundaries, %d start points pruned, optimal cost %.6g.",
            len(indices),
            n_pruned,
            best[n_samples],
        )
        return previous

    def _backtrack(self, previous: np.ndarray) -> list[int]:
        bkps = []
        end = self.n_samples
        while end > 0:
            start = int(previous[end])
            if start < 0:
                raise RuntimeError(f"No optimal partition ends at boundary {end}.")
            if start > 0:
                bkps.append(start)
            end = start
        return sorted(bkps)
