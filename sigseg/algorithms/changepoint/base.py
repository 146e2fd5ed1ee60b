"""Base classes for estimators, segment costs and the likelihood capability."""

from __future__ import annotations

import abc

import numpy as np

from .exceptions import UninitializedDataError
from .utils import as_signal, pairwise, resolve_bounds


class BaseEstimator(metaclass=abc.ABCMeta):
    """Base class for all change point detection estimators."""

    @abc.abstractmethod
    def fit(self, *args, **kwargs):
        """Fit the estimator to data."""

    @abc.abstractmethod
    def predict(self, *args, **kwargs):
        """Predict change points for previously seen data."""

    @abc.abstractmethod
    def fit_predict(self, *args, **kwargs):
        """Convenience method combining :meth:`fit` and :meth:`predict`."""


class BaseCost(metaclass=abc.ABCMeta):
    """Base class for segment cost implementations.

    Subclasses implement :meth:`_fit` to rebuild their cached statistics and
    :meth:`_cost` to evaluate an already validated segment. The public
    :meth:`fit` and :meth:`compute_cost` handle conversion, bounds checking
    and the uninitialized state.
    """

    min_size = 1

    def __init__(self) -> None:
        self.signal: np.ndarray | None = None

    @property
    @abc.abstractmethod
    def model(self) -> str:
        """Identifier used by :func:`cost_factory`."""

    @property
    def n_samples(self) -> int:
        self._check_fitted("n_samples")
        return self.signal.shape[0]

    def fit(self, signal) -> "BaseCost":
        """Prepare any cached statistics for the supplied signal.

        ``signal`` may be one-dimensional or ``(n_samples, n_dims)``. Every
        call discards the statistics of the previous signal.
        """

        self.signal = as_signal(signal)
        self._fit(self.signal)
        return self

    def compute_cost(self, start: int | None = None, end: int | None = None) -> float:
        """Return the cost of ``[start, end)``; bounds default to the whole signal."""

        self._check_fitted("compute_cost")
        start, end = resolve_bounds(start, end, self.signal.shape[0], self.min_size)
        return self._cost(start, end)

    def error(self, start: int, end: int) -> float:
        """Return the approximation cost for the segment ``[start, end)``."""

        return self.compute_cost(start, end)

    def sum_of_costs(self, bkps: list[int]) -> float:
        """Return the total cost for a segmentation defined by ``bkps``.

        ``bkps`` follows the ruptures convention and ends with ``n_samples``.
        """

        return sum(self.compute_cost(s, e) for s, e in pairwise([0] + list(bkps)))

    def _check_fitted(self, caller: str) -> None:
        if self.signal is None:
            raise UninitializedDataError(f"fit() must be called before {caller}().")

    @abc.abstractmethod
    def _fit(self, signal: np.ndarray) -> None:
        """Rebuild cached statistics for a ``(n_samples, n_dims)`` signal."""

    @abc.abstractmethod
    def _cost(self, start: int, end: int) -> float:
        """Cost of a validated, non-empty segment."""


class LikelihoodCost(metaclass=abc.ABCMeta):
    """Capability of costs that can feed information criteria.

    The likelihood metric is ``-2 * log-likelihood`` of the segment under the
    cost's model, up to additive constants that only depend on the segment
    length.
    """

    @abc.abstractmethod
    def likelihood_metric(self, start: int, end: int) -> float:
        """Return the likelihood metric of ``[start, end)``."""

    @abc.abstractmethod
    def segment_parameter_count(self, segment_length: int) -> int:
        """Return the number of free parameters fitted on one segment."""

    @property
    def supports_information_criteria(self) -> bool:
        return True


def supports_likelihood(cost) -> bool:
    """Return ``True`` when ``cost`` can be scored with BIC, AIC or AICc."""

    return isinstance(cost, LikelihoodCost) and bool(cost.supports_information_criteria)
