"""Base class for segmenters, following aeon's ``BaseSegmenter`` API.

Only the numpy/pandas conversion pathway is supported. Inputs are converted
to a float ``numpy`` array of shape ``(n_timepoints, n_channels)`` before
reaching :meth:`BaseSegmenter._fit` and :meth:`BaseSegmenter._predict`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from copy import deepcopy
from typing import Any, Dict

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator
from sklearn.exceptions import NotFittedError

__all__ = ["BaseSegmenter"]

SERIES_INPUT_TYPES = (pd.Series, pd.DataFrame, np.ndarray)


class BaseSegmenter(BaseEstimator, ABC):
	"""Base class for segmentation algorithms.

	Parameters
	----------
	axis : int
		Time axis of the input. ``0`` means one row per time point and one
		column per channel, ``1`` means one row per channel.
	"""

	_tags: Dict[str, Any] = {
		"capability:univariate": True,
		"capability:multivariate": False,
		"capability:missing_values": False,
		"fit_is_empty": True,
		"returns_dense": True,
	}

	def __init__(self, axis: int) -> None:
		if axis not in (0, 1):
			raise ValueError("axis should be 0 or 1")
		self.axis = axis
		self.is_fitted = False
		self.metadata_: Dict[str, Any] = {}
		super().__init__()

	# Tags -------------------------------------------------------------

	@classmethod
	def get_class_tags(cls) -> Dict[str, Any]:
		"""Collect class tags respecting inheritance order."""

		collected: Dict[str, Any] = {}
		for parent in reversed(cls.__mro__):
			if "_tags" in vars(parent):
				collected.update(vars(parent)["_tags"])
		return deepcopy(collected)

	def get_tag(self, tag_name: str, raise_error: bool = True, tag_value_default: Any | None = None) -> Any:
		tags = self.get_class_tags()
		if tag_name in tags:
			return tags[tag_name]
		if raise_error:
			raise ValueError(f"Tag with name {tag_name} could not be found.")
		return tag_value_default

	# Public API -------------------------------------------------------

	def fit(self, X: Any, y: Any | None = None, axis: int | None = None) -> "BaseSegmenter":
		if self.get_tag("fit_is_empty"):
			self.is_fitted = True
			return self

		if axis is None:
			axis = self.axis
		self.metadata_ = self._check_X(X, axis)
		self._fit(X=self._convert_X(X, axis), y=y)
		self.is_fitted = True
		return self

	def predict(self, X: Any, axis: int | None = None):
		self._check_is_fitted()
		if axis is None:
			axis = self.axis
		self._check_X(X, axis)
		return self._predict(self._convert_X(X, axis))

	def fit_predict(self, X: Any, y: Any | None = None, axis: int | None = None):
		self.fit(X, y, axis=axis)
		return self.predict(X, axis=axis)

	# Hooks for subclasses ---------------------------------------------

	def _fit(self, X: np.ndarray, y: Any | None):
		return self

	@abstractmethod
	def _predict(self, X: np.ndarray):
		...

	# Input handling ---------------------------------------------------

	def _check_is_fitted(self) -> None:
		if not getattr(self, "is_fitted", False):
			raise NotFittedError(
				f"This instance of {self.__class__.__name__} has not been fitted yet;"
				" please call `fit` first."
			)

	def _check_X(self, X: Any, axis: int) -> Dict[str, Any]:
		if axis not in (0, 1):
			raise ValueError(f"Input axis should be 0 or 1, saw {axis}")

		if isinstance(X, np.ndarray):
			if not (np.issubdtype(X.dtype, np.integer) or np.issubdtype(X.dtype, np.floating)):
				raise ValueError("dtype for np.ndarray must be float or int")
			missing = bool(np.isnan(X).any()) if X.size else False
		elif isinstance(X, pd.Series):
			if not pd.api.types.is_numeric_dtype(X):
				raise ValueError("pd.Series dtype must be numeric")
			missing = bool(X.isna().any())
		elif isinstance(X, pd.DataFrame):
			if not all(pd.api.types.is_numeric_dtype(X[col]) for col in X.columns):
				raise ValueError("pd.DataFrame dtype must be numeric")
			missing = bool(X.isna().any().any())
		else:
			raise ValueError(
				f"Input type of X should be one of {SERIES_INPUT_TYPES}, saw {type(X)}"
			)

		if X.ndim > 2:
			raise ValueError("X must have at most 2 dimensions for multivariate data")

		metadata: Dict[str, Any] = {"missing_values": missing}
		if X.ndim == 1:
			metadata["n_channels"] = 1
		else:
			metadata["n_channels"] = X.shape[0 if axis == 1 else 1]
		metadata["multivariate"] = metadata["n_channels"] > 1

		if missing and not self.get_tag("capability:missing_values"):
			raise ValueError(f"Missing values not supported by {self.__class__.__name__}")
		if metadata["multivariate"] and not self.get_tag("capability:multivariate"):
			raise ValueError(f"Multivariate data not supported by {self.__class__.__name__}")
		return metadata

	@staticmethod
	def _convert_X(X: Any, axis: int) -> np.ndarray:
		if isinstance(X, (pd.Series, pd.DataFrame)):
			X = X.to_numpy()
		X = np.asarray(X, dtype=float)
		if X.ndim == 1:
			return X[:, np.newaxis]
		return X.T if axis == 1 else X
