"""Estimator-level tests for :class:`PeltDetector`."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest
from sklearn.base import clone
from sklearn.exceptions import NotFittedError

from sigseg import PeltDetector
from sigseg.algorithms.changepoint import PenaltySelectionResult, SelectionMethod
from sigseg.algorithms.changepoint.costs import CostNormal
from sigseg.algorithms.changepoint.exceptions import UnsupportedCostError


def _assert_near(found, expected, tol):
    assert len(found) == len(expected)
    for f, e in zip(found, expected):
        assert abs(int(f) - int(e)) <= tol


# ==================================================================
# Fixed penalty
# ==================================================================


class TestFixedPenalty:
    def test_fit_predict_univariate(self, synthetic_data):
        data = synthetic_data["univariate"]
        result = PeltDetector(penalty=10.0).fit_predict(data["X"])
        assert isinstance(result, np.ndarray)
        assert np.issubdtype(result.dtype, np.integer)
        _assert_near(result, data["change_points"], tol=5)

    def test_fit_predict_multivariate(self, synthetic_data):
        data = synthetic_data["multivariate"]
        result = PeltDetector(penalty=10.0).fit_predict(data["X"])
        _assert_near(result, data["change_points"], tol=5)

    def test_one_dimensional_input(self, step_signal):
        detector = PeltDetector(min_size=1, jump=1, penalty=2.0)
        assert detector.fit_predict(step_signal).tolist() == [3, 6]

    def test_numpy_and_pandas_agree(self, synthetic_data):
        X = synthetic_data["multivariate"]["X"]
        from_numpy = PeltDetector(penalty=10.0).fit_predict(X)
        from_frame = PeltDetector(penalty=10.0).fit_predict(pd.DataFrame(X))
        np.testing.assert_array_equal(from_numpy, from_frame)

    def test_series_input(self, step_signal):
        detector = PeltDetector(min_size=1, jump=1, penalty=2.0)
        assert detector.fit_predict(pd.Series(step_signal)).tolist() == [3, 6]

    def test_axis_one_transposes(self, synthetic_data):
        X = synthetic_data["multivariate"]["X"]
        rows = PeltDetector(penalty=10.0).fit_predict(X)
        cols = PeltDetector(penalty=10.0, axis=1).fit_predict(X.T)
        np.testing.assert_array_equal(rows, cols)

    def test_predict_on_new_signal_refits(self, step_signal):
        detector = PeltDetector(min_size=1, jump=1, penalty=2.0).fit(np.ones(9))
        assert detector.predict(step_signal).tolist() == [3, 6]
        assert detector.predict(np.ones(9)).tolist() == []

    def test_change_points_attribute(self, step_signal):
        detector = PeltDetector(min_size=1, jump=1, penalty=2.0)
        with pytest.raises(RuntimeError):
            detector.change_points_
        detector.fit_predict(step_signal)
        cps = detector.change_points_
        cps[0] = 99
        assert detector.change_points_.tolist() == [3, 6]
        assert detector.penalty_ == 2.0
        assert detector.selection_ is None

    def test_empty_input_returns_empty(self):
        assert PeltDetector().fit_predict(np.empty((0, 1))).size == 0


# ==================================================================
# Selected penalty
# ==================================================================


class TestSelectedPenalty:
    def test_bic_selection(self, synthetic_data):
        data = synthetic_data["univariate"]
        detector = PeltDetector(model="normal", penalty="bic", n_penalty_steps=8)
        result = detector.fit_predict(data["X"])

        assert isinstance(detector.selection_, PenaltySelectionResult)
        assert detector.selection_.method is SelectionMethod.BIC
        assert detector.penalty_ == detector.selection_.selected_penalty
        for expected in data["change_points"]:
            assert np.min(np.abs(result - expected)) <= 10

    def test_explicit_penalty_bounds(self, count_data):
        counts, _ = count_data
        detector = PeltDetector(
            model="poisson",
            penalty="AIC",
            min_penalty=5.0,
            max_penalty=500.0,
            n_penalty_steps=4,
        )
        detector.fit_predict(counts)
        penalties = [d.penalty for d in detector.selection_.diagnostics]
        assert penalties[0] == pytest.approx(5.0)
        assert penalties[-1] == pytest.approx(500.0)

    def test_cost_fitted_once_per_selection(self, synthetic_data, monkeypatch):
        calls = []
        original_fit = CostNormal._fit

        def counting_fit(self, signal):
            calls.append(signal.shape)
            return original_fit(self, signal)

        monkeypatch.setattr(CostNormal, "_fit", counting_fit)
        X = synthetic_data["univariate"]["X"]
        detector = PeltDetector(model="normal", penalty="bic", n_penalty_steps=4)
        detector.fit_predict(X)
        assert len(calls) == 1
        detector.predict(X)
        assert len(calls) == 1

    def test_switch_to_fixed_penalty_after_selection_fit(self, step_signal):
        detector = PeltDetector(model="normal", penalty="bic", min_size=3, jump=3)
        detector.fit(step_signal)
        detector.set_params(penalty=5.0)
        assert detector.predict(step_signal).tolist() == [3, 6]

    def test_selection_needs_likelihood_cost(self, step_signal):
        with pytest.raises(UnsupportedCostError):
            PeltDetector(model="l2", penalty="bic").fit_predict(step_signal)


# ==================================================================
# Validation and sklearn conventions
# ==================================================================


class TestValidation:
    def test_predict_before_fit(self, step_signal):
        with pytest.raises(NotFittedError):
            PeltDetector().predict(step_signal)

    def test_nan_rejected(self, step_signal):
        X = step_signal.copy()
        X[4] = np.nan
        with pytest.raises(ValueError, match="(?i)missing"):
            PeltDetector().fit(X)

    def test_three_dimensional_rejected(self):
        with pytest.raises(ValueError, match="dimensions"):
            PeltDetector().fit(np.zeros((4, 3, 2)))

    def test_string_input_rejected(self):
        with pytest.raises(ValueError):
            PeltDetector().fit(np.array(["a", "b", "c"]))

    def test_list_input_rejected(self):
        with pytest.raises(ValueError):
            PeltDetector().fit([[1, 2], [3, 4]])

    @pytest.mark.parametrize("penalty", [-1.0, "mdl"])
    def test_invalid_penalty(self, step_signal, penalty):
        with pytest.raises(ValueError, match="penalty"):
            PeltDetector(penalty=penalty).fit(step_signal)

    def test_invalid_axis(self):
        with pytest.raises(ValueError, match="axis"):
            PeltDetector(axis=2)

    def test_clone_preserves_parameters(self):
        detector = PeltDetector(model="rbf", min_size=3, jump=2, penalty="aicc", cost_params={"gamma": 0.5})
        cloned = clone(detector)
        assert cloned.get_params() == detector.get_params()
        assert cloned is not detector

    def test_tags(self):
        detector = PeltDetector()
        assert detector.get_tag("capability:multivariate") is True
        assert detector.get_tag("returns_dense") is True
        assert detector.get_tag("fit_is_empty") is False
        with pytest.raises(ValueError):
            detector.get_tag("no-such-tag")
