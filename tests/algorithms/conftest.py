"""Shared fixtures for the change point test suite."""

from __future__ import annotations

import numpy as np
import pytest


# ======================================================================
# Helpers
# ======================================================================


def _segmented_signal(
    rng: np.random.Generator,
    n_samples: int,
    change_points: np.ndarray,
    means: list[np.ndarray],
    scales: list[np.ndarray],
) -> np.ndarray:
    """Generate a piecewise-Gaussian signal with known change points."""
    segments, start = [], 0
    for end, mu, sigma in zip(list(change_points) + [n_samples], means, scales):
        segments.append(rng.normal(loc=mu, scale=sigma, size=(end - start, mu.shape[0])))
        start = end
    return np.concatenate(segments, axis=0).astype(np.float64)


# ======================================================================
# Session-scoped synthetic data
# ======================================================================


@pytest.fixture(scope="session")
def synthetic_data():
    """Three-segment synthetic series (univariate + multivariate).

    Change points at index 300 and 700 in a length-1000 signal with
    well-separated segment means.
    """
    rng = np.random.default_rng(42)
    n = 1000
    cps = np.array([300, 700])

    uni = _segmented_signal(
        rng,
        n,
        cps,
        means=[np.array([-0.8]), np.array([0.5]), np.array([-0.1])],
        scales=[np.array([0.2]), np.array([0.25]), np.array([0.1])],
    )
    multi = _segmented_signal(
        rng,
        n,
        cps,
        means=[
            np.array([-0.8, 0.4]),
            np.array([0.5, -0.3]),
            np.array([-0.1, 0.6]),
        ],
        scales=[
            np.array([0.2, 0.18]),
            np.array([0.25, 0.22]),
            np.array([0.22, 0.2]),
        ],
    )
    return {
        "univariate": {"X": uni, "change_points": cps.copy()},
        "multivariate": {"X": multi, "change_points": cps.copy()},
        "n_samples": n,
    }


@pytest.fixture
def step_signal():
    """Noise-free signal with two level shifts at 3 and 6."""
    return np.array([1.0, 1.0, 1.0, 5.0, 5.0, 5.0, 1.0, 1.0, 1.0])


@pytest.fixture(scope="session")
def count_data():
    """Poisson counts whose rate jumps from 2 to 12 at index 150."""
    rng = np.random.default_rng(7)
    counts = np.concatenate([rng.poisson(2.0, 150), rng.poisson(12.0, 150)])
    return counts.astype(float), 150


@pytest.fixture(scope="session")
def binary_data():
    """Bernoulli draws whose success rate jumps from 0.1 to 0.9 at index 200."""
    rng = np.random.default_rng(11)
    draws = np.concatenate([rng.random(200) < 0.1, rng.random(200) < 0.9])
    return draws.astype(float), 200
