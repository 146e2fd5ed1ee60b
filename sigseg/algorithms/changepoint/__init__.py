"""Penalised change point detection in the style of the `ruptures` toolkit.

The package provides the segment costs, the PELT search and the
information-criteria penalty selector used by
:class:`~sigseg.algorithms.pelt.detector.PeltDetector`.
"""

from . import base, costs, detection, exceptions, utils  # noqa: F401
from .base import BaseCost, LikelihoodCost, supports_likelihood
from .detection import (
    Pelt,
    PenaltyDiagnostic,
    PenaltySelectionOptions,
    PenaltySelectionResult,
    PenaltySelector,
    SelectionMethod,
)

__all__ = [
    "base",
    "costs",
    "detection",
    "exceptions",
    "utils",
    "BaseCost",
    "LikelihoodCost",
    "supports_likelihood",
    "Pelt",
    "PenaltyDiagnostic",
    "PenaltySelectionOptions",
    "PenaltySelectionResult",
    "PenaltySelector",
    "SelectionMethod",
]
