"""
sigseg: penalised change point detection for time series, compatible with aeon.
"""

import logging

__version__ = "0.1.0"

from .algorithms import PeltDetector
from .algorithms.changepoint import (
    Pelt,
    PenaltySelectionOptions,
    PenaltySelectionResult,
    PenaltySelector,
    SelectionMethod,
)
from .algorithms.changepoint.costs import cost_factory

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "PeltDetector",
    "Pelt",
    "PenaltySelectionOptions",
    "PenaltySelectionResult",
    "PenaltySelector",
    "SelectionMethod",
    "cost_factory",
]
