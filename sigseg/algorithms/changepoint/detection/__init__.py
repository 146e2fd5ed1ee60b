"""Detection algorithms built on the segment costs."""

from .pelt import Pelt
from .penalty import (
    PenaltyDiagnostic,
    PenaltySelectionOptions,
    PenaltySelectionResult,
    PenaltySelector,
    SelectionMethod,
)

__all__ = [
    "Pelt",
    "PenaltyDiagnostic",
    "PenaltySelectionOptions",
    "PenaltySelectionResult",
    "PenaltySelector",
    "SelectionMethod",
]
