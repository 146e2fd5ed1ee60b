"""Exceptions raised by the change point costs, PELT and the penalty selector."""

from sklearn.exceptions import NotFittedError


class SegmentationError(Exception):
    """Base class for every error raised by the segmentation engine."""


class UninitializedDataError(SegmentationError, NotFittedError):
    """Raised when a cost or estimator is used before ``fit`` or without data."""


class SegmentLengthError(SegmentationError, ValueError):
    """Raised when a segment is too short for a cost evaluation."""


# Historical name kept for code written against the ruptures API.
NotEnoughPoints = SegmentLengthError


class SegmentBoundsError(SegmentationError, ValueError):
    """Raised when segment indices fall outside ``[0, n_samples]``."""


class BadSegmentationParameters(SegmentationError, ValueError):
    """Raised when segmentation parameters admit no feasible solution."""


class CostFunctionError(SegmentationError):
    """Raised when a cost evaluation fails for an unexpected reason."""


class UnsupportedCostError(SegmentationError, TypeError):
    """Raised when an operation needs a capability the cost does not offer."""


class PeltError(SegmentationError):
    """Raised when the PELT search or the penalty sweep cannot complete."""


class NoSuitablePenaltyError(PeltError):
    """Raised when every tested penalty produced an unusable score."""


class DetectionCancelled(PeltError):
    """Raised when a caller-supplied ``should_stop`` hook asks to stop."""
