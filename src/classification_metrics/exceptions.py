"""Error types raised while building or querying confusion matrices."""

from __future__ import annotations


class ClassificationMetricsError(ValueError):
    """Base class for every input validation failure in this package."""


class EmptyLabelError(ClassificationMetricsError):
    """Raised when a confusion matrix is built without any labels."""


class SizeMismatchError(ClassificationMetricsError):
    """Raised when the matrix shape does not match the label count."""


class InconsistentPredictionsError(ClassificationMetricsError):
    """Raised when true and predicted label sequences cannot be tallied."""


class UnknownLabelError(ClassificationMetricsError):
    """Raised when a query names a label that is not part of the matrix."""

    def __init__(self, label: str) -> None:
        """Store the offending label and build the error message."""
        self.label = label
        super().__init__(f"Label '{label}' not found in confusion matrix labels")


__all__ = [
    "ClassificationMetricsError",
    "EmptyLabelError",
    "InconsistentPredictionsError",
    "SizeMismatchError",
    "UnknownLabelError",
]
