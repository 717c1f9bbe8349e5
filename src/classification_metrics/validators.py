"""Input guards run before a confusion matrix is constructed."""

from __future__ import annotations

from collections.abc import Sequence

from .exceptions import EmptyLabelError, InconsistentPredictionsError, SizeMismatchError


def validate_labels(labels: Sequence[str]) -> None:
    """Reject an empty label set."""
    if not labels:
        msg = "Labels cannot be empty"
        raise EmptyLabelError(msg)


def validate_matrix(labels: Sequence[str], matrix: Sequence[Sequence[int]]) -> None:
    """Ensure the matrix is square and sized to the label count."""
    size = len(labels)
    if len(matrix) != size:
        msg = "Matrix dimensions must match labels"
        raise SizeMismatchError(msg)

    for row in matrix:
        if len(row) != size:
            msg = "Matrix must be square"
            raise SizeMismatchError(msg)


def validate_predictions(
    true_labels: Sequence[str],
    predicted_labels: Sequence[str],
) -> None:
    """Check that predictions can be tallied against the ground truth.

    Predictions may only use labels that also occur in ``true_labels``.
    """
    if not true_labels or not predicted_labels:
        msg = "Missing or empty labels"
        raise InconsistentPredictionsError(msg)

    if len(true_labels) != len(predicted_labels):
        msg = "True and predicted labels must have the same length"
        raise InconsistentPredictionsError(msg)

    if not set(predicted_labels) <= set(true_labels):
        msg = "Each predicted label must be present in true labels"
        raise InconsistentPredictionsError(msg)


__all__ = ["validate_labels", "validate_matrix", "validate_predictions"]
