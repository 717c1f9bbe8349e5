"""Immutable confusion matrix and its derived per-label counts."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from classification_metrics.utils.rounding import round_half_up

from .exceptions import UnknownLabelError
from .labels import ensure_labels_are_consistent, sort_labels
from .rendering import render_confusion_matrix
from .validators import validate_labels, validate_matrix, validate_predictions


@dataclass(frozen=True, slots=True)
class ConfusionMatrix:
    """Square table of true-vs-predicted counts over an ordered label set.

    Cell ``matrix[i][j]`` counts the instances whose true label is
    ``labels[i]`` and whose predicted label is ``labels[j]``. Both sequences
    are copied into tuples on construction, so the instance never shares
    mutable state with the caller.
    """

    labels: Sequence[str]
    matrix: Sequence[Sequence[int]]
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Freeze the inputs and run the shape guards."""
        labels = tuple(self.labels)
        matrix = tuple(tuple(row) for row in self.matrix)

        validate_labels(labels)
        validate_matrix(labels, matrix)

        index: dict[str, int] = {}
        for position, label in enumerate(labels):
            index.setdefault(label, position)

        object.__setattr__(self, "labels", labels)
        object.__setattr__(self, "matrix", matrix)
        object.__setattr__(self, "_index", index)

    @classmethod
    def from_predictions(
        cls,
        true_labels: Sequence[str],
        predicted_labels: Sequence[str],
        labels: Sequence[str] | None = None,
    ) -> ConfusionMatrix:
        """Tally paired true/predicted labels into a confusion matrix.

        Args:
            true_labels: Ground truth label for each instance
            predicted_labels: Predicted label for each instance, same length
            labels: Optional explicit label set. It must contain exactly the
                labels observed in the data and is sorted before use.

        Returns:
            ConfusionMatrix: Matrix over the sorted label set

        """
        validate_predictions(true_labels, predicted_labels)

        resolved = sort_labels(labels if labels is not None else true_labels)
        ensure_labels_are_consistent(true_labels, predicted_labels, resolved)

        index = {label: position for position, label in enumerate(resolved)}
        size = len(resolved)
        counts = [[0] * size for _ in range(size)]
        for truth, prediction in zip(true_labels, predicted_labels, strict=True):
            counts[index[truth]][index[prediction]] += 1

        return cls(labels=resolved, matrix=counts)

    @property
    def size(self) -> int:
        """Return the number of labels (rows and columns)."""
        return len(self.labels)

    @property
    def total(self) -> int:
        """Return the number of tallied instances across every cell."""
        return sum(sum(row) for row in self.matrix)

    def index_of(self, label: str) -> int:
        """Return the row/column index of ``label``."""
        try:
            return self._index[label]
        except KeyError:
            raise UnknownLabelError(label) from None

    def true_positives(self, label: str | None = None) -> int | dict[str, int]:
        """Return diagonal counts for one label or for every label."""
        return self._per_label(self._true_positives_at, label)

    def false_positives(self, label: str | None = None) -> int | dict[str, int]:
        """Return off-diagonal column sums for one label or for every label."""
        return self._per_label(self._false_positives_at, label)

    def false_negatives(self, label: str | None = None) -> int | dict[str, int]:
        """Return off-diagonal row sums for one label or for every label."""
        return self._per_label(self._false_negatives_at, label)

    def true_negatives(self, label: str | None = None) -> int | dict[str, int]:
        """Return counts outside the label's row and column."""
        return self._per_label(self._true_negatives_at, label)

    def support(self, label: str | None = None) -> int | dict[str, int]:
        """Return the number of true instances for one label or every label."""
        return self._per_label(self._support_at, label)

    def accuracy(self) -> float:
        """Return the share of instances on the diagonal, rounded to 4 places."""
        total = self.total
        if not total:
            return 0.0
        correct = sum(self._true_positives_at(k) for k in range(self.size))
        return round_half_up(correct / total, 4)

    def to_lists(self) -> list[list[int]]:
        """Return a mutable copy of the count matrix."""
        return [list(row) for row in self.matrix]

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serializable representation of the matrix."""
        return {"labels": list(self.labels), "matrix": self.to_lists()}

    def __str__(self) -> str:
        """Render the matrix as fixed-width text."""
        return render_confusion_matrix(self.labels, self.matrix)

    def _per_label(
        self,
        count_at: Callable[[int], int],
        label: str | None,
    ) -> int | dict[str, int]:
        if label is not None:
            return count_at(self.index_of(label))
        return {name: count_at(self._index[name]) for name in self.labels}

    def _true_positives_at(self, k: int) -> int:
        return self.matrix[k][k]

    def _false_positives_at(self, k: int) -> int:
        return sum(row[k] for i, row in enumerate(self.matrix) if i != k)

    def _false_negatives_at(self, k: int) -> int:
        return sum(value for j, value in enumerate(self.matrix[k]) if j != k)

    def _true_negatives_at(self, k: int) -> int:
        return sum(
            value
            for i, row in enumerate(self.matrix)
            if i != k
            for j, value in enumerate(row)
            if j != k
        )

    def _support_at(self, k: int) -> int:
        return sum(self.matrix[k])


__all__ = ["ConfusionMatrix"]
