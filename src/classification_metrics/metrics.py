"""Precision, recall and F1 computed from a confusion matrix."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, cast

from classification_metrics.base import BaseComponent
from classification_metrics.utils.rounding import round_half_up

from .averaging import AverageStrategy

if TYPE_CHECKING:
    from .confusion_matrix import ConfusionMatrix


def _ratio(numerator: int, denominator: int) -> float:
    """Divide two counts, returning ``0.0`` when the denominator is zero."""
    return numerator / denominator if denominator > 0 else 0.0


def _precision_for_label(confusion_matrix: ConfusionMatrix, label: str) -> float:
    true_positives = cast(int, confusion_matrix.true_positives(label))
    false_positives = cast(int, confusion_matrix.false_positives(label))
    return _ratio(true_positives, true_positives + false_positives)


def _recall_for_label(confusion_matrix: ConfusionMatrix, label: str) -> float:
    true_positives = cast(int, confusion_matrix.true_positives(label))
    false_negatives = cast(int, confusion_matrix.false_negatives(label))
    return _ratio(true_positives, true_positives + false_negatives)


class Metric(BaseComponent, ABC):
    """Per-label score with optional aggregation through an averaging strategy.

    Without a strategy :meth:`measure` returns a ``label -> score`` mapping in
    label order. With a strategy the mapping is handed to the strategy's
    calculator together with the matrix and a single float is returned.
    """

    name: ClassVar[str]

    def __init__(self, strategy: AverageStrategy | str | None = None) -> None:
        """Store the optional averaging strategy."""
        super().__init__()
        if strategy is not None and not isinstance(strategy, AverageStrategy):
            strategy = AverageStrategy(str(strategy).lower())
        self._strategy = strategy

    @property
    def strategy(self) -> AverageStrategy | None:
        """Return the configured averaging strategy, if any."""
        return self._strategy

    def measure(self, confusion_matrix: ConfusionMatrix) -> dict[str, float] | float:
        """Score every label and aggregate when a strategy is configured."""
        measures = {
            label: self.measure_label(confusion_matrix, label)
            for label in confusion_matrix.labels
        }
        if self._strategy is None:
            return measures

        calculator = self._strategy.to_calculator()
        result = calculator.calculate(confusion_matrix, measures)
        self.logger.debug(
            "Aggregated metric",
            metric=self.name,
            strategy=self._strategy.value,
            result=result,
        )
        return result

    @abstractmethod
    def measure_label(self, confusion_matrix: ConfusionMatrix, label: str) -> float:
        """Return the rounded score for a single label."""

    def __repr__(self) -> str:
        """Return a debug representation including the strategy."""
        strategy = self._strategy.value if self._strategy is not None else None
        return f"{self.__class__.__name__}(strategy={strategy!r})"


class Precision(Metric):
    """Share of predictions for a label that were correct."""

    name = "precision"

    def measure_label(self, confusion_matrix: ConfusionMatrix, label: str) -> float:
        """Return ``TP / (TP + FP)`` rounded to 4 places."""
        return round_half_up(_precision_for_label(confusion_matrix, label), 4)


class Recall(Metric):
    """Share of true instances of a label that were recovered."""

    name = "recall"

    def measure_label(self, confusion_matrix: ConfusionMatrix, label: str) -> float:
        """Return ``TP / (TP + FN)`` rounded to 4 places."""
        return round_half_up(_recall_for_label(confusion_matrix, label), 4)


class F1Score(Metric):
    """Harmonic mean of precision and recall.

    Precision and recall are recomputed unrounded for each label; only the
    final score is rounded, to 2 places.
    """

    name = "f1"

    def measure_label(self, confusion_matrix: ConfusionMatrix, label: str) -> float:
        """Return ``2PR / (P + R)`` rounded to 2 places."""
        precision = _precision_for_label(confusion_matrix, label)
        recall = _recall_for_label(confusion_matrix, label)
        denominator = precision + recall
        if denominator == 0.0:
            return 0.0
        return round_half_up((2.0 * precision * recall) / denominator, 2)


METRICS: dict[str, type[Metric]] = {
    Precision.name: Precision,
    Recall.name: Recall,
    F1Score.name: F1Score,
}


def build_metric(
    name: str,
    strategy: AverageStrategy | str | None = None,
) -> Metric:
    """Instantiate a metric by name (``precision``, ``recall`` or ``f1``)."""
    normalized = name.strip().lower().replace("-", "_")
    if normalized == "f1_score":
        normalized = F1Score.name
    try:
        metric_cls = METRICS[normalized]
    except KeyError:
        msg = f"Unknown metric: {name!r}"
        raise ValueError(msg) from None
    return metric_cls(strategy)


@dataclass(frozen=True, slots=True)
class ClassificationReport:
    """Per-label scores, support and aggregates for one confusion matrix."""

    labels: tuple[str, ...]
    precision: dict[str, float]
    recall: dict[str, float]
    f1: dict[str, float]
    support: dict[str, int]
    accuracy: float
    averages: dict[str, dict[str, float]]

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serializable representation of the report."""
        return {
            "labels": list(self.labels),
            "precision": dict(self.precision),
            "recall": dict(self.recall),
            "f1": dict(self.f1),
            "support": dict(self.support),
            "accuracy": self.accuracy,
            "averages": {
                metric: dict(values) for metric, values in self.averages.items()
            },
        }


def compute_classification_report(
    confusion_matrix: ConfusionMatrix,
) -> ClassificationReport:
    """Compute raw and averaged precision, recall and F1 for every strategy."""
    raw: dict[str, dict[str, float]] = {}
    averages: dict[str, dict[str, float]] = {}
    for name, metric_cls in METRICS.items():
        raw[name] = cast("dict[str, float]", metric_cls().measure(confusion_matrix))
        averages[name] = {
            strategy.value: cast(float, metric_cls(strategy).measure(confusion_matrix))
            for strategy in AverageStrategy
        }

    return ClassificationReport(
        labels=tuple(confusion_matrix.labels),
        precision=raw[Precision.name],
        recall=raw[Recall.name],
        f1=raw[F1Score.name],
        support=cast("dict[str, int]", confusion_matrix.support()),
        accuracy=confusion_matrix.accuracy(),
        averages=averages,
    )


__all__ = [
    "METRICS",
    "ClassificationReport",
    "F1Score",
    "Metric",
    "Precision",
    "Recall",
    "build_metric",
    "compute_classification_report",
]
