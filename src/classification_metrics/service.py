"""High-level evaluation service composing matrices, metrics and averaging."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from classification_metrics.base import BaseComponent

from .averaging import AverageStrategy
from .confusion_matrix import ConfusionMatrix
from .datasets import PredictionDataset
from .metrics import (
    METRICS,
    ClassificationReport,
    build_metric,
    compute_classification_report,
)


@dataclass(frozen=True, slots=True)
class EvaluationSummary:
    """Scores produced for one confusion matrix and averaging choice."""

    confusion_matrix: ConfusionMatrix
    strategy: AverageStrategy | None
    scores: dict[str, dict[str, float] | float]

    def to_dict(self) -> dict[str, object]:
        """Return a serialisable representation of the evaluation."""
        return {
            "confusion_matrix": self.confusion_matrix.to_dict(),
            "average": self.strategy.value if self.strategy is not None else "raw",
            "scores": {
                name: dict(score) if isinstance(score, dict) else score
                for name, score in self.scores.items()
            },
        }


class EvaluationService(BaseComponent):
    """Service computing classification metrics for predictions or matrices."""

    def __init__(self, *, default_average: AverageStrategy | None = None) -> None:
        """Store the averaging strategy used when callers do not pick one."""
        super().__init__()
        self._default_average = default_average

    @property
    def default_average(self) -> AverageStrategy | None:
        """Return the fallback averaging strategy."""
        return self._default_average

    def build_confusion_matrix(
        self,
        source: PredictionDataset | ConfusionMatrix,
    ) -> ConfusionMatrix:
        """Return ``source`` as a confusion matrix, tallying datasets."""
        if isinstance(source, ConfusionMatrix):
            return source

        matrix = source.to_confusion_matrix()
        self.logger.debug(
            "Built confusion matrix from predictions",
            instances=source.size,
            labels=list(matrix.labels),
        )
        return matrix

    def evaluate(
        self,
        source: PredictionDataset | ConfusionMatrix,
        *,
        metrics: Sequence[str] | None = None,
        average: AverageStrategy | None = None,
    ) -> EvaluationSummary:
        """Compute the requested metrics, aggregated when a strategy applies."""
        matrix = self.build_confusion_matrix(source)
        strategy = average if average is not None else self._default_average
        selected = tuple(metrics) if metrics else tuple(METRICS)

        scores: dict[str, dict[str, float] | float] = {}
        for name in selected:
            metric = build_metric(name, strategy)
            scores[metric.name] = metric.measure(matrix)

        self.logger.debug(
            "Computed evaluation metrics",
            metrics=list(scores),
            average=strategy.value if strategy is not None else "raw",
        )
        return EvaluationSummary(
            confusion_matrix=matrix,
            strategy=strategy,
            scores=scores,
        )

    def report(
        self,
        source: PredictionDataset | ConfusionMatrix,
    ) -> ClassificationReport:
        """Compute the full per-label and averaged classification report."""
        matrix = self.build_confusion_matrix(source)
        report = compute_classification_report(matrix)
        self.logger.debug(
            "Computed classification report",
            labels=len(report.labels),
            accuracy=report.accuracy,
        )
        return report


__all__ = ["EvaluationService", "EvaluationSummary"]
