"""Precision, recall and F1 scoring from multiclass confusion matrices."""

from .averaging import (
    AverageStrategy,
    Calculator,
    MacroAverage,
    MicroAverage,
    WeightedAverage,
)
from .confusion_matrix import ConfusionMatrix
from .datasets import PredictionDataset, load_prediction_dataset
from .exceptions import (
    ClassificationMetricsError,
    EmptyLabelError,
    InconsistentPredictionsError,
    SizeMismatchError,
    UnknownLabelError,
)
from .metrics import (
    ClassificationReport,
    F1Score,
    Metric,
    Precision,
    Recall,
    build_metric,
    compute_classification_report,
)
from .rendering import render_confusion_matrix
from .service import EvaluationService, EvaluationSummary

__all__ = [
    "AverageStrategy",
    "Calculator",
    "ClassificationMetricsError",
    "ClassificationReport",
    "ConfusionMatrix",
    "EmptyLabelError",
    "EvaluationService",
    "EvaluationSummary",
    "F1Score",
    "InconsistentPredictionsError",
    "MacroAverage",
    "Metric",
    "MicroAverage",
    "Precision",
    "PredictionDataset",
    "Recall",
    "SizeMismatchError",
    "UnknownLabelError",
    "WeightedAverage",
    "build_metric",
    "compute_classification_report",
    "load_prediction_dataset",
    "render_confusion_matrix",
]
