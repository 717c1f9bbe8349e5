"""CLI interface implementation using Typer."""

from pathlib import Path
from typing import cast

import typer
from rich.console import Console
from rich.table import Table

from classification_metrics.averaging import AverageStrategy
from classification_metrics.datasets import load_prediction_dataset
from classification_metrics.exceptions import ClassificationMetricsError
from classification_metrics.metrics import METRICS, ClassificationReport, build_metric
from classification_metrics.rendering import build_confusion_table
from classification_metrics.service import EvaluationService, EvaluationSummary
from classification_metrics.utils.logger import configure_logging
from classification_metrics.utils.settings import get_settings

from .base import BaseInterface

# Force terminal mode even in non-TTY environments
console = Console(force_terminal=True, force_interactive=False)

RAW_AVERAGE_NAMES = {"raw", "none"}


def _resolve_average(average: str | None) -> AverageStrategy | None:
    """Convert CLI input into an :class:`AverageStrategy` (``None`` for raw)."""
    if average is None:
        return get_settings().default_average
    normalized = average.strip().lower()
    if normalized in RAW_AVERAGE_NAMES:
        return None
    try:
        return AverageStrategy(normalized)
    except ValueError as exc:
        message = "Average must be 'macro', 'micro', 'weighted' or 'raw'."
        raise typer.BadParameter(message) from exc


def _resolve_metrics(metric: str) -> list[str]:
    """Split a comma separated metric selection, expanding ``all``."""
    names = [name.strip() for name in metric.split(",") if name.strip()]
    if not names or "all" in {name.lower() for name in names}:
        return list(METRICS)

    resolved: list[str] = []
    for name in names:
        try:
            resolved.append(build_metric(name).name)
        except ValueError as exc:
            message = f"Unknown metric {name!r}; choose from {', '.join(METRICS)}."
            raise typer.BadParameter(message) from exc
    return resolved


def _display_summary(summary: EvaluationSummary) -> None:
    """Render metric scores to the console."""
    strategy = summary.strategy.value if summary.strategy is not None else "raw"
    labels = list(summary.confusion_matrix.labels)

    if summary.strategy is None:
        table = Table(title="Per-label scores")
        table.add_column("label", style="bold")
        for name in summary.scores:
            table.add_column(name, justify="right")
        for label in labels:
            row = [label]
            for score in summary.scores.values():
                value = score[label] if isinstance(score, dict) else score
                row.append(f"{value:.4f}")
            table.add_row(*row)
        console.print(table)
    else:
        for name, score in summary.scores.items():
            console.print(f"{name} ({strategy}): {cast(float, score):.4f}")
    console.file.flush()


def _display_report(report: ClassificationReport) -> None:
    """Render a full classification report to the console."""
    table = Table(title="Classification report")
    table.add_column("label", style="bold")
    for column in ("precision", "recall", "f1", "support"):
        table.add_column(column, justify="right")

    for label in report.labels:
        table.add_row(
            label,
            f"{report.precision[label]:.4f}",
            f"{report.recall[label]:.4f}",
            f"{report.f1[label]:.2f}",
            str(report.support[label]),
        )
    console.print(table)

    averages = Table(title="Averages")
    averages.add_column("metric", style="bold")
    for strategy in AverageStrategy:
        averages.add_column(strategy.value, justify="right")
    for metric, values in report.averages.items():
        averages.add_row(
            metric,
            *(f"{values[strategy.value]:.4f}" for strategy in AverageStrategy),
        )
    console.print(averages)
    console.print(f"Accuracy: {report.accuracy:.4f}")
    console.file.flush()


DATASET_ARGUMENT = typer.Argument(
    ...,
    help="JSON, YAML or CSV file with true and predicted labels.",
)
METRIC_OPTION = typer.Option(
    "all",
    "--metric",
    "-m",
    help="Comma separated metrics to compute (precision, recall, f1 or all).",
)
AVERAGE_OPTION = typer.Option(
    None,
    "--average",
    "-a",
    help="Averaging strategy (macro, micro, weighted or raw).",
)
JSON_OPTION = typer.Option(
    False,
    "--json",
    help="Emit machine readable JSON instead of tables.",
)
TABLE_OPTION = typer.Option(
    False,
    "--table",
    help="Render the matrix as a rich table instead of fixed-width text.",
)


class CLIInterface(BaseInterface):
    """Command Line Interface implementation."""

    def __init__(self, service: EvaluationService | None = None) -> None:
        """Initialize the CLI interface."""
        super().__init__()
        self._service = service
        self.app = typer.Typer(
            name="classification-metrics",
            help="Precision, recall and F1 from confusion matrices.",
            add_completion=False,
            no_args_is_help=True,
        )
        self._setup_commands()

    @property
    def name(self) -> str:
        """Get the interface name.

        Returns:
            str: The interface name

        """
        return "CLI"

    @property
    def service(self) -> EvaluationService:
        """Return the evaluation service, creating it on first use."""
        if self._service is None:
            self._service = EvaluationService()
        return self._service

    def _setup_commands(self) -> None:
        """Set up CLI commands."""
        self.app.command(name="evaluate")(self.evaluate)
        self.app.command(name="report")(self.report)
        self.app.command(name="matrix")(self.matrix)
        self.app.callback()(self._main_callback)

    def _main_callback(self) -> None:
        """Configure logging before any command runs."""
        settings = get_settings()
        configure_logging(
            log_level=settings.log_level,
            log_format=settings.log_format,
            log_file=settings.log_file_path,
        )

    def _fail(self, exc: Exception, *, dataset: Path) -> typer.Exit:
        """Log and print an input error, returning the exit to raise."""
        self.logger.error(
            "Failed to evaluate predictions",
            dataset=str(dataset),
            error=str(exc),
        )
        console.print(f"Error: {exc}", markup=False, highlight=False)
        console.file.flush()
        return typer.Exit(1)

    def evaluate(
        self,
        dataset: Path = DATASET_ARGUMENT,
        metric: str = METRIC_OPTION,
        average: str | None = AVERAGE_OPTION,
        as_json: bool = JSON_OPTION,
    ) -> None:
        """Compute precision, recall and F1 for a prediction dataset."""
        strategy = _resolve_average(average)
        metrics = _resolve_metrics(metric)

        try:
            predictions = load_prediction_dataset(dataset)
            summary = self.service.evaluate(
                predictions,
                metrics=metrics,
                average=strategy,
            )
        except (ClassificationMetricsError, FileNotFoundError, ValueError) as exc:
            raise self._fail(exc, dataset=dataset) from exc

        if as_json:
            console.print_json(data=summary.to_dict())
            console.file.flush()
            return
        _display_summary(summary)

    def report(
        self,
        dataset: Path = DATASET_ARGUMENT,
        as_json: bool = JSON_OPTION,
    ) -> None:
        """Print per-label scores, support and every average."""
        try:
            predictions = load_prediction_dataset(dataset)
            report = self.service.report(predictions)
        except (ClassificationMetricsError, FileNotFoundError, ValueError) as exc:
            raise self._fail(exc, dataset=dataset) from exc

        if as_json:
            console.print_json(data=report.to_dict())
            console.file.flush()
            return
        _display_report(report)

    def matrix(
        self,
        dataset: Path = DATASET_ARGUMENT,
        as_table: bool = TABLE_OPTION,
    ) -> None:
        """Print the confusion matrix tallied from a prediction dataset."""
        try:
            predictions = load_prediction_dataset(dataset)
            confusion_matrix = self.service.build_confusion_matrix(predictions)
        except (ClassificationMetricsError, FileNotFoundError, ValueError) as exc:
            raise self._fail(exc, dataset=dataset) from exc

        if as_table:
            console.print(
                build_confusion_table(confusion_matrix.labels, confusion_matrix.matrix),
            )
        else:
            console.print(
                str(confusion_matrix),
                markup=False,
                highlight=False,
                end="",
            )
        console.file.flush()

    def run(self) -> None:
        """Run the CLI interface."""
        self.app()
