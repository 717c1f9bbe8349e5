"""Tests for CLI interface implementation."""

import json
import re
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import typer
from typer.testing import CliRunner

from classification_metrics.averaging import AverageStrategy
from classification_metrics.interfaces.base import BaseInterface
from classification_metrics.interfaces.cli import CLIInterface
from classification_metrics.service import EvaluationService
from classification_metrics.utils.settings import reset_settings


PREDICTIONS = {
    "true_labels": ["cat", "dog", "cat", "dog"],
    "predicted_labels": ["dog", "cat", "cat", "cat"],
}


def _clean(output: str) -> str:
    return re.sub(r"\x1b\[[0-9;]*m", "", output)


def _write_predictions(path: Path, payload: dict[str, object] | None = None) -> Path:
    path.write_text(json.dumps(payload or PREDICTIONS), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _isolated_settings(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> Iterator[None]:
    """Run every command from an empty directory with default settings."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CLASSIFICATION_METRICS_DEFAULT_AVERAGE", raising=False)
    monkeypatch.delenv("CLASSIFICATION_METRICS_LOG_FILE_PATH", raising=False)
    monkeypatch.setenv("CLASSIFICATION_METRICS_LOG_LEVEL", "WARNING")
    reset_settings()
    yield
    reset_settings()


class TestCLIInterface:
    """Test CLI interface functionality."""

    def test_cli_interface_inherits_base(self) -> None:
        """Test that CLIInterface inherits from BaseInterface."""
        assert issubclass(CLIInterface, BaseInterface)

    def test_cli_interface_has_name(self) -> None:
        """Test that CLIInterface has correct name."""
        assert CLIInterface().name == "CLI"

    def test_cli_interface_has_typer_app(self) -> None:
        """Test that CLIInterface has Typer app."""
        cli = CLIInterface()
        assert isinstance(cli.app, typer.Typer)

    def test_service_is_created_lazily(self) -> None:
        """A default service should be built on first access."""
        cli = CLIInterface()

        assert isinstance(cli.service, EvaluationService)
        assert cli.service is cli.service

    def test_cli_run_method(self) -> None:
        """Test CLI run method executes typer app."""
        cli = CLIInterface()
        cli.app = MagicMock()

        cli.run()

        cli.app.assert_called_once()


class TestEvaluateCommand:
    """Validate the evaluate command."""

    def test_raw_scores_table(self) -> None:
        """Without an average a per-label table should be printed."""
        runner = CliRunner()

        path = _write_predictions(Path("predictions.json"))
        result = runner.invoke(CLIInterface().app, ["evaluate", str(path)])

        assert result.exit_code == 0
        cleaned_output = _clean(result.stdout)
        assert "Per-label scores" in cleaned_output
        assert "0.3333" in cleaned_output

    def test_averaged_scores(self) -> None:
        """An explicit average should print one line per metric."""
        runner = CliRunner()

        path = _write_predictions(Path("predictions.json"))
        result = runner.invoke(
            CLIInterface().app,
            ["evaluate", str(path), "--average", "micro", "--metric", "precision"],
        )

        assert result.exit_code == 0
        cleaned_output = _clean(result.stdout)
        assert "precision (micro): 0.2500" in cleaned_output
        assert "recall" not in cleaned_output

    def test_settings_default_average(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The configured default average should apply when none is given."""
        monkeypatch.setenv("CLASSIFICATION_METRICS_DEFAULT_AVERAGE", "macro")
        reset_settings()
        runner = CliRunner()

        path = _write_predictions(Path("predictions.json"))
        result = runner.invoke(
            CLIInterface().app,
            ["evaluate", str(path), "-m", "recall"],
        )

        assert result.exit_code == 0
        assert "recall (macro): 0.2500" in _clean(result.stdout)

    def test_raw_overrides_settings_default(
        self,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """``--average raw`` should bypass the configured default."""
        monkeypatch.setenv("CLASSIFICATION_METRICS_DEFAULT_AVERAGE", "weighted")
        reset_settings()
        runner = CliRunner()

        path = _write_predictions(Path("predictions.json"))
        result = runner.invoke(
            CLIInterface().app,
            ["evaluate", str(path), "--average", "raw"],
        )

        assert result.exit_code == 0
        assert "Per-label scores" in _clean(result.stdout)

    def test_json_output(self) -> None:
        """``--json`` should emit the serialised summary."""
        runner = CliRunner()

        path = _write_predictions(Path("predictions.json"))
        result = runner.invoke(
            CLIInterface().app,
            ["evaluate", str(path), "--average", "macro", "--json"],
        )

        assert result.exit_code == 0
        payload = json.loads(_clean(result.stdout))
        assert payload["average"] == "macro"
        assert payload["confusion_matrix"]["labels"] == ["cat", "dog"]
        assert set(payload["scores"]) == {"precision", "recall", "f1"}

    def test_service_receives_parsed_options(self) -> None:
        """Options should be converted before reaching the service."""
        service = MagicMock(spec=EvaluationService)
        runner = CliRunner()

        path = _write_predictions(Path("predictions.json"))
        runner.invoke(
            CLIInterface(service=service).app,
            ["evaluate", str(path), "-a", "Weighted", "-m", "f1,precision"],
        )

        service.evaluate.assert_called_once()
        kwargs = service.evaluate.call_args.kwargs
        assert kwargs["average"] is AverageStrategy.WEIGHTED
        assert kwargs["metrics"] == ["f1", "precision"]

    def test_invalid_average_is_usage_error(self) -> None:
        """Unknown averages should exit with a usage error."""
        runner = CliRunner()

        path = _write_predictions(Path("predictions.json"))
        result = runner.invoke(
            CLIInterface().app,
            ["evaluate", str(path), "--average", "median"],
        )

        assert result.exit_code == 2

    def test_invalid_metric_is_usage_error(self) -> None:
        """Unknown metrics should exit with a usage error."""
        runner = CliRunner()

        path = _write_predictions(Path("predictions.json"))
        result = runner.invoke(
            CLIInterface().app,
            ["evaluate", str(path), "--metric", "specificity"],
        )

        assert result.exit_code == 2

    def test_inconsistent_predictions_fail(self) -> None:
        """Predictions outside the true label set should exit with code 1."""
        runner = CliRunner()

        path = _write_predictions(
            Path("predictions.json"),
            {"true_labels": ["cat", "dog"], "predicted_labels": ["cat", "bird"]},
        )
        result = runner.invoke(CLIInterface().app, ["evaluate", str(path)])

        assert result.exit_code == 1
        assert "Each predicted label must be present in true labels" in _clean(
            result.stdout,
        )

    def test_missing_file_fails(self) -> None:
        """Missing datasets should exit with code 1."""
        runner = CliRunner()

        result = runner.invoke(CLIInterface().app, ["evaluate", "missing.json"])

        assert result.exit_code == 1
        assert "not found" in _clean(result.stdout)


class TestReportAndMatrixCommands:
    """Validate the report and matrix commands."""

    def test_report_command(self) -> None:
        """The report should include per-label scores, averages and accuracy."""
        runner = CliRunner()

        path = _write_predictions(Path("predictions.json"))
        result = runner.invoke(CLIInterface().app, ["report", str(path)])

        assert result.exit_code == 0
        cleaned_output = _clean(result.stdout)
        assert "Classification report" in cleaned_output
        assert "Averages" in cleaned_output
        assert "Accuracy: 0.2500" in cleaned_output

    def test_report_json(self) -> None:
        """``report --json`` should emit the serialised report."""
        runner = CliRunner()

        path = _write_predictions(Path("predictions.json"))
        result = runner.invoke(CLIInterface().app, ["report", str(path), "--json"])

        assert result.exit_code == 0
        payload = json.loads(_clean(result.stdout))
        assert payload["support"] == {"cat": 2, "dog": 2}
        assert payload["accuracy"] == 0.25

    def test_matrix_text(self) -> None:
        """The matrix command should print the fixed-width rendering."""
        runner = CliRunner()

        path = _write_predictions(Path("predictions.json"))
        result = runner.invoke(CLIInterface().app, ["matrix", str(path)])

        assert result.exit_code == 0
        lines = [line.split() for line in _clean(result.stdout).splitlines()]
        assert ["cat", "dog"] in lines
        assert ["cat", "1", "1"] in lines
        assert ["dog", "2", "0"] in lines

    def test_matrix_table(self) -> None:
        """``--table`` should render a rich table."""
        runner = CliRunner()

        path = _write_predictions(Path("predictions.json"))
        result = runner.invoke(CLIInterface().app, ["matrix", str(path), "--table"])

        assert result.exit_code == 0
        assert "Confusion matrix" in _clean(result.stdout)
