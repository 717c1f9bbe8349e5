"""Tests for prediction dataset loading utilities."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from classification_metrics.datasets import (
    PredictionDataset,
    load_prediction_dataset,
)
from classification_metrics.exceptions import InconsistentPredictionsError


if TYPE_CHECKING:
    from pathlib import Path


def _sample_payload() -> dict[str, object]:
    return {
        "true_labels": ["cat", "dog", "cat", "dog"],
        "predicted_labels": ["dog", "cat", "cat", "cat"],
        "metadata": {"name": "unit_test_predictions"},
    }


class TestPredictionDatasetLoading:
    """Validate dataset loading from disk."""

    def test_load_from_json_file(self, tmp_path: Path) -> None:
        """Datasets should load correctly from JSON files."""
        path = tmp_path / "predictions.json"
        path.write_text(json.dumps(_sample_payload()), encoding="utf-8")

        dataset = load_prediction_dataset(path)

        assert dataset.size == 4
        assert dataset.true_labels == ("cat", "dog", "cat", "dog")
        assert dataset.predicted_labels == ("dog", "cat", "cat", "cat")
        assert dataset.labels is None
        assert dataset.metadata["name"] == "unit_test_predictions"

    def test_load_from_yaml_file(self, tmp_path: Path) -> None:
        """Datasets should load correctly from YAML files."""
        path = tmp_path / "predictions.yml"
        path.write_text(
            """
true_labels: [a, b, b]
predicted_labels: [a, b, a]
labels: [b, a]
            """.strip(),
            encoding="utf-8",
        )

        dataset = load_prediction_dataset(path)

        assert dataset.size == 3
        assert dataset.labels == ("b", "a")

    def test_load_from_csv_file(self, tmp_path: Path) -> None:
        """CSV files should provide ``true`` and ``predicted`` columns."""
        path = tmp_path / "predictions.csv"
        path.write_text(
            "id,true,predicted\n1,cat,dog\n2, dog ,dog\n3,cat,cat\n",
            encoding="utf-8",
        )

        dataset = load_prediction_dataset(path)

        assert dataset.true_labels == ("cat", "dog", "cat")
        assert dataset.predicted_labels == ("dog", "dog", "cat")
        assert dataset.metadata["source"] == str(path)

    def test_csv_missing_columns_raises(self, tmp_path: Path) -> None:
        """CSV files without the required columns should be rejected."""
        path = tmp_path / "predictions.csv"
        path.write_text("true,guess\ncat,dog\n", encoding="utf-8")

        with pytest.raises(ValueError, match="missing required columns: predicted"):
            load_prediction_dataset(path)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Missing files should raise ``FileNotFoundError``."""
        missing = tmp_path / "does_not_exist.json"

        with pytest.raises(FileNotFoundError):
            load_prediction_dataset(missing)

    def test_non_mapping_payload_raises(self, tmp_path: Path) -> None:
        """Top level lists should raise ``ValueError``."""
        path = tmp_path / "invalid.yaml"
        path.write_text("- not: a-mapping", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping"):
            load_prediction_dataset(path)

    def test_unsupported_suffix_raises(self, tmp_path: Path) -> None:
        """Unknown file extensions should raise ``ValueError``."""
        path = tmp_path / "predictions.txt"
        path.write_text("cat dog", encoding="utf-8")

        with pytest.raises(ValueError, match="Unsupported prediction dataset format"):
            load_prediction_dataset(path)


class TestPredictionDatasetValidation:
    """Validate payload coercion and conversion."""

    def test_scalar_labels_are_stringified(self) -> None:
        """Numeric and boolean labels should become strings."""
        dataset = PredictionDataset.from_mapping(
            {"true_labels": [1, 2, True], "predicted_labels": [2, 2, True]},
        )

        assert dataset.true_labels == ("1", "2", "true")
        assert dataset.predicted_labels == ("2", "2", "true")

    def test_missing_field_raises_value_error(self) -> None:
        """Missing fields should produce a located ``ValueError``."""
        with pytest.raises(ValueError, match="predicted_labels"):
            PredictionDataset.from_mapping({"true_labels": ["a"]})

    def test_unknown_field_rejected(self) -> None:
        """Unexpected keys should be rejected."""
        with pytest.raises(ValueError, match="unexpected"):
            PredictionDataset.from_mapping(
                {"true_labels": ["a"], "predicted_labels": ["a"], "unexpected": 1},
            )

    def test_dataset_is_frozen(self) -> None:
        """Datasets should be immutable once validated."""
        dataset = PredictionDataset.from_mapping(_sample_payload())

        with pytest.raises(ValidationError):
            dataset.true_labels = ("x",)  # type: ignore[misc]

    def test_to_confusion_matrix(self) -> None:
        """Datasets should tally into a confusion matrix."""
        dataset = PredictionDataset.from_mapping(_sample_payload())

        matrix = dataset.to_confusion_matrix()

        assert matrix.labels == ("cat", "dog")
        assert matrix.to_lists() == [[1, 1], [2, 0]]

    def test_inconsistent_predictions_surface(self) -> None:
        """Tallying should raise when predictions use unknown labels."""
        dataset = PredictionDataset.from_mapping(
            {"true_labels": ["a", "b"], "predicted_labels": ["a", "c"]},
        )

        with pytest.raises(InconsistentPredictionsError):
            dataset.to_confusion_matrix()

    def test_to_dict(self) -> None:
        """Serialised datasets should contain every field."""
        payload = PredictionDataset.from_mapping(_sample_payload()).to_dict()

        assert set(payload) == {
            "true_labels",
            "predicted_labels",
            "labels",
            "metadata",
        }
