"""Loading paired true/predicted labels from JSON, YAML or CSV files."""

from __future__ import annotations

import csv
import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .confusion_matrix import ConfusionMatrix

CSV_TRUE_COLUMN = "true"
CSV_PREDICTED_COLUMN = "predicted"


def _stringify_labels(value: object) -> object:
    """Coerce scalar labels (``1``, ``true``) to strings before validation."""
    if isinstance(value, (list, tuple)):
        items = cast("list[object] | tuple[object, ...]", value)
        return tuple(
            item if isinstance(item, str) else json.dumps(item) for item in items
        )
    return value


class PredictionDataset(BaseModel):
    """Ground-truth and predicted labels for a batch of instances."""

    true_labels: tuple[str, ...] = Field(
        description="Ground truth label of each instance",
    )
    predicted_labels: tuple[str, ...] = Field(
        description="Predicted label of each instance, aligned with true_labels",
    )
    labels: tuple[str, ...] | None = Field(
        default=None,
        description="Optional explicit label set; must match the observed labels",
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Arbitrary metadata describing the dataset",
    )

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("true_labels", "predicted_labels", "labels", mode="before")
    @classmethod
    def _coerce_labels(cls, value: object) -> object:
        return _stringify_labels(value)

    @property
    def size(self) -> int:
        """Return the number of labelled instances."""
        return len(self.true_labels)

    def to_confusion_matrix(self) -> ConfusionMatrix:
        """Tally the dataset into a confusion matrix."""
        return ConfusionMatrix.from_predictions(
            self.true_labels,
            self.predicted_labels,
            labels=self.labels,
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> PredictionDataset:
        """Validate and construct a dataset from a mapping."""
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            errors = exc.errors()
            if errors:
                location = ".".join(str(part) for part in errors[0].get("loc", ()))
                detail = errors[0].get("msg")
                if detail:
                    message = f"{location}: {detail}" if location else detail
                    raise ValueError(message) from exc
            message = "Invalid prediction dataset payload"
            raise ValueError(message) from exc

    @classmethod
    def from_path(cls, path: Path | str) -> PredictionDataset:
        """Load a dataset from a JSON, YAML or CSV file."""
        resolved = Path(path)
        if not resolved.exists():
            msg = f"Prediction dataset file not found: {resolved}"
            raise FileNotFoundError(msg)

        suffix = resolved.suffix.lower()
        if suffix == ".csv":
            return cls.from_mapping(_read_csv_columns(resolved))

        raw = resolved.read_text(encoding="utf-8")
        loaded: Any
        if suffix in {".yaml", ".yml"}:
            loaded = yaml.safe_load(raw) or {}
        elif suffix == ".json":
            loaded = json.loads(raw or "{}")
        else:
            msg = f"Unsupported prediction dataset format: {resolved.suffix}"
            raise ValueError(msg)

        if not isinstance(loaded, Mapping):
            msg = "Prediction dataset file must contain a mapping at the top level"
            raise ValueError(msg)

        return cls.from_mapping(cast(Mapping[str, Any], loaded))

    def to_dict(self) -> dict[str, Any]:
        """Serialize the dataset into a standard dictionary."""
        return self.model_dump(mode="python")


def _read_csv_columns(path: Path) -> dict[str, object]:
    """Read the ``true`` and ``predicted`` columns of a CSV file."""
    with path.open("r", newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        fieldnames = [name.strip() for name in reader.fieldnames or ()]
        missing = [
            column
            for column in (CSV_TRUE_COLUMN, CSV_PREDICTED_COLUMN)
            if column not in fieldnames
        ]
        if missing:
            msg = f"CSV file is missing required columns: {', '.join(missing)}"
            raise ValueError(msg)

        true_labels: list[str] = []
        predicted_labels: list[str] = []
        for row in reader:
            normalized = {
                key.strip(): value.strip()
                for key, value in row.items()
                if isinstance(key, str) and isinstance(value, str)
            }
            true_labels.append(normalized.get(CSV_TRUE_COLUMN, ""))
            predicted_labels.append(normalized.get(CSV_PREDICTED_COLUMN, ""))

    return {
        "true_labels": true_labels,
        "predicted_labels": predicted_labels,
        "metadata": {"source": str(path)},
    }


def load_prediction_dataset(path: Path | str) -> PredictionDataset:
    """Load a prediction dataset from the provided path."""
    return PredictionDataset.from_path(path)


__all__ = [
    "CSV_TRUE_COLUMN",
    "CSV_PREDICTED_COLUMN",
    "PredictionDataset",
    "load_prediction_dataset",
]
