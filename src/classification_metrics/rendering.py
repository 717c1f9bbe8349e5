"""Human readable renderings of confusion matrices."""

from __future__ import annotations

from collections.abc import Sequence

from rich.table import Table

CELL_WIDTH = 8
ROW_LABEL_WIDTH = 12


def _pad(text: str, width: int = CELL_WIDTH) -> str:
    return text.rjust(width)


def render_confusion_matrix(
    labels: Sequence[str],
    matrix: Sequence[Sequence[int]],
) -> str:
    """Render the matrix as fixed-width text with one row per true label."""
    header = " " * ROW_LABEL_WIDTH + "".join(_pad(label) for label in labels)
    rows = [
        _pad(label, ROW_LABEL_WIDTH) + "".join(_pad(str(value)) for value in row)
        for label, row in zip(labels, matrix, strict=True)
    ]
    return "\n".join([header, *rows]) + "\n"


def build_confusion_table(
    labels: Sequence[str],
    matrix: Sequence[Sequence[int]],
    *,
    title: str | None = "Confusion matrix",
) -> Table:
    """Build a rich table with true labels as rows and predictions as columns."""
    table = Table(title=title, show_lines=False)
    table.add_column("true \\ predicted", justify="right", style="bold")
    for label in labels:
        table.add_column(label, justify="right")

    for label, row in zip(labels, matrix, strict=True):
        table.add_row(label, *(str(value) for value in row))
    return table


__all__ = [
    "CELL_WIDTH",
    "ROW_LABEL_WIDTH",
    "build_confusion_table",
    "render_confusion_matrix",
]
