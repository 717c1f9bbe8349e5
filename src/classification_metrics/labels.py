"""Label set helpers shared by the confusion matrix factory."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .exceptions import InconsistentPredictionsError


def sort_labels(labels: Iterable[str]) -> tuple[str, ...]:
    """Return the unique labels in ascending order."""
    return tuple(sorted(set(labels)))


def _ordered_difference(left: Iterable[str], right: Iterable[str]) -> list[str]:
    """Return unique items of ``left`` absent from ``right``, keeping order."""
    excluded = set(right)
    seen: set[str] = set()
    difference: list[str] = []
    for item in left:
        if item in excluded or item in seen:
            continue
        seen.add(item)
        difference.append(item)
    return difference


def ensure_labels_are_consistent(
    true_labels: Sequence[str],
    predicted_labels: Sequence[str],
    labels: Sequence[str],
) -> None:
    """Verify that ``labels`` covers exactly the labels observed in the data.

    Labels present in the data but absent from ``labels`` are reported first;
    that error lists the missing labels followed by any extra ones.
    """
    observed = [*true_labels, *predicted_labels]

    missing = _ordered_difference(observed, labels)
    extra = _ordered_difference(labels, observed)
    if missing:
        msg = (
            "You must provide all labels. "
            f"Missing labels: [ {', '.join([*missing, *extra])} ]"
        )
        raise InconsistentPredictionsError(msg)

    if extra:
        msg = (
            "You provided some extra labels. "
            f"Extra labels: [ {', '.join(extra)} ]"
        )
        raise InconsistentPredictionsError(msg)


__all__ = ["ensure_labels_are_consistent", "sort_labels"]
