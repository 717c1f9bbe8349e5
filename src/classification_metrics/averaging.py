"""Strategies reducing per-label scores to a single aggregate."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Protocol, cast

from classification_metrics.base import BaseComponent
from classification_metrics.utils.rounding import round_half_up

if TYPE_CHECKING:
    from .confusion_matrix import ConfusionMatrix


class Calculator(Protocol):
    """Protocol implemented by averaging calculators."""

    def calculate(
        self,
        confusion_matrix: ConfusionMatrix,
        measures: Mapping[str, float],
    ) -> float:
        """Reduce ``measures`` to one score, consulting the matrix if needed."""
        ...


class MacroAverage(BaseComponent):
    """Unweighted mean of the per-label scores."""

    def calculate(
        self,
        confusion_matrix: ConfusionMatrix,
        measures: Mapping[str, float],
    ) -> float:
        """Return the arithmetic mean of ``measures`` rounded to 4 places."""
        if not measures:
            return 0.0
        result = round_half_up(sum(measures.values()) / len(measures), 4)
        self.logger.debug(
            "Computed macro average",
            labels=len(measures),
            result=result,
        )
        return result


class MicroAverage(BaseComponent):
    """Global score recomputed from the summed true and false positives.

    The supplied measures are ignored. Every instance carries exactly one
    true and one predicted label from the same label set, so the summed false
    positives equal the summed false negatives and the same ratio serves as
    micro precision, micro recall and micro F1 (overall accuracy).
    """

    def calculate(
        self,
        confusion_matrix: ConfusionMatrix,
        measures: Mapping[str, float],
    ) -> float:
        """Return ``sum(TP) / (sum(TP) + sum(FP))`` rounded to 4 places."""
        true_positives = cast("dict[str, int]", confusion_matrix.true_positives())
        false_positives = cast("dict[str, int]", confusion_matrix.false_positives())
        total_true_positives = sum(true_positives.values())
        total_false_positives = sum(false_positives.values())

        denominator = total_true_positives + total_false_positives
        if denominator <= 0:
            return 0.0
        result = round_half_up(total_true_positives / denominator, 4)
        self.logger.debug(
            "Computed micro average",
            true_positives=total_true_positives,
            false_positives=total_false_positives,
            result=result,
        )
        return result


class WeightedAverage(BaseComponent):
    """Mean of the per-label scores weighted by each label's support.

    Support is read from the matrix. A label present in ``measures`` but not
    in the matrix weighs ``0``: its score drops out of the weighted sum while
    the total support stays that of the matrix.
    """

    def calculate(
        self,
        confusion_matrix: ConfusionMatrix,
        measures: Mapping[str, float],
    ) -> float:
        """Return ``sum(score * support) / sum(support)`` rounded to 4 places."""
        if not measures:
            return 0.0

        supports = cast("dict[str, int]", confusion_matrix.support())
        total_support = sum(supports.values())
        if total_support == 0:
            return 0.0

        weighted_sum = 0.0
        for label, value in measures.items():
            weighted_sum += value * supports.get(label, 0)

        result = round_half_up(weighted_sum / total_support, 4)
        self.logger.debug(
            "Computed weighted average",
            total_support=total_support,
            result=result,
        )
        return result


class AverageStrategy(str, Enum):
    """Supported multiclass averaging strategies."""

    MACRO = "macro"
    MICRO = "micro"
    WEIGHTED = "weighted"

    def to_calculator(self) -> Calculator:
        """Return the calculator implementing this strategy."""
        match self:
            case AverageStrategy.MACRO:
                return MacroAverage()
            case AverageStrategy.MICRO:
                return MicroAverage()
            case AverageStrategy.WEIGHTED:
                return WeightedAverage()


__all__ = [
    "AverageStrategy",
    "Calculator",
    "MacroAverage",
    "MicroAverage",
    "WeightedAverage",
]
