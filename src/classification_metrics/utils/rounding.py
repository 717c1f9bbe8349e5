"""Decimal rounding shared by every score."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int) -> float:
    """Round ``value`` to ``places`` decimals, sending halves away from zero.

    The shortest decimal representation of the float is rounded, so ``0.125``
    becomes ``0.13`` even though its binary value cannot be represented
    exactly.
    """
    quantum = Decimal(10) ** -places
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


__all__ = ["round_half_up"]
