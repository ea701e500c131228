"""Integer rounding helpers."""

from __future__ import annotations


def div_round_half_up(numerator: int, denominator: int) -> int:
    """Return ``numerator / denominator`` rounded to nearest, ties towards +inf.

    Exact for arbitrarily large integers; matches JavaScript ``Math.round``.
    """

    if denominator <= 0:
        raise ValueError("denominator must be positive")
    return (2 * numerator + denominator) // (2 * denominator)


__all__ = ["div_round_half_up"]
