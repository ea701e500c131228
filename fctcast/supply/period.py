"""Adjustment period accounting."""

from __future__ import annotations

from fctcast.engine.state import PeriodWindow


def period_window(height: int, period_length: int) -> PeriodWindow:
    """Locate ``height`` within its adjustment period.

    Periods are numbered from 1 and the block at ``height`` counts as elapsed,
    so ``elapsed`` runs from 1 on the first block to ``period_length`` on the last.
    """

    if height < 0:
        raise ValueError(f"block height must be non-negative, received {height}")
    if period_length <= 0:
        raise ValueError(f"period length must be positive, received {period_length}")
    index = height // period_length + 1
    start = (index - 1) * period_length
    elapsed = height - start + 1
    return PeriodWindow(
        index=index,
        start=start,
        end=start + period_length - 1,
        elapsed=elapsed,
        remaining=period_length - elapsed,
        length=period_length,
    )


__all__ = ["period_window"]
