"""Next-period mint-rate projection."""

from __future__ import annotations

import math

from fctcast.config import ChainConstants
from fctcast.engine.state import Projection
from fctcast.errors import InvalidStateError
from fctcast.utils.rounding import div_round_half_up

MAX_RATE_MULTIPLIER = 2


def rate_bounds(current_rate: int, constants: ChainConstants) -> tuple[int, int]:
    """Return ``(lower, upper)`` limits on the next period's mint rate.

    A single adjustment moves the rate by at most a factor of two either way,
    and never above the protocol ceiling.
    """

    upper = min(constants.max_mint_rate, current_rate * MAX_RATE_MULTIPLIER)
    lower = div_round_half_up(current_rate, MAX_RATE_MULTIPLIER)
    return lower, upper


def clamp_rate(rate: int, lower: int, upper: int) -> int:
    """Clamp ``rate`` into ``[lower, upper]``.

    When ``upper`` (the protocol ceiling) sits below ``lower`` (half the
    current rate) the ceiling is returned. On a live chain the current rate
    never exceeds the ceiling, so the two bounds cannot cross.
    """

    return min(max(rate, lower), upper)


def project_issuance(elapsed: int, issuance_so_far: int, period_length: int) -> int:
    """Extrapolate period-end issuance assuming a constant per-block mint."""

    if elapsed <= 0:
        raise InvalidStateError(f"blocks elapsed in period must be positive, received {elapsed}")
    return div_round_half_up(issuance_so_far * period_length, elapsed)


def project_forecast(
    elapsed: int,
    target: int,
    issuance_so_far: int,
    current_rate: int,
    constants: ChainConstants,
) -> Projection:
    """Project period-end issuance and the bounded mint rate for the next period.

    Args:
        elapsed: Blocks elapsed in the current period, including the current block.
        target: Per-period issuance target (FCT) for the current halving epoch.
        issuance_so_far: FCT minted so far this period.
        current_rate: Current mint rate (gwei).
        constants: Chain constants supplying the period length and rate ceiling.

    Raises:
        InvalidStateError: ``elapsed`` or ``current_rate`` is not positive.
    """

    if current_rate <= 0:
        raise InvalidStateError(f"current mint rate must be positive, received {current_rate}")
    projected = project_issuance(elapsed, issuance_so_far, constants.period_length)

    if projected == 0:
        ideal = current_rate
    else:
        ideal = div_round_half_up(current_rate * target, projected)

    lower, upper = rate_bounds(current_rate, constants)
    forecasted = clamp_rate(ideal, lower, upper)
    percent_change = (forecasted - current_rate) / current_rate * 100

    if target > 0:
        completion = projected / target * 100
    else:
        completion = math.inf if projected > 0 else 0.0

    return Projection(
        projected_issuance=projected,
        ideal_rate=ideal,
        lower_bound=lower,
        upper_bound=upper,
        forecasted_rate=forecasted,
        percent_change=percent_change,
        target_completion_percent=completion,
    )


__all__ = ["MAX_RATE_MULTIPLIER", "rate_bounds", "clamp_rate", "project_issuance", "project_forecast"]
