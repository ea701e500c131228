"""Halving schedule for the per-period issuance target."""

from __future__ import annotations

from fctcast.config import ChainConstants
from fctcast.engine.state import HalvingState


def halving_epoch(height: int, constants: ChainConstants) -> int:
    """Number of halvings that have occurred at ``height``."""

    if height < 0:
        raise ValueError(f"block height must be non-negative, received {height}")
    return height // constants.halving_interval


def halving_state(height: int, constants: ChainConstants) -> HalvingState:
    """Return the halving epoch and the per-period FCT target at ``height``."""

    epoch = halving_epoch(height, constants)
    return HalvingState(epoch=epoch, target=constants.initial_target >> epoch)


__all__ = ["halving_epoch", "halving_state"]
