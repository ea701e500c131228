"""Conversion of raw mint counters into FCT issuance.

The mint contract reports two counters for the running adjustment period:
``fctMintPeriodL1DataGas`` (L1 data gas consumed so far) and ``fctMintRate``
(wei of FCT minted per unit of gas). Their product is the FCT minted this
period in wei. Realistic values overflow a double's 53-bit mantissa, so the
product is always taken on Python ints and only the final division is rounded.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from fctcast.config import ChainConstants
from fctcast.engine.state import ContractSnapshot, IssuanceSample
from fctcast.errors import ConversionError
from fctcast.utils.rounding import div_round_half_up


def parse_counter(value: Any, name: str) -> int:
    """Parse a raw counter returned by the RPC layer as a non-negative int."""

    if isinstance(value, bool):
        raise ConversionError(f"{name} must be an integer, received {value!r}")
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            parsed = int(text, 16) if text.lower().startswith("0x") else int(text, 10)
        except ValueError as exc:
            raise ConversionError(f"{name} is not an integer: {value!r}") from exc
    else:
        raise ConversionError(f"{name} has unsupported type {type(value).__name__}")
    if parsed < 0:
        raise ConversionError(f"{name} must be non-negative, received {parsed}")
    return parsed


def minted_wei(data_gas: int, mint_rate: int) -> int:
    """Exact FCT minted in wei."""

    return parse_counter(data_gas, "data_gas") * parse_counter(mint_rate, "mint_rate")


def minted_amount(data_gas: int, mint_rate: int, constants: ChainConstants) -> int:
    """FCT minted this period in whole units, rounded to nearest."""

    return div_round_half_up(minted_wei(data_gas, mint_rate), constants.whole_unit_scale)


def rate_in_display_units(mint_rate: int, constants: ChainConstants) -> int:
    """Mint rate in gwei, the unit of the forecast and of the rate ceiling."""

    return div_round_half_up(parse_counter(mint_rate, "mint_rate"), constants.rate_scale)


def snapshot_minted(snapshot: ContractSnapshot, constants: ChainConstants) -> int:
    return minted_amount(snapshot.data_gas, snapshot.mint_rate, constants)


def snapshot_to_sample(
    snapshot: ContractSnapshot, height: int, timestamp: datetime, constants: ChainConstants
) -> IssuanceSample:
    return IssuanceSample(height=height, minted=snapshot_minted(snapshot, constants), timestamp=timestamp)


__all__ = [
    "parse_counter",
    "minted_wei",
    "minted_amount",
    "rate_in_display_units",
    "snapshot_minted",
    "snapshot_to_sample",
]
