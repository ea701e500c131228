"""Validation helpers."""

from __future__ import annotations

from web3 import Web3

from fctcast.config import Config


def validate_config(config: Config) -> None:
    """Cross-field checks pydantic field constraints cannot express."""

    chain = config.chain
    if chain.whole_unit_scale % chain.rate_scale:
        raise ValueError("chain.whole_unit_scale must be a multiple of chain.rate_scale")
    if chain.halving_interval < chain.period_length:
        raise ValueError("chain.halving_interval must span at least one adjustment period")
    if config.history.stride_blocks > chain.period_length:
        raise ValueError("history.stride_blocks cannot exceed chain.period_length")
    if not Web3.is_address(config.sources.contract_address):
        raise ValueError(f"sources.contract_address is not an address: {config.sources.contract_address}")
    for name in ("explorer_url", "rpc_url"):
        url = getattr(config.sources, name)
        if not url.startswith(("http://", "https://")):
            raise ValueError(f"sources.{name} must be an http(s) URL, received {url}")


__all__ = ["validate_config"]
