"""Configuration models and loaders for fctcast."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

from fctcast.data.constants import (
    ADJUSTMENT_PERIOD_BLOCKS,
    BLOCK_TIME_SECONDS,
    BLOCKS_PER_HALVING,
    EXPLORER_BLOCKS_URL,
    FCT_MINT_CONTRACT,
    HISTORY_STRIDE_BLOCKS,
    INITIAL_TARGET_FCT,
    MAX_MINT_RATE_GWEI,
    RPC_URL,
    WEI_PER_FCT,
    WEI_PER_GWEI,
)


class MetaParams(BaseModel):
    name: str = "facet-mainnet"
    description: str | None = None


class ChainConstants(BaseModel):
    """Protocol parameters of the self-adjusting mint."""

    model_config = ConfigDict(frozen=True)

    period_length: int = Field(ADJUSTMENT_PERIOD_BLOCKS, gt=0, description="Blocks per adjustment period")
    halving_interval: int = Field(BLOCKS_PER_HALVING, gt=0, description="Blocks between target halvings")
    initial_target: int = Field(INITIAL_TARGET_FCT, gt=0, description="Per-period issuance target before any halving (FCT)")
    max_mint_rate: int = Field(MAX_MINT_RATE_GWEI, gt=0, description="Hard mint-rate ceiling (gwei)")
    rate_scale: int = Field(WEI_PER_GWEI, gt=0, description="Raw mint-rate units per display unit")
    whole_unit_scale: int = Field(WEI_PER_FCT, gt=0, description="Smallest token units per whole FCT")


class SourceParams(BaseModel):
    """Endpoints of the external collaborators."""

    explorer_url: str = Field(EXPLORER_BLOCKS_URL, description="Explorer endpoint listing the latest blocks")
    rpc_url: str = Field(RPC_URL, description="JSON-RPC endpoint")
    contract_address: str = Field(FCT_MINT_CONTRACT, description="Contract exposing the mint counters")
    timeout_seconds: float = Field(10.0, gt=0)


class HistoryParams(BaseModel):
    """Historical issuance reconstruction settings."""

    enabled: bool = True
    stride_blocks: int = Field(HISTORY_STRIDE_BLOCKS, gt=0, description="Blocks between historical samples")
    block_time_seconds: float = Field(BLOCK_TIME_SECONDS, gt=0, description="Assumed block time for synthetic timestamps")
    max_workers: int = Field(8, ge=1, le=64, description="Concurrent historical reads")


class Config(BaseModel):
    """Top-level configuration model."""

    meta: MetaParams = Field(default_factory=MetaParams)
    chain: ChainConstants = Field(default_factory=ChainConstants)
    sources: SourceParams = Field(default_factory=SourceParams)
    history: HistoryParams = Field(default_factory=HistoryParams)
    log_level: str = "INFO"


def _deep_update(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged: Dict[str, Any] = dict(base)
    for key, value in overrides.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_update(merged[key], value)
        else:
            merged[key] = value
    return merged


def default_config_dict() -> Dict[str, Any]:
    """Return the default configuration as a dictionary."""

    return Config().model_dump()


def load_config(path: str | Path | None = None, overrides: Optional[Dict[str, Any]] = None) -> Config:
    """Load configuration from YAML and merge with defaults."""

    base_dict = default_config_dict()
    if path is not None:
        with Path(path).open("r", encoding="utf-8") as handle:
            user_data = yaml.safe_load(handle) or {}
        if not isinstance(user_data, dict):
            raise ValueError(f"Config YAML {path} must map to an object")
        base_dict = _deep_update(base_dict, user_data)
    if overrides:
        base_dict = _deep_update(base_dict, overrides)
    return Config.model_validate(base_dict)


__all__ = [
    "Config",
    "MetaParams",
    "ChainConstants",
    "SourceParams",
    "HistoryParams",
    "load_config",
]
