"""Facet mainnet protocol constants and endpoints."""

from __future__ import annotations

ADJUSTMENT_PERIOD_BLOCKS = 10_000
BLOCKS_PER_HALVING = 2_630_000
INITIAL_TARGET_FCT = 400_000
MAX_MINT_RATE_GWEI = 10_000_000

WEI_PER_GWEI = 10**9
WEI_PER_FCT = 10**18

BLOCK_TIME_SECONDS = 12
HISTORY_STRIDE_BLOCKS = 1_000

EXPLORER_BLOCKS_URL = "https://explorer.facet.org/api/v2/main-page/blocks"
RPC_URL = "https://mainnet.facet.org/"
FCT_MINT_CONTRACT = "0x4200000000000000000000000000000000000015"
