"""Mint counters read from the FCT mint contract over JSON-RPC."""

from __future__ import annotations

from typing import Any, Optional

import requests
from web3 import Web3
from web3.exceptions import Web3Exception

from fctcast.data.constants import FCT_MINT_CONTRACT, RPC_URL
from fctcast.engine.state import ContractSnapshot
from fctcast.errors import SourceUnavailable
from fctcast.supply.issuance import parse_counter

DATA_GAS_FUNCTION = "fctMintPeriodL1DataGas"
MINT_RATE_FUNCTION = "fctMintRate"

MINT_ABI = [
    {
        "inputs": [],
        "name": name,
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    }
    for name in (DATA_GAS_FUNCTION, MINT_RATE_FUNCTION)
]


class ContractReader:
    """Read ``fctMintPeriodL1DataGas`` and ``fctMintRate``, optionally at a past block."""

    def __init__(
        self,
        rpc_url: str = RPC_URL,
        address: str = FCT_MINT_CONTRACT,
        timeout: float = 10.0,
        contract: Any = None,
    ) -> None:
        self.rpc_url = rpc_url
        self.address = address
        if contract is None:
            w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))
            contract = w3.eth.contract(address=Web3.to_checksum_address(address), abi=MINT_ABI)
        self.contract = contract

    def _call(self, function: str, block_identifier: Any) -> Any:
        try:
            return getattr(self.contract.functions, function)().call(block_identifier=block_identifier)
        except (Web3Exception, requests.RequestException, OSError, ValueError) as exc:
            raise SourceUnavailable(f"{function}() at block {block_identifier} failed: {exc}") from exc

    def head_block(self) -> int:
        """Return the RPC node's current block number."""

        try:
            return int(self.contract.w3.eth.block_number)
        except (Web3Exception, requests.RequestException, OSError, ValueError) as exc:
            raise SourceUnavailable(f"eth_blockNumber failed: {exc}") from exc

    def read_snapshot(self, block: Optional[int] = None) -> ContractSnapshot:
        """Return both counters as of ``block``.

        When ``block`` is None the head is resolved once and both counters are
        read at that block, so the pair always comes from the same state even
        if the chain advances between the two calls.
        """

        if block is None:
            block = self.head_block()
        data_gas = self._call(DATA_GAS_FUNCTION, block)
        mint_rate = self._call(MINT_RATE_FUNCTION, block)
        return ContractSnapshot(
            data_gas=parse_counter(data_gas, DATA_GAS_FUNCTION),
            mint_rate=parse_counter(mint_rate, MINT_RATE_FUNCTION),
            block=block,
        )


__all__ = ["MINT_ABI", "ContractReader"]
