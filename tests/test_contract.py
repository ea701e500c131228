import pytest
from web3.exceptions import Web3Exception

from fctcast.config import ChainConstants
from fctcast.data.contract import MINT_ABI, ContractReader
from fctcast.engine.state import ContractSnapshot
from fctcast.errors import ConversionError, SourceUnavailable
from fctcast.supply.issuance import snapshot_minted


class _Call:
    def __init__(self, name: str, contract: "FakeContract") -> None:
        self.name = name
        self.contract = contract

    def call(self, block_identifier="latest"):
        self.contract.log.append((self.name, block_identifier))
        self.contract.head += self.contract.head_step
        value = self.contract.values[self.name]
        if callable(value):
            value = value(block_identifier)
        if isinstance(value, Exception):
            raise value
        return value


class _Functions:
    def __init__(self, contract: "FakeContract") -> None:
        self._contract = contract

    def __getattr__(self, name: str):
        return lambda: _Call(name, self._contract)


class _Eth:
    def __init__(self, contract: "FakeContract") -> None:
        self._contract = contract

    @property
    def block_number(self) -> int:
        head = self._contract.head
        if isinstance(head, Exception):
            raise head
        return head


class _Web3:
    def __init__(self, contract: "FakeContract") -> None:
        self.eth = _Eth(contract)


class FakeContract:
    """Contract stand-in whose head optionally advances by ``head_step`` on every call."""

    def __init__(self, head=1_234_567, head_step: int = 0, **values) -> None:
        self.log: list = []
        self.head = head
        self.head_step = head_step
        self.values = values
        self.functions = _Functions(self)
        self.w3 = _Web3(self)


def test_head_read_pins_both_counters_to_one_block() -> None:
    contract = FakeContract(fctMintPeriodL1DataGas=400_000_000, fctMintRate=10**15)
    snapshot = ContractReader(contract=contract).read_snapshot()
    assert snapshot.data_gas == 400_000_000
    assert snapshot.mint_rate == 10**15
    assert snapshot.block == 1_234_567
    assert contract.log == [("fctMintPeriodL1DataGas", 1_234_567), ("fctMintRate", 1_234_567)]


def test_head_moving_across_period_boundary_keeps_counters_consistent(constants: ChainConstants) -> None:
    # Block 19,999 closes period 2; at 20,000 the gas counter resets and the rate doubles.
    def data_gas(block):
        return 400_000_000 if block < 20_000 else 0

    def mint_rate(block):
        return 10**15 if block < 20_000 else 2 * 10**15

    contract = FakeContract(head=19_999, head_step=1, fctMintPeriodL1DataGas=data_gas, fctMintRate=mint_rate)
    snapshot = ContractReader(contract=contract).read_snapshot()
    assert {block for _, block in contract.log} == {19_999}
    assert snapshot == ContractSnapshot(data_gas=400_000_000, mint_rate=10**15, block=19_999)
    assert snapshot_minted(snapshot, constants) == 400_000


def test_head_lookup_failure_maps_to_source_unavailable() -> None:
    contract = FakeContract(head=ConnectionError("refused"), fctMintPeriodL1DataGas=1, fctMintRate=1)
    with pytest.raises(SourceUnavailable, match="eth_blockNumber"):
        ContractReader(contract=contract).read_snapshot()
    assert contract.log == []


def test_reads_historical_block() -> None:
    contract = FakeContract(fctMintPeriodL1DataGas=10, fctMintRate=20)
    snapshot = ContractReader(contract=contract).read_snapshot(1_231_000)
    assert snapshot.block == 1_231_000
    assert {block for _, block in contract.log} == {1_231_000}


def test_rpc_failure_maps_to_source_unavailable() -> None:
    contract = FakeContract(fctMintPeriodL1DataGas=Web3Exception("header not found"), fctMintRate=1)
    with pytest.raises(SourceUnavailable, match="fctMintPeriodL1DataGas"):
        ContractReader(contract=contract).read_snapshot(5)


def test_connection_failure_maps_to_source_unavailable() -> None:
    contract = FakeContract(fctMintPeriodL1DataGas=1, fctMintRate=ConnectionError("refused"))
    with pytest.raises(SourceUnavailable):
        ContractReader(contract=contract).read_snapshot()


def test_unparsable_counter_raises_conversion_error() -> None:
    contract = FakeContract(fctMintPeriodL1DataGas=-3, fctMintRate=1)
    with pytest.raises(ConversionError):
        ContractReader(contract=contract).read_snapshot()


def test_builds_web3_contract_without_network() -> None:
    reader = ContractReader("http://127.0.0.1:8545", "0x4200000000000000000000000000000000000015", timeout=1)
    assert reader.contract.address == "0x4200000000000000000000000000000000000015"
    assert {entry["name"] for entry in MINT_ABI} == {"fctMintPeriodL1DataGas", "fctMintRate"}
