import threading
import time
from datetime import datetime, timezone
from typing import Dict, Optional, Union

import pytest

from fctcast.config import ChainConstants, Config
from fctcast.engine.state import ContractSnapshot

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
WEI_PER_GWEI = 10**9


class FakeReader:
    """Snapshot reader keyed by block; ``None`` is the chain head.

    With a ``barrier`` every read blocks until the barrier's other parties
    arrive, so reads issued one after another fail with ``BrokenBarrierError``.
    """

    def __init__(
        self,
        snapshots: Dict[Optional[int], Union[ContractSnapshot, Exception]],
        delay: float = 0.0,
        barrier: Optional[threading.Barrier] = None,
    ) -> None:
        self.snapshots = snapshots
        self.delay = delay
        self.barrier = barrier
        self.calls = []
        self._lock = threading.Lock()

    def read_snapshot(self, block: Optional[int] = None) -> ContractSnapshot:
        with self._lock:
            self.calls.append(block)
        if self.barrier is not None:
            self.barrier.wait()
        if self.delay and block is not None:
            # Later heights complete first.
            time.sleep(self.delay / (1 + block // 1000))
        value = self.snapshots[block]
        if isinstance(value, Exception):
            raise value
        return value


def snapshot_for(minted_fct: int, rate_gwei: int, block: Optional[int] = None) -> ContractSnapshot:
    """Snapshot whose counters convert to exactly ``minted_fct`` at ``rate_gwei``."""

    rate_wei = rate_gwei * WEI_PER_GWEI
    data_gas, remainder = divmod(minted_fct * 10**18, rate_wei)
    assert remainder == 0
    return ContractSnapshot(data_gas=data_gas, mint_rate=rate_wei, block=block)


@pytest.fixture
def constants() -> ChainConstants:
    return ChainConstants()


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW
