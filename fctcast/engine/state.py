"""Value objects passed between the forecast engine stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from fctcast.errors import HistoricalSampleFailure


@dataclass(frozen=True)
class HalvingState:
    """Halving epoch and per-period issuance target at a height."""

    epoch: int
    target: int


@dataclass(frozen=True)
class PeriodWindow:
    """Adjustment period containing a height (``elapsed`` counts the current block)."""

    index: int
    start: int
    end: int
    elapsed: int
    remaining: int
    length: int

    @property
    def percent_complete(self) -> float:
        return self.elapsed / self.length * 100


@dataclass(frozen=True)
class ContractSnapshot:
    """Raw mint counters; ``block`` is None for the chain head."""

    data_gas: int
    mint_rate: int
    block: Optional[int] = None


@dataclass(frozen=True)
class IssuanceSample:
    """Minted FCT at a height. ``timestamp`` is extrapolated from an assumed block time."""

    height: int
    minted: int
    timestamp: datetime


@dataclass(frozen=True)
class Projection:
    projected_issuance: int
    ideal_rate: int
    lower_bound: int
    upper_bound: int
    forecasted_rate: int
    percent_change: float
    target_completion_percent: float


@dataclass(frozen=True)
class ForecastResult:
    """Headline numbers of one forecast."""

    block_height: int
    halving: HalvingState
    period: PeriodWindow
    current_rate: int
    issuance_so_far: int
    projected_issuance: int
    ideal_rate: int
    lower_bound: int
    upper_bound: int
    forecasted_rate: int
    percent_change: float
    target_completion_percent: float

    @property
    def target(self) -> int:
        return self.halving.target

    @property
    def percent_complete(self) -> float:
        return self.period.percent_complete

    @property
    def blocks_remaining(self) -> int:
        return self.period.remaining

    @property
    def minted_percent_of_target(self) -> float:
        if self.target == 0:
            return 0.0
        return self.issuance_so_far / self.target * 100

    @property
    def target_deviation(self) -> int:
        """Projected issuance minus target; positive when over target."""
        return self.projected_issuance - self.target


@dataclass(frozen=True)
class SamplingResult:
    samples: Tuple[IssuanceSample, ...]
    failures: Tuple[HistoricalSampleFailure, ...] = ()


@dataclass(frozen=True)
class ForecastRun:
    """Output of one orchestrator invocation."""

    result: ForecastResult
    samples: Tuple[IssuanceSample, ...] = ()
    failures: Tuple[HistoricalSampleFailure, ...] = field(default=(), compare=False)


__all__ = [
    "HalvingState",
    "PeriodWindow",
    "ContractSnapshot",
    "IssuanceSample",
    "Projection",
    "ForecastResult",
    "SamplingResult",
    "ForecastRun",
]
