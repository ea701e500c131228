"""Compose the forecast engine against the block explorer and the mint contract."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime, timezone
from functools import partial
from typing import Callable, Optional, Tuple

from fctcast.config import ChainConstants, Config
from fctcast.data.contract import ContractReader
from fctcast.data.explorer import fetch_latest_block_height
from fctcast.engine.projector import project_forecast
from fctcast.engine.sampler import SnapshotReader, sample_history
from fctcast.engine.state import ContractSnapshot, ForecastResult, ForecastRun, IssuanceSample
from fctcast.errors import ForecastError, InvalidStateError, SourceUnavailable
from fctcast.supply.halving import halving_state
from fctcast.supply.issuance import rate_in_display_units, snapshot_minted
from fctcast.supply.period import period_window

logger = logging.getLogger(__name__)

HeightSource = Callable[[], int]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def build_forecast_result(height: int, snapshot: ContractSnapshot, constants: ChainConstants) -> ForecastResult:
    """Pure assembly of the headline forecast from the chain head state."""

    if height < 0:
        raise InvalidStateError(f"block height must be non-negative, received {height}")
    halving = halving_state(height, constants)
    period = period_window(height, constants.period_length)
    issuance = snapshot_minted(snapshot, constants)
    current_rate = rate_in_display_units(snapshot.mint_rate, constants)
    projection = project_forecast(period.elapsed, halving.target, issuance, current_rate, constants)
    return ForecastResult(
        block_height=height,
        halving=halving,
        period=period,
        current_rate=current_rate,
        issuance_so_far=issuance,
        projected_issuance=projection.projected_issuance,
        ideal_rate=projection.ideal_rate,
        lower_bound=projection.lower_bound,
        upper_bound=projection.upper_bound,
        forecasted_rate=projection.forecasted_rate,
        percent_change=projection.percent_change,
        target_completion_percent=projection.target_completion_percent,
    )


def _mandatory(future: Future, what: str):
    try:
        return future.result()
    except ForecastError:
        raise
    except Exception as exc:
        raise SourceUnavailable(f"{what} unavailable: {exc}") from exc


class ForecastOrchestrator:
    """Run one forecast invocation end to end.

    Invocations are not reentrant; callers serialise them (see
    :class:`fctcast.engine.session.ForecastSession`).
    """

    def __init__(
        self,
        height_source: HeightSource,
        reader: SnapshotReader,
        config: Optional[Config] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.height_source = height_source
        self.reader = reader
        self.config = config or Config()
        self.clock = clock

    @property
    def constants(self) -> ChainConstants:
        return self.config.chain

    def fetch_head(self) -> Tuple[int, ContractSnapshot]:
        """Read the latest height and the head snapshot concurrently."""

        with ThreadPoolExecutor(max_workers=2) as pool:
            height_future = pool.submit(self.height_source)
            snapshot_future = pool.submit(self.reader.read_snapshot, None)
            height = _mandatory(height_future, "latest block height")
            snapshot = _mandatory(snapshot_future, "contract state")
        return height, snapshot

    def run(self, include_history: Optional[bool] = None) -> ForecastRun:
        """Produce a :class:`ForecastRun`; raises :class:`ForecastError` on terminal failure."""

        if include_history is None:
            include_history = self.config.history.enabled
        height, snapshot = self.fetch_head()
        logger.info("Chain head at block %s", f"{height:,}")
        result = build_forecast_result(height, snapshot, self.constants)
        logger.info(
            "Period %s: %s of %s FCT minted, projected %s",
            result.period.index,
            f"{result.issuance_so_far:,}",
            f"{result.target:,}",
            f"{result.projected_issuance:,}",
        )
        if not include_history:
            return ForecastRun(result=result)

        history = self.config.history
        now = self.clock()
        head_sample = IssuanceSample(height=height, minted=result.issuance_so_far, timestamp=now)
        sampling = sample_history(
            self.reader,
            result.period,
            height,
            self.constants,
            stride=history.stride_blocks,
            block_time_seconds=history.block_time_seconds,
            now=now,
            current=head_sample,
            max_workers=history.max_workers,
        )
        for failure in sampling.failures:
            logger.warning("Dropped historical sample at %s", failure.describe())
        logger.info("Reconstructed %d issuance samples", len(sampling.samples))
        return ForecastRun(result=result, samples=sampling.samples, failures=sampling.failures)


def orchestrator_from_config(config: Config) -> ForecastOrchestrator:
    """Wire the explorer and the mint contract named in ``config``."""

    sources = config.sources
    height_source = partial(fetch_latest_block_height, sources.explorer_url, sources.timeout_seconds)
    reader = ContractReader(sources.rpc_url, sources.contract_address, timeout=sources.timeout_seconds)
    return ForecastOrchestrator(height_source, reader, config)


__all__ = ["HeightSource", "ForecastOrchestrator", "build_forecast_result", "orchestrator_from_config"]
