"""Historical issuance reconstruction for the running adjustment period."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timedelta
from typing import List, Optional, Protocol

from fctcast.config import ChainConstants
from fctcast.engine.state import ContractSnapshot, IssuanceSample, PeriodWindow, SamplingResult
from fctcast.errors import HistoricalSampleFailure
from fctcast.supply.issuance import snapshot_to_sample


class SnapshotReader(Protocol):
    def read_snapshot(self, block: Optional[int] = None) -> ContractSnapshot:
        ...


def sample_heights(window: PeriodWindow, latest_height: int, stride: int) -> List[int]:
    """Heights from the period start every ``stride`` blocks, strictly below ``latest_height``."""

    if stride <= 0:
        raise ValueError(f"stride must be positive, received {stride}")
    return list(range(window.start, latest_height, stride))


def approximate_timestamp(height: int, latest_height: int, now: datetime, block_time_seconds: float) -> datetime:
    """Back-date ``now`` by the assumed block time. Not a chain timestamp."""

    return now - timedelta(seconds=(latest_height - height) * block_time_seconds)


def _read_sample(
    reader: SnapshotReader, height: int, timestamp: datetime, constants: ChainConstants
) -> IssuanceSample:
    snapshot = reader.read_snapshot(height)
    return snapshot_to_sample(snapshot, height, timestamp, constants)


def sample_history(
    reader: SnapshotReader,
    window: PeriodWindow,
    latest_height: int,
    constants: ChainConstants,
    *,
    stride: int,
    block_time_seconds: float,
    now: datetime,
    current: Optional[IssuanceSample] = None,
    max_workers: int = 8,
) -> SamplingResult:
    """Read and convert historical snapshots concurrently.

    Every read runs on its own worker. A point whose read or conversion fails
    is recorded in ``failures`` and left out of ``samples``; all workers are
    joined before returning. ``current`` (the head sample) is appended last.
    """

    heights = sample_heights(window, latest_height, stride)
    samples: List[IssuanceSample] = []
    failures: List[HistoricalSampleFailure] = []
    if heights:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(heights))) as pool:
            futures = {
                pool.submit(
                    _read_sample,
                    reader,
                    height,
                    approximate_timestamp(height, latest_height, now, block_time_seconds),
                    constants,
                ): height
                for height in heights
            }
            for future in as_completed(futures):
                try:
                    samples.append(future.result())
                except Exception as exc:
                    failures.append(HistoricalSampleFailure(height=futures[future], error=exc))
    samples.sort(key=lambda sample: sample.height)
    failures.sort(key=lambda failure: failure.height)
    if current is not None:
        samples.append(current)
    return SamplingResult(samples=tuple(samples), failures=tuple(failures))


__all__ = ["SnapshotReader", "sample_heights", "approximate_timestamp", "sample_history"]
