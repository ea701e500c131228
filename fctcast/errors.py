"""Exception types raised by the forecast engine and its data sources."""

from __future__ import annotations

from dataclasses import dataclass


class ForecastError(Exception):
    """Base class for terminal failures of a forecast invocation."""


class SourceUnavailable(ForecastError):
    """The block explorer or the RPC endpoint could not be read."""


class ConversionError(ForecastError):
    """A raw contract counter could not be parsed as a non-negative integer."""


class InvalidStateError(ForecastError):
    """Inputs violate the engine's contract (zero elapsed blocks, non-positive rate)."""


@dataclass(frozen=True)
class HistoricalSampleFailure:
    """A dropped historical point; recorded, never raised."""

    height: int
    error: Exception

    def describe(self) -> str:
        return f"block {self.height:,}: {type(self.error).__name__}: {self.error}"


__all__ = [
    "ForecastError",
    "SourceUnavailable",
    "ConversionError",
    "InvalidStateError",
    "HistoricalSampleFailure",
]
