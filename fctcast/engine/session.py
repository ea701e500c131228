"""Holder for the last known forecast between refreshes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fctcast.engine.orchestrator import ForecastOrchestrator
from fctcast.engine.state import ForecastRun
from fctcast.errors import ForecastError


@dataclass
class ForecastSession:
    """Mutable state owned by the presentation layer.

    A failed refresh keeps ``last_run`` and records ``last_error``; retry is
    left to the user.
    """

    orchestrator: ForecastOrchestrator
    last_run: Optional[ForecastRun] = None
    last_error: Optional[ForecastError] = None
    busy: bool = False

    def refresh(self, include_history: Optional[bool] = None) -> Optional[ForecastRun]:
        if self.busy:
            raise RuntimeError("A forecast refresh is already in progress")
        self.busy = True
        try:
            run = self.orchestrator.run(include_history=include_history)
        except ForecastError as exc:
            self.last_error = exc
        else:
            self.last_run = run
            self.last_error = None
        finally:
            self.busy = False
        return self.last_run

    @property
    def failed(self) -> bool:
        return self.last_error is not None


__all__ = ["ForecastSession"]
