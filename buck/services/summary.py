"""Run timing and the trailer printed after the last check."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

__all__ = ["RunSummary", "Stopwatch", "FOOTER"]

FOOTER = "buck finished, review any WARNING entries above"

Clock = Callable[[], float]


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Counters of a finished run (wall-clock seconds since the epoch)."""

    checks_run: int
    started_at: float
    finished_at: float

    @property
    def elapsed(self) -> float:
        return max(0.0, self.finished_at - self.started_at)

    def trailer(self) -> str:
        return f"{self.checks_run} checks run in {self.elapsed:.0f} seconds"


class Stopwatch:
    """Measures the whole sequential pass over the checks."""

    def __init__(self, clock: Clock = time.time) -> None:
        self._clock = clock
        self._started_at = clock()

    def stop(self, checks_run: int) -> RunSummary:
        return RunSummary(
            checks_run=checks_run,
            started_at=self._started_at,
            finished_at=self._clock(),
        )
