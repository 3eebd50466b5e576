from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from buck import PROGRAM_NAME, __version__
from buck.checks.base import Outcome
from buck.core.context import RunContext
from buck.core.result import Err, Ok, Result
from buck.core.setup_errors import LogWriteFailed, SetupError
from buck.output.console import Style
from buck.output.router import OutputRouter

from .formatter import format_check
from .registry import CheckRegistry
from .runner import CheckRunner
from .summary import FOOTER, RunSummary, Stopwatch


@dataclass(frozen=True, slots=True)
class ReportEntry:
    index: int
    check_id: str
    outcome: Outcome


@dataclass(frozen=True, slots=True)
class AuditReport:
    entries: tuple[ReportEntry, ...]
    summary: RunSummary
    log_path: Path | None = None

    def count(self, outcome: Outcome) -> int:
        return sum(1 for e in self.entries if e.outcome == outcome)

    @property
    def findings(self) -> int:
        return self.count(Outcome.FINDING)

    @property
    def errors(self) -> int:
        return self.count(Outcome.EXECUTION_ERROR)


class AuditService:
    def __init__(
        self,
        *,
        ctx: RunContext,
        router: OutputRouter,
        registry: CheckRegistry | None = None,
        runner: CheckRunner | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._ctx = ctx
        self._router = router
        self._registry = registry or CheckRegistry()
        self._runner = runner or CheckRunner()
        self._clock = clock

    def run(self) -> Result[AuditReport, SetupError]:
        # Every id must load before anything is printed or executed.
        resolved = self._registry.resolve(self._ctx.checks)
        if isinstance(resolved, Err):
            return resolved
        checks = resolved.value

        self._banner()

        stopwatch = Stopwatch(self._clock)
        entries: list[ReportEntry] = []
        for run in self._runner.run_all(checks, self._ctx):
            for segment in format_check(run.index, run.check_id, run.result, self._ctx):
                self._router.emit(segment.text, segment.style)
            entries.append(ReportEntry(run.index, run.check_id, run.result.outcome))
        summary = stopwatch.stop(len(entries))

        self._router.emit(summary.trailer() + "\n", Style.INFO)
        self._router.emit(FOOTER + "\n", Style.BOLD)

        try:
            log_path = self._router.finish()
        except OSError as e:
            return Err(LogWriteFailed(path=self._ctx.log_path or Path(), reason=str(e)))

        return Ok(AuditReport(entries=tuple(entries), summary=summary, log_path=log_path))

    def _banner(self) -> None:
        self._router.emit(f"{PROGRAM_NAME} {__version__}\n", Style.BOLD)
        self._router.emit(f"sysroot: {self._ctx.sysroot}\n", Style.DIM)
        self._router.emit("\n")
