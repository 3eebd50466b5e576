"""Sequential check runner.

Every check runs to completion (or failure) before the next starts. Whatever
a check raises (a stray sys.exit() included) is turned into an
execution-error result here, so one broken check never stops the audit.
KeyboardInterrupt still ends the run.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from buck.checks.base import CheckResult
from buck.core.context import RunContext

from .registry import LoadedCheck

__all__ = ["CheckRun", "CheckRunner"]

UNKNOWN_COMMAND = "(check did not report its command)"


@dataclass(frozen=True, slots=True)
class CheckRun:
    """One executed check.

    Attributes:
        index: 1-based position in the enabled list
        check_id: Id the check was requested under
        result: What the check reported (or a synthetic error result)
    """

    index: int
    check_id: str
    result: CheckResult


class CheckRunner:
    def run_one(self, loaded: LoadedCheck, ctx: RunContext) -> CheckResult:
        """Run a single check, converting failures into an execution error."""
        title = _title_of(loaded)
        try:
            result = loaded.check.run(ctx)
        except (Exception, SystemExit) as e:
            return CheckResult.execution_error(
                title,
                UNKNOWN_COMMAND,
                f"check '{loaded.check_id}' raised {type(e).__name__}: {e}",
            )
        if not isinstance(result, CheckResult):
            return CheckResult.execution_error(
                title,
                UNKNOWN_COMMAND,
                f"check '{loaded.check_id}' returned {type(result).__name__} instead of a CheckResult",
            )
        return result

    def run_all(self, checks: Sequence[LoadedCheck], ctx: RunContext) -> Iterator[CheckRun]:
        """Run checks in order, yielding each result as soon as it is available."""
        for index, loaded in enumerate(checks, start=1):
            yield CheckRun(index=index, check_id=loaded.check_id, result=self.run_one(loaded, ctx))


def _title_of(loaded: LoadedCheck) -> str:
    title = getattr(loaded.check, "title", None)
    if isinstance(title, str) and title:
        return title
    return loaded.check_id
