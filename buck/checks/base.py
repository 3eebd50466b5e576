# SPDX-License-Identifier: MIT
"""Base types for check units."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from buck.core.context import RunContext


class Outcome(Enum):
    """Outcome of a single check."""

    CLEAN = auto()
    """Check ran and found nothing wrong."""

    FINDING = auto()
    """Check ran and detected a possibly insecure condition."""

    EXECUTION_ERROR = auto()
    """The check itself could not complete."""


class DetailKind(Enum):
    """How detail entries are interpreted when rendered."""

    PLAIN_TEXT = auto()
    ABSOLUTE_PATH = auto()
    """Entries are absolute paths under the sysroot; the prefix is stripped."""


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Result of one check unit invocation.

    Attributes:
        title: What the check verifies (e.g. "Searching for SUID files")
        outcome: Clean, finding or execution error
        command: Description of the underlying operation (audit trail)
        help_text: Remediation guidance, shown for findings
        details: Evidence items (findings) or diagnostics (errors)
        detail_kind: How `details` should be displayed
    """

    title: str
    outcome: Outcome
    command: str
    help_text: str = ""
    details: tuple[str, ...] = ()
    detail_kind: DetailKind = DetailKind.PLAIN_TEXT

    @property
    def is_clean(self) -> bool:
        return self.outcome == Outcome.CLEAN

    @property
    def is_finding(self) -> bool:
        return self.outcome == Outcome.FINDING

    @property
    def is_error(self) -> bool:
        return self.outcome == Outcome.EXECUTION_ERROR

    @classmethod
    def clean(cls, title: str, command: str) -> CheckResult:
        """Create a clean result."""
        return cls(title=title, outcome=Outcome.CLEAN, command=command)

    @classmethod
    def finding(
        cls,
        title: str,
        command: str,
        help_text: str,
        details: Iterable[str] = (),
        detail_kind: DetailKind = DetailKind.PLAIN_TEXT,
    ) -> CheckResult:
        """Create a finding with its evidence."""
        return cls(
            title=title,
            outcome=Outcome.FINDING,
            command=command,
            help_text=help_text,
            details=tuple(details),
            detail_kind=detail_kind,
        )

    @classmethod
    def execution_error(cls, title: str, command: str, *details: str) -> CheckResult:
        """Create a result for a check that failed to run."""
        return cls(
            title=title,
            outcome=Outcome.EXECUTION_ERROR,
            command=command,
            details=details,
        )


class Check(Protocol):
    """A check unit.

    Implementations report expected negative conditions as findings and
    convert anticipated failures (unreadable files, malformed input) into
    execution errors. Anything they raise is turned into an execution error
    by the runner.
    """

    title: str

    def run(self, ctx: RunContext) -> CheckResult:
        """Perform the audit against ctx.sysroot."""
        ...
