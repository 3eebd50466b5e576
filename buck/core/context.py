"""Run context: the immutable settings every component of a run reads.

The context is built once from the config file plus command line overrides,
validated (sysroot and log destination must exist), and then passed
explicitly to the registry, the runner, the check units and the formatter.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from pathlib import Path

from .config import Config
from .result import Err, Ok, Result
from .setup_errors import ConflictingOptions, LogDirMissing, SetupError, SysrootMissing

__all__ = [
    "Verbosity",
    "OutputMode",
    "RunContext",
    "Overrides",
    "build_run_context",
    "filter_disabled",
    "log_file_name",
]


class Verbosity(IntEnum):
    """How much of each result is rendered."""

    SUMMARY = 1
    """Header, status tag and command line only."""

    DETAILED = 2
    """Also the finding / error body text."""


class OutputMode(Enum):
    CONSOLE = "console"
    LOG = "log"


def _empty_settings() -> dict[str, Mapping[str, object]]:
    return {}


@dataclass(frozen=True, slots=True)
class RunContext:
    """Process-wide configuration for one audit run.

    Attributes:
        checks: Check ids to run, in order, after disable filtering
        verbosity: Rendering verbosity
        sysroot: Absolute filesystem root the checks evaluate
        output_mode: Console streaming or buffered log file
        log_path: Destination of the log file (log mode only)
        checksum_file: Checksum baseline read by the checksum check
        settings: Per-check settings tables
    """

    checks: tuple[str, ...]
    verbosity: Verbosity = Verbosity.DETAILED
    sysroot: Path = Path("/")
    output_mode: OutputMode = OutputMode.CONSOLE
    log_path: Path | None = None
    checksum_file: Path = Path("/var/lib/buck/checksums.sha256")
    settings: Mapping[str, Mapping[str, object]] = field(default_factory=_empty_settings)

    @property
    def detailed(self) -> bool:
        return self.verbosity == Verbosity.DETAILED

    def settings_for(self, check_id: str) -> Mapping[str, object]:
        """Settings table for one check (empty if not configured)."""
        return self.settings.get(check_id, {})

    def host_path(self, path: str) -> Path:
        """Map an absolute path of the audited system to its location under the sysroot.

        Example: with sysroot /mnt/root, "/etc/shadow" -> /mnt/root/etc/shadow
        """
        return self.sysroot / path.lstrip("/")


@dataclass(frozen=True, slots=True)
class Overrides:
    """Values given on the command line; None means "use the config file"."""

    sysroot: Path | None = None
    verbosity: int | None = None
    log: bool | None = None
    log_file: Path | None = None
    checks: tuple[str, ...] | None = None
    disable: tuple[str, ...] = ()


def filter_disabled(enabled: Sequence[str], disabled: Iterable[str]) -> tuple[str, ...]:
    """Drop disabled ids, keeping order and duplicates of the rest."""
    blocked = set(disabled)
    return tuple(check_id for check_id in enabled if check_id not in blocked)


def log_file_name(now: datetime) -> str:
    """Auto-generated log file name, e.g. buck18102026_14-03-59.log."""
    return f"buck{now:%d%m%Y_%H-%M-%S}.log"


def _normalize_root(path: Path) -> Path:
    return Path(os.path.normpath(path.expanduser().absolute()))


def build_run_context(
    config: Config,
    overrides: Overrides,
    *,
    default_checks: Sequence[str],
    now: datetime | None = None,
) -> Result[RunContext, SetupError]:
    """Merge config and overrides into a validated RunContext.

    Args:
        config: Parsed config file (or defaults)
        overrides: Command line values
        default_checks: Check ids used when neither side names any
        now: Timestamp used for auto-generated log names

    Returns:
        Ok(RunContext), or Err with the first setup problem found
    """
    if overrides.log is False and overrides.log_file is not None:
        return Err(ConflictingOptions("--log-file cannot be combined with --no-log"))

    sysroot = _normalize_root(overrides.sysroot or Path(config.sysroot))
    if not sysroot.is_dir():
        return Err(SysrootMissing(sysroot))

    verbosity = Verbosity(overrides.verbosity or config.verbosity)

    log_enabled = overrides.log
    if log_enabled is None:
        log_enabled = overrides.log_file is not None or config.logging.enabled

    output_mode = OutputMode.CONSOLE
    log_path: Path | None = None
    if log_enabled:
        output_mode = OutputMode.LOG
        explicit = overrides.log_file or (
            Path(config.logging.file) if config.logging.file else None
        )
        if explicit is not None:
            log_path = explicit.expanduser().absolute()
            if not log_path.parent.is_dir():
                return Err(LogDirMissing(log_path.parent))
        else:
            log_dir = Path(config.logging.directory).expanduser()
            if not log_dir.is_dir():
                return Err(LogDirMissing(log_dir))
            log_path = log_dir / log_file_name(now or datetime.now())

    if overrides.checks is not None:
        enabled: Sequence[str] = overrides.checks
    elif config.checks.enabled is not None:
        enabled = config.checks.enabled
    else:
        enabled = default_checks

    return Ok(
        RunContext(
            checks=filter_disabled(enabled, (*config.checks.disabled, *overrides.disable)),
            verbosity=verbosity,
            sysroot=sysroot,
            output_mode=output_mode,
            log_path=log_path,
            checksum_file=Path(config.checksum.file),
            settings=dict(config.checks.settings),
        )
    )
