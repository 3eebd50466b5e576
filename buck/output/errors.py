"""Error presentation utilities.

Centralized setup error formatting and exit code mapping.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from buck.core.errors import ErrorCode
from buck.core.setup_errors import (
    CheckLoadFailed,
    ConfigError,
    ConflictingOptions,
    LogDirMissing,
    LogWriteFailed,
    SetupError,
    SysrootMissing,
    UnknownCheck,
)
from buck.output.console import Style

if TYPE_CHECKING:
    from buck.output.console import ConsoleProtocol

__all__ = ["print_setup_error", "setup_error_exit_code"]


def print_setup_error(error: SetupError, console: ConsoleProtocol) -> None:
    """Print a setup error with appropriate formatting."""
    match error:
        case ConfigError(message=message, path=path):
            console.error(message)
            if path is not None:
                console.print(f"config: {path}", Style.DIM)
        case ConflictingOptions(message=message):
            console.error(message)
        case SysrootMissing(path=path):
            console.error(f"sysroot does not exist or is not a directory: {path}")
        case LogDirMissing(path=path):
            console.error(f"log directory does not exist: {path}")
            console.print("hint: create it or choose another one with --log-file", Style.DIM)
        case UnknownCheck(check_id=check_id, available=available):
            console.error(f"unknown check: {check_id}")
            if available:
                console.print(f"Available: {', '.join(available)}", Style.DIM)
        case CheckLoadFailed(check_id=check_id, reason=reason):
            console.error(f"cannot load check {check_id}: {reason}")
        case LogWriteFailed(path=path, reason=reason):
            console.error(f"cannot write log file {path}: {reason}")


def setup_error_exit_code(error: SetupError) -> int:
    """Get exit code for a setup error."""
    match error:
        case ConfigError() | ConflictingOptions() | UnknownCheck():
            return int(ErrorCode.USER_ERROR)
        case SysrootMissing() | LogDirMissing():
            return int(ErrorCode.ENV_ERROR)
        case CheckLoadFailed():
            return int(ErrorCode.LOAD_ERROR)
        case LogWriteFailed():
            return int(ErrorCode.IO_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.USER_ERROR)
