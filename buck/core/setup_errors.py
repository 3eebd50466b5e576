"""Errors that abort a run before any check executes.

Each error is a plain frozen dataclass so it can be matched structurally by
the presentation layer (see buck.output.errors).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Config file cannot be read or has an invalid structure."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ConflictingOptions:
    message: str


@dataclass(frozen=True, slots=True)
class SysrootMissing:
    path: Path


@dataclass(frozen=True, slots=True)
class LogDirMissing:
    path: Path


@dataclass(frozen=True, slots=True)
class UnknownCheck:
    check_id: str
    available: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class CheckLoadFailed:
    check_id: str
    reason: str


@dataclass(frozen=True, slots=True)
class LogWriteFailed:
    path: Path
    reason: str


SetupError = (
    ConfigError
    | ConflictingOptions
    | SysrootMissing
    | LogDirMissing
    | UnknownCheck
    | CheckLoadFailed
    | LogWriteFailed
)
