# SPDX-License-Identifier: MIT
"""Common utilities for check units.

This module provides shared functionality used by the built-in checks:
- Scanning the sysroot without leaving it or following symlinks
- Reading files of the audited system
- Reading per-check settings
"""

from __future__ import annotations

import os
import stat
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from buck.core.structured import get_str, get_str_list

if TYPE_CHECKING:
    from buck.core.context import RunContext

__all__ = [
    "PSEUDO_FILESYSTEMS",
    "FsEntry",
    "SysrootScan",
    "scan_sysroot",
    "read_host_file",
    "setting_list",
    "setting_str",
    "config_lines",
]

# Top-level directories holding kernel/virtual filesystems, never scanned.
PSEUDO_FILESYSTEMS = ("proc", "sys", "dev", "run")


@dataclass(frozen=True, slots=True)
class FsEntry:
    """A file or directory found under the sysroot.

    Attributes:
        path: Absolute path including the sysroot prefix
        mode: st_mode from lstat
    """

    path: str
    mode: int

    @property
    def is_file(self) -> bool:
        return stat.S_ISREG(self.mode)

    @property
    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)


@dataclass(frozen=True, slots=True)
class SysrootScan:
    """Result of scanning the sysroot.

    Attributes:
        entries: Regular files and directories found, in walk order
        errors: One diagnostic per directory or entry that could not be read
    """

    entries: tuple[FsEntry, ...]
    errors: tuple[str, ...] = ()


def scan_sysroot(ctx: RunContext) -> SysrootScan:
    """Collect every regular file and directory below ctx.sysroot.

    Symlinks are not followed and not collected. Entries that vanish during
    the scan are skipped; directories that cannot be listed and entries that
    cannot be stat'ed are reported in `errors`.
    """
    root = str(ctx.sysroot)
    entries: list[FsEntry] = []
    errors: list[str] = []

    def on_error(e: OSError) -> None:
        errors.append(f"cannot scan {e.filename}: {e.strerror or e}")

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        if dirpath == root:
            dirnames[:] = [d for d in dirnames if d not in PSEUDO_FILESYSTEMS]
        dirnames.sort()
        for name in (*dirnames, *sorted(filenames)):
            path = os.path.join(dirpath, name)
            try:
                mode = os.lstat(path).st_mode
            except FileNotFoundError:
                continue
            except OSError as e:
                errors.append(f"cannot stat {path}: {e.strerror or e}")
                continue
            if stat.S_ISREG(mode) or stat.S_ISDIR(mode):
                entries.append(FsEntry(path=path, mode=mode))

    return SysrootScan(entries=tuple(entries), errors=tuple(errors))


def read_host_file(ctx: RunContext, path: str) -> str:
    """Read a text file of the audited system (path relative to the sysroot).

    Raises:
        OSError: If the file is missing or unreadable.
    """
    return ctx.host_path(path).read_text(encoding="utf-8", errors="replace")


def config_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield (line number, stripped line) skipping blanks and # comments."""
    for number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            yield number, stripped


def setting_list(settings: Mapping[str, object], key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """Read a list-of-strings setting, falling back to default."""
    values = get_str_list(settings, key)
    if values is None:
        return default
    return tuple(values)


def setting_str(settings: Mapping[str, object], key: str, default: str) -> str:
    return get_str(settings, key) or default
