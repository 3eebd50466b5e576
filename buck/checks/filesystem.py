# SPDX-License-Identifier: MIT
"""Filesystem permission checks.

- PermissionBitCheck: regular files carrying a dangerous mode bit
  (setuid, setgid, world-writable)
- WorldWritableDirsCheck: world-writable directories without sticky bit
- StickyTmpCheck: /tmp must have the sticky bit
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .base import CheckResult, DetailKind
from .common import PSEUDO_FILESYSTEMS, scan_sysroot, setting_list

if TYPE_CHECKING:
    from buck.core.context import RunContext


def _find_command(ctx: RunContext, *predicates: str) -> str:
    pruned = " -o ".join(f"-path {os.path.join(str(ctx.sysroot), d)}" for d in PSEUDO_FILESYSTEMS)
    return f"find {ctx.sysroot} \\( {pruned} \\) -prune -o {' '.join(predicates)} -print"


@dataclass(frozen=True, slots=True)
class PermissionBitCheck:
    """Report regular files that have `bit` set in their mode.

    Attributes:
        check_id: Id used to look up the allow-list in the settings
        title: Human-readable description
        bit: Mode bit to look for (e.g. stat.S_ISUID)
        find_predicate: Equivalent find(1) predicate, for the audit trail
        help_text: Remediation shown with findings
    """

    check_id: str
    title: str
    bit: int
    find_predicate: str
    help_text: str

    def run(self, ctx: RunContext) -> CheckResult:
        command = _find_command(ctx, "-type f", self.find_predicate)
        # Allow-list entries are paths of the audited system.
        allowed = {
            str(ctx.host_path(p)) for p in setting_list(ctx.settings_for(self.check_id), "allowed", ())
        }
        scan = scan_sysroot(ctx)
        if scan.errors:
            return CheckResult.execution_error(self.title, command, *scan.errors)
        hits = [
            entry.path
            for entry in scan.entries
            if entry.is_file and entry.mode & self.bit and entry.path not in allowed
        ]
        if not hits:
            return CheckResult.clean(self.title, command)
        return CheckResult.finding(
            self.title,
            command,
            self.help_text,
            hits,
            detail_kind=DetailKind.ABSOLUTE_PATH,
        )


def suid_check() -> PermissionBitCheck:
    return PermissionBitCheck(
        check_id="suids",
        title="Searching for SUID files",
        bit=stat.S_ISUID,
        find_predicate="-perm -4000",
        help_text=(
            "SUID programs run with the privileges of their owner. Remove the bit "
            "(chmod u-s) from programs that do not need it, or add them to "
            "[checks.settings.suids] allowed."
        ),
    )


def sgid_check() -> PermissionBitCheck:
    return PermissionBitCheck(
        check_id="sgids",
        title="Searching for SGID files",
        bit=stat.S_ISGID,
        find_predicate="-perm -2000",
        help_text=(
            "SGID programs run with the privileges of their group. Remove the bit "
            "(chmod g-s) from programs that do not need it, or add them to "
            "[checks.settings.sgids] allowed."
        ),
    )


def worldwritable_files_check() -> PermissionBitCheck:
    return PermissionBitCheck(
        check_id="worldwritable_files",
        title="Searching for world-writable files",
        bit=stat.S_IWOTH,
        find_predicate="-perm -0002",
        help_text="Any user can modify these files. Remove the write bit for others (chmod o-w).",
    )


@dataclass(frozen=True, slots=True)
class WorldWritableDirsCheck:
    """World-writable directories must carry the sticky bit."""

    title: str = "Searching for world-writable directories without sticky bit"

    def run(self, ctx: RunContext) -> CheckResult:
        command = _find_command(ctx, "-type d", "-perm -0002", "! -perm -1000")
        scan = scan_sysroot(ctx)
        if scan.errors:
            return CheckResult.execution_error(self.title, command, *scan.errors)
        hits = [
            entry.path
            for entry in scan.entries
            if entry.is_dir and entry.mode & stat.S_IWOTH and not entry.mode & stat.S_ISVTX
        ]
        if not hits:
            return CheckResult.clean(self.title, command)
        return CheckResult.finding(
            self.title,
            command,
            (
                "Any user can delete or rename files of other users in these "
                "directories. Set the sticky bit (chmod +t) or remove the write bit "
                "for others."
            ),
            hits,
            detail_kind=DetailKind.ABSOLUTE_PATH,
        )


@dataclass(frozen=True, slots=True)
class StickyTmpCheck:
    title: str = "Checking the sticky bit of /tmp"

    def run(self, ctx: RunContext) -> CheckResult:
        tmp = ctx.host_path("/tmp")
        command = f"stat -c %A {tmp}"
        try:
            mode = os.lstat(tmp).st_mode
        except OSError as e:
            return CheckResult.execution_error(self.title, command, f"cannot stat {tmp}: {e}")

        if not stat.S_ISDIR(mode):
            return CheckResult.execution_error(self.title, command, f"{tmp} is not a directory")
        if mode & stat.S_ISVTX:
            return CheckResult.clean(self.title, command)
        return CheckResult.finding(
            self.title,
            command,
            "Without the sticky bit any user can delete files of other users in /tmp. "
            "Run: chmod +t /tmp",
            [f"/tmp has mode {stat.filemode(mode)}"],
        )
