# SPDX-License-Identifier: MIT
"""Built-in check units and their registration table.

Each check is registered under its id with a factory that builds the unit.
The order of BUILTIN_CHECKS is the default run order when the config does
not list enabled checks.

Usage:
    from buck.checks import BUILTIN_CHECKS

    for check_id, factory in BUILTIN_CHECKS.items():
        print(f"{check_id}: {factory().title}")
"""

from __future__ import annotations

from collections.abc import Callable

from buck.checks.accounts import EmptyPasswordsCheck, SuperusersCheck
from buck.checks.base import Check, CheckResult, DetailKind, Outcome
from buck.checks.checksum import ChecksumCheck
from buck.checks.filesystem import (
    PermissionBitCheck,
    StickyTmpCheck,
    WorldWritableDirsCheck,
    sgid_check,
    suid_check,
    worldwritable_files_check,
)
from buck.checks.services import SshdRootLoginCheck, UmaskCheck

__all__ = [
    # Result types
    "Check",
    "CheckResult",
    "DetailKind",
    "Outcome",
    # Checks
    "ChecksumCheck",
    "EmptyPasswordsCheck",
    "PermissionBitCheck",
    "SshdRootLoginCheck",
    "StickyTmpCheck",
    "SuperusersCheck",
    "UmaskCheck",
    "WorldWritableDirsCheck",
    # Registry
    "CheckFactory",
    "BUILTIN_CHECKS",
]

type CheckFactory = Callable[[], Check]

BUILTIN_CHECKS: dict[str, CheckFactory] = {
    "suids": suid_check,
    "sgids": sgid_check,
    "worldwritable_files": worldwritable_files_check,
    "worldwritable_dirs": WorldWritableDirsCheck,
    "stickytmp": StickyTmpCheck,
    "emptypasswords": EmptyPasswordsCheck,
    "superusers": SuperusersCheck,
    "sshd_rootlogin": SshdRootLoginCheck,
    "umask": UmaskCheck,
    "checksum": ChecksumCheck,
}
