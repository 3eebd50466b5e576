# SPDX-License-Identifier: MIT
"""Checksum baseline comparison.

The baseline is a sha256sum-style file: one `<hex digest>  <absolute path>`
line per watched file, paths as seen on the audited system. Generating the
baseline is not part of this check.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from .base import CheckResult, DetailKind
from .common import config_lines

if TYPE_CHECKING:
    from buck.core.context import RunContext

_CHUNK_SIZE = 1024 * 1024


def sha256_file(path: Path) -> str:
    """Hex sha256 digest of a file, read in chunks."""
    h = hashlib.sha256()
    with path.open("rb") as f:
        while chunk := f.read(_CHUNK_SIZE):
            h.update(chunk)
    return h.hexdigest()


def parse_baseline(text: str) -> list[tuple[str, str]]:
    """Parse baseline text into (digest, path) pairs.

    Raises:
        ValueError: On a malformed line.
    """
    entries: list[tuple[str, str]] = []
    for number, line in config_lines(text):
        digest, _, path = line.partition(" ")
        path = path.strip().removeprefix("*")
        if len(digest) != 64 or not path.startswith("/"):
            raise ValueError(f"line {number}: expected '<sha256>  <absolute path>'")
        entries.append((digest.lower(), path))
    return entries


@dataclass(frozen=True, slots=True)
class ChecksumCheck:
    title: str = "Comparing files against the checksum baseline"

    def run(self, ctx: RunContext) -> CheckResult:
        baseline = ctx.checksum_file
        command = f"sha256sum --check --quiet {baseline} (relative to {ctx.sysroot})"
        try:
            entries = parse_baseline(baseline.read_text(encoding="utf-8"))
        except OSError as e:
            return CheckResult.execution_error(
                self.title, command, f"cannot read checksum baseline {baseline}: {e}"
            )
        except ValueError as e:
            return CheckResult.execution_error(self.title, command, f"{baseline}: {e}")

        changed: list[str] = []
        unreadable: list[str] = []
        for digest, path in entries:
            target = ctx.host_path(path)
            if not target.is_file():
                changed.append(f"{target} (missing)")
                continue
            try:
                actual = sha256_file(target)
            except OSError as e:
                unreadable.append(f"cannot read {target}: {e}")
                continue
            if actual != digest:
                changed.append(str(target))

        if unreadable:
            return CheckResult.execution_error(self.title, command, *unreadable)
        if not changed:
            return CheckResult.clean(self.title, command)
        return CheckResult.finding(
            self.title,
            command,
            "These files differ from the recorded baseline. Verify the changes were "
            "intended (package upgrades, admin edits) and regenerate the baseline.",
            changed,
            detail_kind=DetailKind.ABSOLUTE_PATH,
        )
