# SPDX-License-Identifier: MIT
"""Account database checks (/etc/passwd, /etc/shadow)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .base import CheckResult
from .common import config_lines, read_host_file, setting_list

if TYPE_CHECKING:
    from buck.core.context import RunContext


@dataclass(frozen=True, slots=True)
class EmptyPasswordsCheck:
    """No account may log in without a password."""

    title: str = "Searching for accounts with empty passwords"

    def run(self, ctx: RunContext) -> CheckResult:
        shadow = ctx.host_path("/etc/shadow")
        command = f"awk -F: '$2 == \"\"' {shadow}"
        try:
            text = read_host_file(ctx, "/etc/shadow")
        except OSError as e:
            return CheckResult.execution_error(self.title, command, f"cannot read {shadow}: {e}")

        users: list[str] = []
        for number, line in config_lines(text):
            fields = line.split(":")
            if len(fields) < 2:
                return CheckResult.execution_error(
                    self.title, command, f"{shadow}:{number}: malformed entry"
                )
            if fields[1] == "":
                users.append(fields[0])

        if not users:
            return CheckResult.clean(self.title, command)
        return CheckResult.finding(
            self.title,
            command,
            "These accounts can log in without a password. Set a password or lock "
            "them (passwd -l <user>).",
            users,
        )


@dataclass(frozen=True, slots=True)
class SuperusersCheck:
    """Only allowed accounts may have UID 0.

    The allow-list is `[checks.settings.superusers] allowed` (default: root).
    """

    title: str = "Searching for accounts with UID 0"

    def run(self, ctx: RunContext) -> CheckResult:
        passwd = ctx.host_path("/etc/passwd")
        command = f"awk -F: '$3 == 0' {passwd}"
        allowed = set(setting_list(ctx.settings_for("superusers"), "allowed", ("root",)))
        try:
            text = read_host_file(ctx, "/etc/passwd")
        except OSError as e:
            return CheckResult.execution_error(self.title, command, f"cannot read {passwd}: {e}")

        users: list[str] = []
        for number, line in config_lines(text):
            fields = line.split(":")
            if len(fields) < 4:
                return CheckResult.execution_error(
                    self.title, command, f"{passwd}:{number}: malformed entry"
                )
            if fields[2] == "0" and fields[0] not in allowed:
                users.append(fields[0])

        if not users:
            return CheckResult.clean(self.title, command)
        return CheckResult.finding(
            self.title,
            command,
            "These accounts have superuser rights. Give them a regular UID or add "
            "them to [checks.settings.superusers] allowed.",
            users,
        )
