# SPDX-License-Identifier: MIT
"""Service configuration checks.

- SshdRootLoginCheck: sshd must not accept password logins as root
- UmaskCheck: the default umask from /etc/login.defs must be restrictive
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .base import CheckResult
from .common import config_lines, read_host_file, setting_list, setting_str

if TYPE_CHECKING:
    from buck.core.context import RunContext

# OpenSSH >= 7.0 behaviour when PermitRootLogin is not set.
_SSHD_DEFAULT_ROOT_LOGIN = "prohibit-password"

_SSHD_SAFE_VALUES = ("no", "prohibit-password", "without-password", "forced-commands-only")


@dataclass(frozen=True, slots=True)
class SshdRootLoginCheck:
    title: str = "Checking if root can log in via SSH"

    def run(self, ctx: RunContext) -> CheckResult:
        config = ctx.host_path("/etc/ssh/sshd_config")
        command = f"grep -i '^PermitRootLogin' {config}"
        settings = ctx.settings_for("sshd_rootlogin")
        allowed = {v.lower() for v in setting_list(settings, "allowed", _SSHD_SAFE_VALUES)}
        try:
            text = read_host_file(ctx, "/etc/ssh/sshd_config")
        except OSError as e:
            return CheckResult.execution_error(self.title, command, f"cannot read {config}: {e}")

        value = _SSHD_DEFAULT_ROOT_LOGIN
        for _, line in config_lines(text):
            parts = line.split(None, 1)
            keyword = parts[0].lower()
            if keyword == "match":
                # Conditional blocks only apply to some connections.
                break
            if keyword == "permitrootlogin" and len(parts) == 2:
                # sshd uses the first occurrence of a keyword.
                value = parts[1].strip().lower()
                break

        if value in allowed:
            return CheckResult.clean(self.title, command)
        return CheckResult.finding(
            self.title,
            command,
            "Root can log in over SSH with a password. Set 'PermitRootLogin no' "
            "(or prohibit-password) in /etc/ssh/sshd_config.",
            [f"PermitRootLogin {value}"],
        )


@dataclass(frozen=True, slots=True)
class UmaskCheck:
    """The UMASK in /etc/login.defs must mask at least the `required` bits.

    `[checks.settings.umask] required` is an octal string (default "022").
    """

    title: str = "Checking the default umask"

    def run(self, ctx: RunContext) -> CheckResult:
        login_defs = ctx.host_path("/etc/login.defs")
        command = f"grep '^UMASK' {login_defs}"
        raw_required = setting_str(ctx.settings_for("umask"), "required", "022")
        try:
            required = int(raw_required, 8)
        except ValueError:
            return CheckResult.execution_error(
                self.title, command, f"invalid required umask setting: {raw_required!r}"
            )
        try:
            text = read_host_file(ctx, "/etc/login.defs")
        except OSError as e:
            return CheckResult.execution_error(self.title, command, f"cannot read {login_defs}: {e}")

        umask: int | None = None
        for number, line in config_lines(text):
            parts = line.split()
            if parts[0] != "UMASK":
                continue
            if len(parts) < 2:
                return CheckResult.execution_error(
                    self.title, command, f"{login_defs}:{number}: UMASK without value"
                )
            try:
                umask = int(parts[1], 8)
            except ValueError:
                return CheckResult.execution_error(
                    self.title, command, f"{login_defs}:{number}: invalid UMASK {parts[1]!r}"
                )

        help_text = (
            "New files are created with too open permissions. "
            f"Set 'UMASK {raw_required}' (or stricter) in /etc/login.defs."
        )
        if umask is None:
            return CheckResult.finding(self.title, command, help_text, ["no UMASK setting found"])
        if umask & required == required:
            return CheckResult.clean(self.title, command)
        return CheckResult.finding(self.title, command, help_text, [f"UMASK {umask:03o}"])
