# SPDX-License-Identifier: MIT
"""Tests for the sshd and umask configuration checks."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from buck.checks.base import Outcome
from buck.checks.services import SshdRootLoginCheck, UmaskCheck
from buck.core.context import RunContext

HostFile = Callable[[str, str], Path]


class TestSshdRootLogin:
    def test_missing_config_is_execution_error(self, ctx: RunContext) -> None:
        assert SshdRootLoginCheck().run(ctx).outcome == Outcome.EXECUTION_ERROR

    @pytest.mark.parametrize(
        "content",
        [
            "PermitRootLogin no\n",
            "# PermitRootLogin yes\nPort 22\n",
            "permitrootlogin prohibit-password\n",
            "PermitRootLogin no\nPermitRootLogin yes\n",
            "Match User admin\n    PermitRootLogin yes\n",
        ],
    )
    def test_safe_configurations(
        self, ctx: RunContext, host_file: HostFile, content: str
    ) -> None:
        host_file("/etc/ssh/sshd_config", content)
        assert SshdRootLoginCheck().run(ctx).outcome == Outcome.CLEAN

    def test_root_login_enabled(self, ctx: RunContext, host_file: HostFile) -> None:
        host_file("/etc/ssh/sshd_config", "Port 22\nPermitRootLogin yes\n")
        result = SshdRootLoginCheck().run(ctx)
        assert result.outcome == Outcome.FINDING
        assert result.details == ("PermitRootLogin yes",)

    def test_stricter_allow_list(self, sysroot: Path, host_file: HostFile) -> None:
        host_file("/etc/ssh/sshd_config", "PermitRootLogin prohibit-password\n")
        ctx = RunContext(
            checks=(), sysroot=sysroot, settings={"sshd_rootlogin": {"allowed": ["no"]}}
        )
        assert SshdRootLoginCheck().run(ctx).outcome == Outcome.FINDING


class TestUmask:
    def test_restrictive_umask(self, ctx: RunContext, host_file: HostFile) -> None:
        host_file("/etc/login.defs", "# defaults\nUMASK\t\t027\n")
        assert UmaskCheck().run(ctx).outcome == Outcome.CLEAN

    def test_permissive_umask(self, ctx: RunContext, host_file: HostFile) -> None:
        host_file("/etc/login.defs", "UMASK 002\n")
        result = UmaskCheck().run(ctx)
        assert result.outcome == Outcome.FINDING
        assert result.details == ("UMASK 002",)

    def test_missing_umask_directive(self, ctx: RunContext, host_file: HostFile) -> None:
        host_file("/etc/login.defs", "PASS_MAX_DAYS 99999\n")
        result = UmaskCheck().run(ctx)
        assert result.outcome == Outcome.FINDING
        assert result.details == ("no UMASK setting found",)

    def test_invalid_umask_value(self, ctx: RunContext, host_file: HostFile) -> None:
        host_file("/etc/login.defs", "UMASK 09x\n")
        result = UmaskCheck().run(ctx)
        assert result.outcome == Outcome.EXECUTION_ERROR
        assert ":1: invalid UMASK" in result.details[0]

    def test_required_from_settings(self, sysroot: Path, host_file: HostFile) -> None:
        host_file("/etc/login.defs", "UMASK 022\n")
        ctx = RunContext(checks=(), sysroot=sysroot, settings={"umask": {"required": "027"}})
        assert UmaskCheck().run(ctx).outcome == Outcome.FINDING
