# SPDX-License-Identifier: MIT
"""Tests for the filesystem permission checks."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from buck.checks.base import DetailKind, Outcome
from buck.checks.common import scan_sysroot
from buck.checks.filesystem import (
    StickyTmpCheck,
    WorldWritableDirsCheck,
    suid_check,
    worldwritable_files_check,
)
from buck.core.context import RunContext


def _touch(path: Path, mode: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")
    os.chmod(path, mode)
    return path


def _deny_listing(monkeypatch: pytest.MonkeyPatch, denied: Path) -> None:
    """Make os.scandir fail for one directory, as for a root-only mount."""
    real_scandir = os.scandir

    def scandir(path: str) -> object:
        if os.fspath(path) == str(denied):
            raise PermissionError(13, "Permission denied", str(denied))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)


class TestScanSysroot:
    def test_skips_pseudo_filesystems_and_symlinks(self, sysroot: Path, ctx: RunContext) -> None:
        _touch(sysroot / "proc" / "1" / "status", 0o644)
        _touch(sysroot / "etc" / "passwd", 0o644)
        (sysroot / "etc" / "link").symlink_to(sysroot / "etc" / "passwd")

        paths = {entry.path for entry in scan_sysroot(ctx).entries}

        assert f"{sysroot}/etc" in paths
        assert f"{sysroot}/etc/passwd" in paths
        assert f"{sysroot}/etc/link" not in paths
        assert not any("/proc" in p for p in paths)

    def test_nested_proc_is_not_pruned(self, sysroot: Path, ctx: RunContext) -> None:
        _touch(sysroot / "srv" / "proc" / "data", 0o644)
        paths = {entry.path for entry in scan_sysroot(ctx).entries}
        assert f"{sysroot}/srv/proc/data" in paths


class TestSuidCheck:
    def test_clean_when_no_suid_files(self, sysroot: Path, ctx: RunContext) -> None:
        _touch(sysroot / "bin" / "ls", 0o755)
        result = suid_check().run(ctx)
        assert result.outcome == Outcome.CLEAN
        assert str(sysroot) in result.command

    def test_reports_suid_files_as_paths(self, sysroot: Path, ctx: RunContext) -> None:
        _touch(sysroot / "bin" / "su", 0o4755)
        _touch(sysroot / "bin" / "ls", 0o755)

        result = suid_check().run(ctx)

        assert result.outcome == Outcome.FINDING
        assert result.details == (f"{sysroot}/bin/su",)
        assert result.detail_kind == DetailKind.ABSOLUTE_PATH
        assert "chmod u-s" in result.help_text

    def test_allow_list_uses_host_paths(self, sysroot: Path) -> None:
        _touch(sysroot / "bin" / "su", 0o4755)
        ctx = RunContext(
            checks=(), sysroot=sysroot, settings={"suids": {"allowed": ["/bin/su"]}}
        )
        assert suid_check().run(ctx).outcome == Outcome.CLEAN


class TestWorldWritable:
    def test_world_writable_file(self, sysroot: Path, ctx: RunContext) -> None:
        _touch(sysroot / "etc" / "open", 0o666)
        result = worldwritable_files_check().run(ctx)
        assert result.outcome == Outcome.FINDING
        assert result.details == (f"{sysroot}/etc/open",)

    def test_dir_without_sticky_bit(self, sysroot: Path, ctx: RunContext) -> None:
        shared = sysroot / "shared"
        shared.mkdir()
        os.chmod(shared, 0o777)
        sticky = sysroot / "tmp"
        sticky.mkdir()
        os.chmod(sticky, 0o1777)

        result = WorldWritableDirsCheck().run(ctx)

        assert result.outcome == Outcome.FINDING
        assert result.details == (str(shared),)


class TestStickyTmp:
    def test_missing_tmp_is_execution_error(self, ctx: RunContext) -> None:
        result = StickyTmpCheck().run(ctx)
        assert result.outcome == Outcome.EXECUTION_ERROR
        assert "cannot stat" in result.details[0]

    def test_sticky_tmp_is_clean(self, sysroot: Path, ctx: RunContext) -> None:
        (sysroot / "tmp").mkdir()
        os.chmod(sysroot / "tmp", 0o1777)
        assert StickyTmpCheck().run(ctx).outcome == Outcome.CLEAN

    def test_tmp_without_sticky_bit(self, sysroot: Path, ctx: RunContext) -> None:
        (sysroot / "tmp").mkdir()
        os.chmod(sysroot / "tmp", 0o777)
        result = StickyTmpCheck().run(ctx)
        assert result.outcome == Outcome.FINDING
        assert result.details == ("/tmp has mode drwxrwxrwx",)

    def test_tmp_is_a_file(self, sysroot: Path, ctx: RunContext) -> None:
        (sysroot / "tmp").write_text("", encoding="utf-8")
        assert StickyTmpCheck().run(ctx).outcome == Outcome.EXECUTION_ERROR



class TestUnreadableDirectories:
    def test_scan_reports_directories_it_cannot_list(
        self, sysroot: Path, ctx: RunContext, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _touch(sysroot / "usr" / "bin" / "passwd", 0o4755)
        _deny_listing(monkeypatch, sysroot / "usr" / "bin")

        scan = scan_sysroot(ctx)

        assert f"{sysroot}/usr" in {entry.path for entry in scan.entries}
        assert scan.errors == (f"cannot scan {sysroot}/usr/bin: Permission denied",)

    def test_suid_check_is_not_clean_on_partial_scan(
        self, sysroot: Path, ctx: RunContext, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _touch(sysroot / "usr" / "bin" / "passwd", 0o4755)
        _deny_listing(monkeypatch, sysroot / "usr" / "bin")

        result = suid_check().run(ctx)

        assert result.outcome == Outcome.EXECUTION_ERROR
        assert result.details == (f"cannot scan {sysroot}/usr/bin: Permission denied",)

    def test_world_writable_dirs_check_is_not_clean_on_partial_scan(
        self, sysroot: Path, ctx: RunContext, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (sysroot / "var" / "spool").mkdir(parents=True)
        _deny_listing(monkeypatch, sysroot / "var")

        result = WorldWritableDirsCheck().run(ctx)

        assert result.outcome == Outcome.EXECUTION_ERROR
        assert "cannot scan" in result.details[0]
