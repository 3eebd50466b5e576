"""Tests for output routers."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from buck.checks.base import CheckResult, DetailKind
from buck.core.context import RunContext
from buck.output.console import MockConsole, RichConsole, Style
from buck.output.router import ConsoleRouter, LogRouter
from buck.services.formatter import format_check


class TestConsoleRouter:
    def test_emits_immediately_with_style(self) -> None:
        console = MockConsole()
        router = ConsoleRouter(console)

        router.emit("[ WARNING ]\n", Style.WARNING)

        assert console.outputs[0].message == "[ WARNING ]\n"
        assert console.outputs[0].style == Style.WARNING

    def test_finish_writes_no_file(self) -> None:
        assert ConsoleRouter(MockConsole()).finish() is None


class TestLogRouter:
    def test_buffers_until_finish(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "buck.log"
        router = LogRouter(path)

        router.emit("header ", Style.HEADER)
        router.emit("[ OK ]\n", Style.SUCCESS)

        assert not path.exists()
        assert router.text == "header [ OK ]\n"
        assert capsys.readouterr().out == ""

        assert router.finish() == path
        assert path.read_text(encoding="utf-8") == "header [ OK ]\n"
        assert router.written

    def test_content_is_newline_terminated(self, tmp_path: Path) -> None:
        path = tmp_path / "buck.log"
        router = LogRouter(path)
        router.emit("no newline")
        router.finish()
        assert path.read_text(encoding="utf-8") == "no newline\n"

    def test_written_exactly_once(self, tmp_path: Path) -> None:
        path = tmp_path / "buck.log"
        router = LogRouter(path)
        router.emit("first\n")
        router.finish()
        path.write_text("edited", encoding="utf-8")

        router.finish()

        assert path.read_text(encoding="utf-8") == "edited"
        with pytest.raises(RuntimeError, match="already written"):
            router.emit("late\n")

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        router = LogRouter(tmp_path / "missing" / "buck.log")
        router.emit("x\n")
        with pytest.raises(OSError):
            router.finish()
        assert not router.written


def test_console_and_log_receive_identical_text(tmp_path: Path) -> None:
    sysroot = tmp_path / "root"
    deep = "/deep" * 18
    ctx = RunContext(checks=("suids",), sysroot=sysroot)
    result = CheckResult.finding(
        "Searching for SUID files",
        f"find {sysroot} -type f -perm -4000 -print",
        "SUID programs run with the privileges of their owner. Remove the bit "
        "(chmod u-s) from programs that do not need it.",
        [f"{sysroot}{deep}/file name with spaces", f"{sysroot}/bin/su"],
        detail_kind=DetailKind.ABSOLUTE_PATH,
    )
    buffer = io.StringIO()
    console_router = ConsoleRouter(RichConsole(file=buffer, width=80))
    log_router = LogRouter(tmp_path / "buck.log")

    for segment in format_check(1, "suids", result, ctx):
        console_router.emit(segment.text, segment.style)
        log_router.emit(segment.text, segment.style)

    assert buffer.getvalue() == log_router.text
    assert f"{deep}/file name with spaces\n" in buffer.getvalue()
