from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from buck.core.context import RunContext

HostFileWriter = Callable[[str, str], Path]


@pytest.fixture
def sysroot(tmp_path: Path) -> Path:
    """An empty directory standing in for the audited root filesystem."""
    root = tmp_path / "root"
    root.mkdir()
    return root


@pytest.fixture
def ctx(sysroot: Path) -> RunContext:
    return RunContext(checks=(), sysroot=sysroot, checksum_file=sysroot.parent / "sums")


@pytest.fixture
def host_file(sysroot: Path) -> HostFileWriter:
    """Write a file of the audited system, e.g. host_file("/etc/passwd", "...")."""

    def write(path: str, content: str) -> Path:
        target = sysroot / path.lstrip("/")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return target

    return write
