"""Filesystem helpers."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

__all__ = ["write_text_once"]

_LOG_MODE = 0o600


def write_text_once(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Publish a complete text file at `path`.

    The data is written and synced under a hidden name in the target
    directory, made owner-only, then renamed over `path`. Readers see either
    no file or the whole file. The parent directory is never created.

    Raises:
        OSError: If the directory is missing or not writable.
    """
    data = content.encode(encoding)
    fd, staging = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
    try:
        os.fchmod(fd, _LOG_MODE)
        view = memoryview(data)
        while view:
            view = view[os.write(fd, view) :]
        os.fsync(fd)
    except BaseException:
        os.close(fd)
        os.unlink(staging)
        raise
    os.close(fd)
    try:
        os.replace(staging, path)
    except OSError:
        os.unlink(staging)
        raise
