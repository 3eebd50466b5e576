"""Output routing for audit reports.

The formatter only knows how to emit styled segments; the router decides
where they go:

- ConsoleRouter writes every segment to the terminal immediately
- LogRouter keeps plain text in memory and writes one log file at the end
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from buck.platform.files import write_text_once

from .console import ConsoleProtocol, Style

__all__ = ["OutputRouter", "ConsoleRouter", "LogRouter"]


class OutputRouter(Protocol):
    """Destination for report text."""

    def emit(self, text: str, style: Style = Style.DEFAULT) -> None:
        """Emit a segment of text; style is a hint the destination may ignore."""
        ...

    def finish(self) -> Path | None:
        """End of run. Returns the written log file, if any.

        Raises:
            OSError: If buffered output cannot be written.
        """
        ...


class ConsoleRouter:
    """Stream segments to the console as they are produced."""

    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console

    def emit(self, text: str, style: Style = Style.DEFAULT) -> None:
        self._console.write(text, style)

    def finish(self) -> Path | None:
        return None


class LogRouter:
    """Accumulate uncolored text and write it to `path` once, at the end."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._chunks: list[str] = []
        self._written = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def text(self) -> str:
        """Text accumulated so far."""
        return "".join(self._chunks)

    @property
    def written(self) -> bool:
        return self._written

    def emit(self, text: str, style: Style = Style.DEFAULT) -> None:
        if self._written:
            raise RuntimeError(f"log {self._path} already written")
        self._chunks.append(text)

    def finish(self) -> Path | None:
        if not self._written:
            content = self.text
            if content and not content.endswith("\n"):
                content += "\n"
            write_text_once(self._path, content)
            self._written = True
        return self._path
