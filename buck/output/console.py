"""Console output abstraction.

This module provides a protocol for console output that can be implemented
by different backends (Rich, mock for testing). Formatting code emits styled
text through it without depending on a specific library.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol, TextIO

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()  # OK status tag
    ERROR = auto()  # Setup errors
    WARNING = auto()  # WARNING status tag
    INFO = auto()
    DIM = auto()  # Audit trail, hints
    BOLD = auto()  # Banner
    HEADER = auto()  # Check header line

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for console output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message followed by a newline."""
        ...

    def write(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Write a message as-is (no newline added)."""
        ...

    def error(self, message: str) -> None:
        """Print an error message (prefixed with "error:")."""
        ...


class RichConsole:
    """Console implementation using Rich library.

    Messages are written as-is: no markup or emoji codes are interpreted
    (check titles and paths may contain square brackets or colons) and long
    lines are never wrapped, so the terminal shows the same text a log file
    would hold.
    """

    def __init__(
        self,
        *,
        stderr: bool = False,
        file: TextIO | None = None,
        width: int | None = None,
    ) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console(
            file=file,
            width=width,
            stderr=stderr,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green bold",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow bold",
            Style.INFO: "cyan",
            Style.DIM: "dim",
            Style.BOLD: "bold magenta",
            Style.HEADER: "blue",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.write(message + "\n", style)

    def write(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        self._console.print(message, style=rich_style or None, markup=False, end="")

    def error(self, message: str) -> None:
        self._console.print("error:", style="red bold", end=" ")
        self._console.print(message, markup=False)


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    """Factory for empty outputs list (helps type inference)."""
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing.

    `print` records end with a newline so that `text` reproduces exactly
    what a terminal would show.
    """

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message + "\n", style))

    def write(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}\n", Style.ERROR))

    # Test helper methods

    def clear(self) -> None:
        """Clear all captured output."""
        self.outputs.clear()

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        """All output concatenated, as it would appear on screen."""
        return "".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]

    def count(self, style: Style) -> int:
        """Count outputs with a specific style."""
        return sum(1 for o in self.outputs if o.style == style)
