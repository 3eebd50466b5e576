"""Output abstraction layer."""

from .console import (
    ConsoleProtocol,
    MockConsole,
    RichConsole,
    Style,
)
from .router import ConsoleRouter, LogRouter, OutputRouter

__all__ = [
    "ConsoleProtocol",
    "ConsoleRouter",
    "LogRouter",
    "MockConsole",
    "OutputRouter",
    "RichConsole",
    "Style",
]
