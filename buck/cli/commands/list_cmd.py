from __future__ import annotations

from buck.cli.context import fail
from buck.core.result import Err
from buck.output.console import RichConsole, Style
from buck.services.registry import CheckRegistry


def list_checks() -> None:
    """List the available checks in default run order."""
    console = RichConsole()
    registry = CheckRegistry()
    result = registry.resolve(registry.available())
    if isinstance(result, Err):
        raise fail(result.error, RichConsole(stderr=True))

    for loaded in result.value:
        console.write(f"{loaded.check_id:<22}", Style.HEADER)
        console.print(loaded.check.title)
