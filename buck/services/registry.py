"""Check registry - resolves check ids into runnable check units.

Usage:
    registry = CheckRegistry()
    match registry.resolve(ctx.checks):
        case Ok(checks):
            ...
        case Err(error):
            print_setup_error(error, console)
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from buck.checks import BUILTIN_CHECKS, Check, CheckFactory
from buck.core.result import Err, Ok, Result
from buck.core.setup_errors import CheckLoadFailed, SetupError, UnknownCheck

__all__ = ["CheckRegistry", "LoadedCheck"]


@dataclass(frozen=True, slots=True)
class LoadedCheck:
    """A check unit ready to run, with the id it was requested under."""

    check_id: str
    check: Check


class CheckRegistry:
    """Maps check ids to factories.

    The registry holds no state besides the registration table; every call
    to resolve() builds fresh check units.
    """

    def __init__(self, factories: Mapping[str, CheckFactory] | None = None) -> None:
        self._factories = dict(BUILTIN_CHECKS if factories is None else factories)

    def available(self) -> tuple[str, ...]:
        """Registered check ids, in registration order."""
        return tuple(self._factories)

    def resolve(self, check_ids: Sequence[str]) -> Result[list[LoadedCheck], SetupError]:
        """Load one unit per id, in order (duplicates load twice).

        Returns:
            Ok(list of LoadedCheck), or Err(UnknownCheck | CheckLoadFailed)
            for the first id that cannot be loaded
        """
        loaded: list[LoadedCheck] = []
        for check_id in check_ids:
            factory = self._factories.get(check_id)
            if factory is None:
                return Err(UnknownCheck(check_id=check_id, available=self.available()))
            try:
                check = factory()
            except Exception as e:
                return Err(CheckLoadFailed(check_id=check_id, reason=f"{type(e).__name__}: {e}"))
            loaded.append(LoadedCheck(check_id=check_id, check=check))
        return Ok(loaded)
