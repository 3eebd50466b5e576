"""Result type for setup steps that can fail.

Loading the config, validating the sysroot and resolving check units all
return a Result instead of raising, so the CLI decides in one place how a
failure is shown and which exit code it maps to.

Usage:
    match registry.resolve(ctx.checks):
        case Ok(checks):
            ...
        case Err(error):
            print_setup_error(error, console)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed result; `error` is usually one of the setup error dataclasses."""

    error: E


type Result[T, E] = Ok[T] | Err[E]
