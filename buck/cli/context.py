from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from buck.checks import BUILTIN_CHECKS
from buck.core.config import DEFAULT_CONFIG_PATH, load_config, load_config_or_default
from buck.core.context import OutputMode, Overrides, RunContext, build_run_context
from buck.core.result import Err
from buck.core.setup_errors import SetupError
from buck.output.console import ConsoleProtocol, RichConsole
from buck.output.errors import print_setup_error, setup_error_exit_code
from buck.output.router import ConsoleRouter, LogRouter, OutputRouter


@dataclass(frozen=True, slots=True)
class CLIContext:
    run: RunContext
    console: ConsoleProtocol
    err_console: ConsoleProtocol


def fail(error: SetupError, err_console: ConsoleProtocol) -> typer.Exit:
    """Report a setup error on stderr and build the matching typer.Exit."""
    print_setup_error(error, err_console)
    return typer.Exit(code=setup_error_exit_code(error))


def build_context(config_path: Path | None, overrides: Overrides) -> CLIContext:
    """Load config, merge overrides and validate; exits on any setup error."""
    err_console = RichConsole(stderr=True)

    if config_path is not None:
        config_result = load_config(config_path)
    else:
        config_result = load_config_or_default(DEFAULT_CONFIG_PATH)
    if isinstance(config_result, Err):
        raise fail(config_result.error, err_console)

    run_result = build_run_context(
        config_result.value,
        overrides,
        default_checks=tuple(BUILTIN_CHECKS),
    )
    if isinstance(run_result, Err):
        raise fail(run_result.error, err_console)

    return CLIContext(run=run_result.value, console=RichConsole(), err_console=err_console)


def make_router(ctx: CLIContext) -> OutputRouter:
    if ctx.run.output_mode == OutputMode.LOG and ctx.run.log_path is not None:
        return LogRouter(ctx.run.log_path)
    return ConsoleRouter(ctx.console)
