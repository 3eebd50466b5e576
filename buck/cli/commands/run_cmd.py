from __future__ import annotations

from pathlib import Path

import typer

from buck.cli.context import build_context, fail, make_router
from buck.core.context import Overrides
from buck.core.result import Err
from buck.output.console import Style
from buck.services.audit import AuditService


def run(
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: /etc/buck/buck.toml if it exists)",
    ),
    sysroot: Path | None = typer.Option(None, "--sysroot", help="Filesystem root to audit"),
    verbosity: int | None = typer.Option(
        None,
        "--verbosity",
        "-v",
        min=1,
        max=2,
        help="1 = status only, 2 = include findings (default)",
    ),
    log: bool | None = typer.Option(
        None,
        "--log/--no-log",
        help="Write the report to a log file instead of the terminal",
    ),
    log_file: Path | None = typer.Option(None, "--log-file", help="Explicit log file path"),
    check: list[str] | None = typer.Option(
        None,
        "--check",
        help="Run only this check (repeatable, order is kept)",
    ),
    disable: list[str] | None = typer.Option(
        None,
        "--disable",
        "-d",
        help="Skip this check (repeatable)",
    ),
) -> None:
    """Run the enabled security checks against the sysroot."""
    ctx = build_context(
        config,
        Overrides(
            sysroot=sysroot,
            verbosity=verbosity,
            log=log,
            log_file=log_file,
            checks=tuple(check) if check else None,
            disable=tuple(disable or ()),
        ),
    )

    service = AuditService(ctx=ctx.run, router=make_router(ctx))
    result = service.run()
    if isinstance(result, Err):
        raise fail(result.error, ctx.err_console)

    report = result.value
    if report.log_path is not None:
        ctx.console.print(
            f"report written to {report.log_path} "
            f"({report.findings} findings, {report.errors} errors)",
            Style.DIM,
        )
