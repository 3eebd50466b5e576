from __future__ import annotations

import typer

from buck import __version__
from buck.cli.commands.list_cmd import list_checks
from buck.cli.commands.run_cmd import run


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Audit a host (or a mounted sysroot) for common security problems.",
)


# Commands
app.command()(run)
app.command("list")(list_checks)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    pass


def main() -> None:
    app()
