from __future__ import annotations

import typer

from relsync import __version__
from relsync.cli.commands.resolve import resolve
from relsync.cli.commands.sync import sync

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(sync)
app.command()(resolve)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Converge a GitHub release, its tag and its assets."""


def main() -> None:
    app()
