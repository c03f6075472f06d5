from __future__ import annotations

import typer

from relprune import __version__
from relprune.cli.commands.plan_cmd import plan
from relprune.cli.commands.prune_cmd import prune


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(prune)
app.command()(plan)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_show_version,
        is_eager=True,
    ),
) -> None:
    """Prune old GitHub releases, keeping the newest matches."""


def main() -> None:
    app()
