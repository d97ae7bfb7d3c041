"""CLI entry point; registers all subcommands."""

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="quality-gate",
    help="Quality Gate - structural and coverage checks for Java sources",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold cyan]Quality Gate[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


@app.callback()
def _root(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Quality Gate - structural and coverage checks for Java sources."""


# Import subcommands to register them
from .check import check as _check  # noqa: F401, E402
from .scan import scan as _scan  # noqa: F401, E402
from .coverage import coverage as _coverage  # noqa: F401, E402


def main() -> None:
    app()
