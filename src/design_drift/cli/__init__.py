"""CLI entry point — registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="design-drift",
    help="Design Drift - Figma design system change monitor",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"design-drift {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Detect drift in components, styles and variables of a Figma file."""


# Import subcommands to register them
from .run import run as _run  # noqa: F401, E402
from .baseline import baseline as _baseline  # noqa: F401, E402
from .smtp import verify_smtp as _verify_smtp  # noqa: F401, E402
