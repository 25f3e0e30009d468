"""verify-smtp command."""

from pathlib import Path
from typing import Optional

import typer

from ..exceptions import DesignDriftError
from ..logging_config import setup_logging
from ..notify import SmtpNotifier
from . import app
from ._common import console, resolve_config


@app.command(name="verify-smtp")
def verify_smtp(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help="Configuration file path (TOML format)",
        exists=True, file_okay=True, dir_okay=False, readable=True,
    ),
) -> None:
    """Connect and log in to the configured SMTP server."""
    setup_logging()
    settings = resolve_config(config)
    try:
        settings.require_mail()
        SmtpNotifier(settings).verify()
    except DesignDriftError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    console.print(f"[green]SMTP login to {settings.smtp_host} succeeded.[/green]")
