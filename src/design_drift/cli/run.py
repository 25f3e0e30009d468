"""Run command — one monitoring cycle."""

from pathlib import Path
from typing import Optional

import typer

from ..exceptions import DesignDriftError
from ..logging_config import get_logger, setup_logging
from ..notify import ConsoleNotifier, SmtpNotifier
from ..remote import FigmaClient
from ..report import assemble_error_report
from ..watcher import RunOutcome, run_once
from . import app
from ._common import console, resolve_config

logger = get_logger(__name__)

_OUTCOME_MESSAGES = {
    RunOutcome.INITIALIZED: "[green]Baseline initialized.[/green]",
    RunOutcome.NO_NEW_VERSION: "[dim]No new version. Skip.[/dim]",
    RunOutcome.NO_CHANGES: "[dim]No meaningful changes.[/dim]",
    RunOutcome.CHANGES_REPORTED: "[yellow]Changes detected and reported.[/yellow]",
}


@app.command()
def run(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help="Configuration file path (TOML format)",
        exists=True, file_okay=True, dir_okay=False, readable=True,
    ),
    snapshot: Optional[Path] = typer.Option(
        None, "--snapshot", "-s",
        help="Baseline snapshot file (default: ./.figma-ds-snapshot.json)",
        dir_okay=False,
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run",
        help="Print the report instead of mailing it and keep the baseline unchanged",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
) -> None:
    """Compare the Figma file against the stored baseline and report drift.

    [bold cyan]Examples:[/bold cyan]

      design-drift run

      design-drift run --dry-run --snapshot /tmp/ds.json
    """
    setup_logging(verbose=verbose, quiet=quiet)
    settings = resolve_config(config, snapshot)

    try:
        settings.require_remote()
        if not dry_run:
            settings.require_mail()
    except DesignDriftError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    notifier = ConsoleNotifier(console) if dry_run else SmtpNotifier(settings)

    try:
        if not dry_run:
            notifier.verify()
        with FigmaClient(
            settings.figma_token,
            settings.figma_file_key,
            base_url=settings.figma_api_base,
            timeout=settings.request_timeout,
        ) as client:
            outcome = run_once(client, notifier, settings, persist=not dry_run)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        _report_failure(notifier, e)
        raise typer.Exit(1)

    console.print(_OUTCOME_MESSAGES[outcome])


def _report_failure(notifier, error: Exception) -> None:
    logger.debug("Run failed", exc_info=error)
    try:
        notifier.send(assemble_error_report(error))
    except DesignDriftError as notify_error:
        logger.error(f"Could not deliver failure notice: {notify_error}")
