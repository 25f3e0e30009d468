"""Baseline command — inspect the stored snapshot."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..baseline import load_baseline
from ..exceptions import DesignDriftError
from . import app
from ._common import console, resolve_config


@app.command()
def baseline(
    snapshot: Optional[Path] = typer.Option(
        None, "--snapshot", "-s",
        help="Baseline snapshot file (default: ./.figma-ds-snapshot.json)",
        dir_okay=False,
    ),
    json_output: bool = typer.Option(
        False, "--json",
        help="Output in machine-readable JSON format",
    ),
) -> None:
    """Show the revision and entity counts of the stored baseline."""
    settings = resolve_config(snapshot=snapshot)
    path = Path(settings.snapshot_path)

    try:
        stored = load_baseline(path)
    except DesignDriftError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if stored is None:
        console.print(f"[yellow]No baseline found at {path}.[/yellow]")
        raise typer.Exit(0)

    meta = stored.meta
    if json_output:
        print(json.dumps({
            "path": str(path),
            "meta": vars(meta),
            "counts": {
                "components": len(stored.components),
                "styles": len(stored.styles),
                "variables": len(stored.variables),
            },
        }, indent=2))
        return

    table = Table(title=f"Baseline ({path})", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Version", meta.version_id or "-")
    table.add_row("Author", meta.version_user_handle or meta.version_user_id or "-")
    table.add_row("Label", meta.version_label or "-")
    table.add_row("Version created", meta.version_created_at or "-")
    table.add_row("Taken at", meta.taken_at or "-")
    table.add_row("Components", str(len(stored.components)))
    table.add_row("Styles", str(len(stored.styles)))
    table.add_row("Variables", str(len(stored.variables)))
    console.print(table)
