"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import WatcherConfig, load_config
from ..exceptions import DesignDriftError

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    snapshot: Optional[Path] = None,
) -> WatcherConfig:
    """Build the watcher config from files, environment and CLI options."""
    overrides = {}
    if snapshot is not None:
        overrides["snapshot_path"] = str(snapshot)
    try:
        return load_config(config_file=config, **overrides)
    except DesignDriftError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
