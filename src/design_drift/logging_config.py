"""
Logging for the watcher.

All ``design_drift.*`` loggers go through one rich handler on stderr, leaving
stdout to the CLI's own output. What each level carries:

    DEBUG    unknown style types, tracebacks of failed runs
    INFO     Figma request paths and statuses, snapshot counts, baseline
             load/save, delivered notifications
    WARNING  degraded runs, e.g. variables unavailable to the token
    ERROR    SMTP authentication hints, failed error reports

Scheduled runs default to WARNING so a quiet run prints nothing.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """Install the stderr handler, plus a plain-text file handler if asked.

    Args:
        verbose: DEBUG level, with source paths and traceback locals
        quiet: ERROR level only; wins over ``verbose``
        log_file: Append timestamped records here as well

    Returns:
        The ``design_drift`` package logger
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    console = Console(stderr=True)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=console,
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger("design_drift")
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``design_drift`` namespace.

    Bare names are prefixed, so ``get_logger("watcher")`` and
    ``get_logger("design_drift.watcher")`` are the same logger.
    """
    if name is None:
        return logging.getLogger("design_drift")

    if not name.startswith("design_drift"):
        name = f"design_drift.{name}"

    return logging.getLogger(name)
