"""Baseline snapshot persistence.

The baseline is a single JSON document, fully rewritten after every run that
observed a new revision. Writes go through a temporary file in the same
directory so an interrupted run never leaves a truncated baseline behind.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from .exceptions import BaselineError
from .logging_config import get_logger
from .snapshot.models import Snapshot

logger = get_logger(__name__)

PathLike = Union[str, Path]


def load_baseline(path: PathLike) -> Optional[Snapshot]:
    """Load the stored snapshot.

    Returns:
        The Snapshot, or ``None`` if no baseline has been written yet.

    Raises:
        BaselineError: If the file exists but is not a valid snapshot.
    """
    p = Path(path)
    if not p.exists():
        logger.info(f"No baseline file at {p}")
        return None

    try:
        with open(p, encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise BaselineError(p, str(e)) from e

    if not isinstance(raw, dict):
        raise BaselineError(p, "top-level JSON value is not an object")

    try:
        snapshot = Snapshot.from_dict(raw)
    except (AttributeError, TypeError, ValueError) as e:
        raise BaselineError(p, str(e)) from e

    logger.info(
        f"Loaded baseline for version {snapshot.meta.version_id or '-'} from {p} "
        f"({len(snapshot.components)} components, {len(snapshot.styles)} styles, "
        f"{len(snapshot.variables)} variables)"
    )
    return snapshot


def save_baseline(snapshot: Snapshot, path: PathLike) -> None:
    """Overwrite the baseline file with ``snapshot``."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{p.name}.", suffix=".tmp", dir=p.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(snapshot.to_dict(), f, indent=2, ensure_ascii=False)
        os.replace(tmp_name, p)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.info(f"Saved baseline for version {snapshot.meta.version_id or '-'} to {p}")
