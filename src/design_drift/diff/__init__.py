"""Diff layer — fingerprint diffing and revision windows."""

from .engine import diff_fingerprints, diff_snapshots
from .models import DiffResult, SnapshotDiff
from .window import recent_revisions, versions_between

__all__ = [
    "DiffResult",
    "SnapshotDiff",
    "diff_fingerprints",
    "diff_snapshots",
    "recent_revisions",
    "versions_between",
]
