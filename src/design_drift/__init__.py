"""
Design Drift - structural change monitor for Figma design systems.

Fingerprints every component, style and variable of a Figma file, compares
the result against the last stored baseline and reports what drifted between
published revisions.
"""

__version__ = "0.3.0"

from .diff import DiffResult, SnapshotDiff, diff_fingerprints, diff_snapshots, versions_between
from .report import ChangeReport, assemble_report
from .snapshot import RevisionRecord, Snapshot, build_snapshot

__all__ = [
    "build_snapshot",
    "diff_fingerprints",
    "diff_snapshots",
    "versions_between",
    "assemble_report",
    "ChangeReport",
    "DiffResult",
    "RevisionRecord",
    "Snapshot",
    "SnapshotDiff",
]
