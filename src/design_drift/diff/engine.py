"""Diff engine — set-diffs fingerprint maps of two snapshots."""

from typing import Mapping

from ..snapshot.models import Snapshot
from .models import DiffResult, SnapshotDiff


def diff_fingerprints(
    previous: Mapping[str, str],
    current: Mapping[str, str],
) -> DiffResult:
    """Classify ids as added, removed or changed.

    Runs in O(len(previous) + len(current)). The result sets carry no order;
    renderers sort them explicitly.
    """
    added = set()
    changed = set()
    for key, digest in current.items():
        if key not in previous:
            added.add(key)
        elif previous[key] != digest:
            changed.add(key)
    removed = {key for key in previous if key not in current}

    return DiffResult(
        added=frozenset(added),
        removed=frozenset(removed),
        changed=frozenset(changed),
    )


def diff_snapshots(previous: Snapshot, current: Snapshot) -> SnapshotDiff:
    """Diff components, styles and variables of two snapshots."""
    return SnapshotDiff(
        components=diff_fingerprints(previous.components, current.components),
        styles=diff_fingerprints(previous.styles, current.styles),
        variables=diff_fingerprints(previous.variables, current.variables),
    )
