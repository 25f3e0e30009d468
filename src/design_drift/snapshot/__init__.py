"""Snapshot layer — normalization, fingerprinting and capture of design entities."""

from .capture import build_snapshot, iter_component_nodes, load_variables
from .fingerprint import canonical_json, fingerprint
from .models import RevisionRecord, Snapshot, SnapshotMeta
from .normalize import normalize
from .schema import EntityCategory

__all__ = [
    "EntityCategory",
    "RevisionRecord",
    "Snapshot",
    "SnapshotMeta",
    "build_snapshot",
    "canonical_json",
    "fingerprint",
    "iter_component_nodes",
    "load_variables",
    "normalize",
]
