"""Data models for fingerprint diffing."""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List

from ..snapshot.schema import EntityCategory


@dataclass(frozen=True)
class DiffResult:
    """Classification of entity ids between two fingerprint maps.

    The three sets are pairwise disjoint; ids present in both maps with equal
    fingerprints appear in none of them.
    """

    added: FrozenSet[str] = frozenset()
    removed: FrozenSet[str] = frozenset()
    changed: FrozenSet[str] = frozenset()

    @property
    def total(self) -> int:
        return len(self.added) + len(self.removed) + len(self.changed)

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            "added": sorted(self.added),
            "removed": sorted(self.removed),
            "changed": sorted(self.changed),
        }


@dataclass
class SnapshotDiff:
    """Per-category diff between a baseline and a current snapshot."""

    components: DiffResult = field(default_factory=DiffResult)
    styles: DiffResult = field(default_factory=DiffResult)
    variables: DiffResult = field(default_factory=DiffResult)

    def for_category(self, category: EntityCategory) -> DiffResult:
        return {
            EntityCategory.COMPONENT: self.components,
            EntityCategory.STYLE: self.styles,
            EntityCategory.VARIABLE: self.variables,
        }[category]

    @property
    def total_changes(self) -> int:
        return self.components.total + self.styles.total + self.variables.total
