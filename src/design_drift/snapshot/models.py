"""Data models for design snapshots and file revisions."""

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from .schema import EntityCategory


@dataclass(frozen=True)
class RevisionRecord:
    """One published version of the remote file."""

    id: str
    created_at: datetime
    user_handle: Optional[str] = None
    user_id: Optional[str] = None
    label: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "RevisionRecord":
        """Map one entry of the ``/versions`` payload.

        Raises ``ValueError`` if ``created_at`` is not an ISO-8601 instant.
        """
        user = raw.get("user") or {}
        return cls(
            id=str(raw["id"]),
            created_at=parse_timestamp(raw["created_at"]),
            user_handle=user.get("handle"),
            user_id=user.get("id"),
            label=raw.get("label") or None,
            description=raw.get("description") or None,
        )

    @property
    def author(self) -> Optional[str]:
        return self.user_handle or self.user_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "created_at": self.created_at.isoformat(),
            "user_handle": self.user_handle,
            "user_id": self.user_id,
            "label": self.label,
            "description": self.description,
        }


@dataclass
class SnapshotMeta:
    """Revision the snapshot was taken against, plus capture time."""

    taken_at: str  # ISO-8601, UTC
    version_id: Optional[str] = None
    version_user_handle: Optional[str] = None
    version_user_id: Optional[str] = None
    version_label: Optional[str] = None
    version_description: Optional[str] = None
    version_created_at: Optional[str] = None


@dataclass
class Snapshot:
    """Fingerprints of every tracked entity at one point in time.

    Name maps are used for rendering only; identity and diffing rely on the
    fingerprint maps alone.
    """

    meta: SnapshotMeta

    # ── Fingerprints (id -> sha256 hex) ───────────────────────────
    components: Dict[str, str] = field(default_factory=dict)
    styles: Dict[str, str] = field(default_factory=dict)
    variables: Dict[str, str] = field(default_factory=dict)

    # ── Display names (id -> name) ────────────────────────────────
    component_names: Dict[str, str] = field(default_factory=dict)
    style_names: Dict[str, str] = field(default_factory=dict)
    variable_names: Dict[str, str] = field(default_factory=dict)

    def fingerprints(self, category: EntityCategory) -> Dict[str, str]:
        return {
            EntityCategory.COMPONENT: self.components,
            EntityCategory.STYLE: self.styles,
            EntityCategory.VARIABLE: self.variables,
        }[category]

    def names(self, category: EntityCategory) -> Dict[str, str]:
        return {
            EntityCategory.COMPONENT: self.component_names,
            EntityCategory.STYLE: self.style_names,
            EntityCategory.VARIABLE: self.variable_names,
        }[category]

    def name_of(self, category: EntityCategory, entity_id: str) -> str:
        return self.names(category).get(entity_id) or entity_id

    def stamp_revision(self, revision: Optional[RevisionRecord]) -> None:
        """Record which remote revision this snapshot represents."""
        if revision is None:
            return
        self.meta.version_id = revision.id
        self.meta.version_user_handle = revision.user_handle
        self.meta.version_user_id = revision.user_id
        self.meta.version_label = revision.label
        self.meta.version_description = revision.description
        self.meta.version_created_at = revision.created_at.isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Snapshot":
        """Rebuild a snapshot from its JSON form.

        camelCase keys written by the earlier watcher script are accepted and
        unknown meta keys are dropped.
        """
        data = _rename_keys(data)
        known = {f.name for f in fields(SnapshotMeta)}
        meta = {k: v for k, v in _rename_keys(data.get("meta") or {}).items() if k in known}
        meta.setdefault("taken_at", "")
        return cls(
            meta=SnapshotMeta(**meta),
            components=dict(data.get("components") or {}),
            styles=dict(data.get("styles") or {}),
            variables=dict(data.get("variables") or {}),
            component_names=dict(data.get("component_names") or {}),
            style_names=dict(data.get("style_names") or {}),
            variable_names=dict(data.get("variable_names") or {}),
        )


_CAMEL_KEYS = {
    "takenAt": "taken_at",
    "versionId": "version_id",
    "versionUserHandle": "version_user_handle",
    "versionUserId": "version_user_id",
    "versionLabel": "version_label",
    "versionDescription": "version_description",
    "versionCreatedAt": "version_created_at",
    "componentNames": "component_names",
    "styleNames": "style_names",
    "variableNames": "variable_names",
}


def _rename_keys(raw: Mapping[str, Any]) -> Dict[str, Any]:
    return {_CAMEL_KEYS.get(k, k): v for k, v in raw.items()}


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware datetime (naive means UTC)."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
