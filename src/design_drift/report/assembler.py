"""Change report assembly — turns diffs and revision windows into messages.

Rendering rules:
  * Display names resolve current snapshot -> baseline snapshot -> raw id.
  * Each (category, kind) bucket lists at most ``item_limit`` entities,
    sorted by display name; the attachments always carry the full sets.
  * The timeline shows the newest ``timeline_limit`` revisions of the window.
"""

import json
import traceback
from datetime import datetime, tzinfo
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote
from zoneinfo import ZoneInfo

from ..diff.models import DiffResult, SnapshotDiff
from ..diff.window import recent_revisions
from ..snapshot.models import RevisionRecord, Snapshot
from ..snapshot.schema import EntityCategory
from .models import Attachment, ChangeReport, Notification

DEFAULT_ITEM_LIMIT = 10
DEFAULT_TIMELINE_LIMIT = 25
DEFAULT_RECENT_LIMIT = 15
DEFAULT_TIMEZONE = "Asia/Seoul"

FIGMA_FILE_URL = "https://www.figma.com/file"
_URI_COMPONENT_SAFE = "!~*'()"

_CATEGORY_TITLES = {
    EntityCategory.COMPONENT: "Components",
    EntityCategory.STYLE: "Styles",
    EntityCategory.VARIABLE: "Variables",
}

# Variables live outside the node tree and have no canvas location to link to.
_LINKED_CATEGORIES = frozenset({EntityCategory.COMPONENT, EntityCategory.STYLE})


# ── Formatting helpers ───────────────────────────────────────────────────────

def build_deep_link(file_key: str, node_id: str) -> str:
    """Link that opens the file with the given node selected."""
    return f"{FIGMA_FILE_URL}/{file_key}?node-id={quote(node_id, safe=_URI_COMPONENT_SAFE)}"


def format_timestamp(value: Optional[datetime], tz: Optional[tzinfo] = None) -> str:
    if value is None:
        return "-"
    tz = tz or ZoneInfo(DEFAULT_TIMEZONE)
    return value.astimezone(tz).strftime("%Y-%m-%d %H:%M:%S %Z")


def format_revision_line(index: int, revision: RevisionRecord, tz: Optional[tzinfo] = None) -> str:
    return (
        f"{index:02d}. {format_timestamp(revision.created_at, tz)}"
        f" - {revision.author or '-'}"
        f" - {revision.label or '(no label)'}"
        f" ({revision.id})"
    )


def resolve_name(
    category: EntityCategory,
    entity_id: str,
    current: Optional[Snapshot],
    previous: Optional[Snapshot],
) -> str:
    for snapshot in (current, previous):
        if snapshot is not None:
            name = snapshot.names(category).get(entity_id)
            if name:
                return name
    return entity_id


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _revisions_json(revisions: Sequence[RevisionRecord]) -> str:
    return _to_json([r.to_dict() for r in revisions])


# ── Change report ────────────────────────────────────────────────────────────

def _bucket_lines(
    category: EntityCategory,
    result: DiffResult,
    names: Dict[str, str],
    file_key: str,
    item_limit: int,
) -> List[str]:
    def ordered(ids):
        return sorted(ids, key=lambda i: (names[i], i))[:item_limit]

    linked = category in _LINKED_CATEGORIES
    lines = [
        f"{_CATEGORY_TITLES[category]}: +{len(result.added)}"
        f" / ~{len(result.changed)} / -{len(result.removed)}"
    ]
    for marker, ids in (("+", result.added), ("~", result.changed)):
        for entity_id in ordered(ids):
            line = f"  {marker} {names[entity_id]}"
            if linked:
                line += f" -> {build_deep_link(file_key, entity_id)}"
            lines.append(line)
    for entity_id in ordered(result.removed):
        lines.append(f"  - {names[entity_id]} (removed)")
    return lines


def assemble_report(
    diff: SnapshotDiff,
    window: Sequence[RevisionRecord],
    previous: Snapshot,
    current: Snapshot,
    *,
    latest: Optional[RevisionRecord],
    file_key: str,
    all_revisions: Sequence[RevisionRecord] = (),
    item_limit: int = DEFAULT_ITEM_LIMIT,
    timeline_limit: int = DEFAULT_TIMELINE_LIMIT,
    tz: Optional[tzinfo] = None,
) -> ChangeReport:
    """Combine per-category diffs and the revision window into a report.

    Args:
        diff: Component, style and variable diffs.
        window: Revisions between baseline and latest, oldest first.
        previous: The baseline snapshot.
        current: The freshly built snapshot.
        latest: Newest known revision (``None`` if the file has no history).
        file_key: Figma file key used for deep links.
        all_revisions: Full history, newest first, attached verbatim.
        item_limit: Entities listed per (category, kind) bucket.
        timeline_limit: Revisions listed in the timeline.
        tz: Display timezone for timestamps.

    Returns:
        A ChangeReport with rendered lines and JSON attachments.
    """
    display_names: Dict[EntityCategory, Dict[str, str]] = {}
    for category in EntityCategory:
        result = diff.for_category(category)
        touched = result.added | result.removed | result.changed
        display_names[category] = {
            entity_id: resolve_name(category, entity_id, current, previous)
            for entity_id in touched
        }

    from_version = previous.meta.version_id
    to_version = latest.id if latest else current.meta.version_id

    lines = [f"Version: {from_version or '-'} -> {to_version or '-'}"]
    if latest is not None:
        lines.append(
            f"Latest author: {latest.author or '-'} ({format_timestamp(latest.created_at, tz)})"
        )
        if latest.label:
            lines.append(f"Label: {latest.label}")
        if latest.description:
            lines.append(f"Description: {latest.description}")

    for category in EntityCategory:
        lines.append("")
        lines.extend(_bucket_lines(
            category,
            diff.for_category(category),
            display_names[category],
            file_key,
            item_limit,
        ))

    shown = list(window)[-timeline_limit:] if timeline_limit > 0 else []
    lines.append("")
    lines.append(
        f"Version timeline since previous snapshot (oldest first, {len(window)} total)"
    )
    if shown:
        lines.extend(format_revision_line(i, r, tz) for i, r in enumerate(shown, start=1))
    else:
        lines.append("(no revisions in window)")

    summary = {
        "version": {
            "from": from_version,
            "to": to_version,
            "author": latest.author if latest else None,
            "created_at": latest.created_at.isoformat() if latest else None,
            "label": latest.label if latest else None,
        },
        "total_changes": diff.total_changes,
        "components": diff.components.to_dict(),
        "styles": diff.styles.to_dict(),
        "variables": diff.variables.to_dict(),
        "names": {
            "component_names": current.component_names,
            "style_names": current.style_names,
            "variable_names": current.variable_names,
        },
    }
    attachments = [
        Attachment("diff-summary.json", _to_json(summary)),
        Attachment("versions-window.json", _revisions_json(window)),
        Attachment("versions-all.json", _revisions_json(all_revisions)),
    ]

    return ChangeReport(
        diff=diff,
        window=list(window),
        display_names=display_names,
        from_version=from_version,
        to_version=to_version,
        latest=latest,
        lines=lines,
        attachments=attachments,
    )


# ── Other notifications ──────────────────────────────────────────────────────

def assemble_initial_report(
    current: Snapshot,
    revisions: Sequence[RevisionRecord],
    *,
    recent_limit: int = DEFAULT_RECENT_LIMIT,
    tz: Optional[tzinfo] = None,
) -> Notification:
    """Summary sent the first time a file is observed (no baseline yet)."""
    latest = revisions[0] if revisions else None
    recent = recent_revisions(revisions, recent_limit)

    lines = [
        f"Latest version: {latest.id if latest else 'unknown'}"
        f" ({format_timestamp(latest.created_at if latest else None, tz)})",
        f"Author: {(latest.author if latest else None) or '-'}",
        "",
        f"Components: {len(current.components)}",
        f"Styles: {len(current.styles)}",
        f"Variables (tokens): {len(current.variables)}",
        "",
        f"Timeline of the {len(recent)} most recent versions (oldest first)",
    ]
    lines.extend(format_revision_line(i, r, tz) for i, r in enumerate(recent, start=1))

    return Notification(
        subject="Design system watcher initialized",
        lines=lines,
        attachments=[Attachment("versions-all.json", _revisions_json(revisions))],
    )


def assemble_error_report(error: BaseException) -> Notification:
    """Failure notice carrying the formatted traceback."""
    text = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    return Notification(
        subject="Design system watcher error",
        lines=text.rstrip("\n").splitlines() or [repr(error)],
    )
