"""Revision windows — which published versions a detected change spans.

Revision lists come from the versions endpoint newest-first and are used in
that order without re-sorting. Windows are returned oldest-first.
"""

from typing import List, Optional, Sequence

from ..snapshot.models import RevisionRecord


def _index_of(revisions: Sequence[RevisionRecord], revision_id: str) -> int:
    for i, revision in enumerate(revisions):
        if revision.id == revision_id:
            return i
    return -1


def versions_between(
    revisions: Sequence[RevisionRecord],
    previous_id: Optional[str] = None,
    latest_id: Optional[str] = None,
) -> List[RevisionRecord]:
    """Return revisions after ``previous_id`` up to and including ``latest_id``.

    Args:
        revisions: All known revisions, newest first.
        previous_id: Revision of the baseline (exclusive). When absent, or no
            longer present in the history, the window reaches back to the
            oldest known revision so that drift is never hidden.
        latest_id: Newest revision to include. When absent or unknown the
            window starts at the newest revision.

    Returns:
        The window, oldest first. Empty when ``previous_id == latest_id``.
    """
    start = _index_of(revisions, latest_id) if latest_id else 0
    if start < 0:
        start = 0

    end = _index_of(revisions, previous_id) if previous_id else len(revisions)
    if end < 0:
        end = len(revisions)

    newest_first = list(revisions[start:end])
    newest_first.reverse()
    return newest_first


def recent_revisions(revisions: Sequence[RevisionRecord], limit: int) -> List[RevisionRecord]:
    """The ``limit`` newest revisions, oldest first."""
    recent = list(revisions[:limit])
    recent.reverse()
    return recent
