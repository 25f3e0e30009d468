"""Report models handed to the notification channel."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..diff.models import SnapshotDiff
from ..snapshot.models import RevisionRecord
from ..snapshot.schema import EntityCategory


@dataclass(frozen=True)
class Attachment:
    """A named text document attached to a notification."""

    filename: str
    content: str
    mimetype: str = "application/json"


@dataclass
class Notification:
    """Subject, pre-formatted body lines and attachments for one message."""

    subject: str
    lines: List[str] = field(default_factory=list)
    attachments: List[Attachment] = field(default_factory=list)


@dataclass
class ChangeReport:
    """Everything detected in one run, in display and structured form.

    Built fresh for every run with at least one change; never persisted.
    """

    diff: SnapshotDiff
    window: List[RevisionRecord]
    display_names: Dict[EntityCategory, Dict[str, str]]
    from_version: Optional[str]
    to_version: Optional[str]
    latest: Optional[RevisionRecord]
    lines: List[str] = field(default_factory=list)
    attachments: List[Attachment] = field(default_factory=list)
    subject: str = "Design system changes detected"

    @property
    def total_changes(self) -> int:
        return self.diff.total_changes

    def to_notification(self) -> Notification:
        return Notification(
            subject=self.subject,
            lines=list(self.lines),
            attachments=list(self.attachments),
        )
