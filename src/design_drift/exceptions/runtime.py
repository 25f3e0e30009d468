"""Runtime exceptions raised by the collaborators around the diff engine."""

from pathlib import Path
from typing import Optional

from .base import DesignDriftError


class RemoteAPIError(DesignDriftError):
    """Raised when a Figma REST API request fails.

    ``status_code`` is ``None`` when the request never produced an HTTP
    response (DNS failure, timeout, connection reset).
    """

    def __init__(
        self,
        path: str,
        status_code: Optional[int],
        reason: str = "",
        body: str = "",
    ):
        if status_code is None:
            message = f"Figma API request failed for {path}: {reason}"
        else:
            message = f"Figma API error {status_code} {reason} for {path}".replace("  ", " ")
        details = {"path": path}
        if body:
            details["body"] = body[:500]
        super().__init__(message, details=details)
        self.path = path
        self.status_code = status_code
        self.reason = reason
        self.body = body

    @property
    def is_forbidden(self) -> bool:
        return self.status_code == 403


class BaselineError(DesignDriftError):
    """Raised when the stored baseline snapshot cannot be read."""

    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Cannot read baseline snapshot: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason


class NotificationError(DesignDriftError):
    """Raised when a notification cannot be delivered."""

    def __init__(self, channel: str, reason: str):
        super().__init__(
            f"Failed to deliver notification via {channel}",
            details={"channel": channel, "reason": reason},
        )
        self.channel = channel
        self.reason = reason
