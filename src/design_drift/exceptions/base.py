"""Root of the Design Drift error hierarchy.

Every failure the watcher reports to a user derives from DesignDriftError so
the CLI can print it and exit 1 without a traceback. Structured context such
as the API path, HTTP status or config key goes in ``details`` and is
rendered after the message.
"""

from typing import Any, Dict, Optional


class DesignDriftError(Exception):
    """A watcher failure with a human-readable message and optional context."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({context})"
