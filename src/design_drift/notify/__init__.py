"""Notification channels."""

from typing import Protocol

from ..report.models import Notification
from .console import ConsoleNotifier
from .smtp import SmtpNotifier


class Notifier(Protocol):
    """Anything that can deliver a Notification."""

    channel: str

    def send(self, notification: Notification) -> None: ...


__all__ = ["ConsoleNotifier", "Notifier", "SmtpNotifier"]
