"""Dry-run notifier that prints messages to the terminal."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ..report.models import Notification


class ConsoleNotifier:
    """Renders notifications with rich instead of delivering them."""

    channel = "console"

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.sent: list[Notification] = []

    def send(self, notification: Notification) -> None:
        self.sent.append(notification)
        body = Text("\n".join(notification.lines))
        self.console.print(
            Panel(body, title=f"[bold cyan]{notification.subject}[/bold cyan]", expand=False)
        )
        for attachment in notification.attachments:
            self.console.print(
                f"[dim]attachment: {attachment.filename} ({len(attachment.content)} bytes)[/dim]"
            )
