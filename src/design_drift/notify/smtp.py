"""SMTP delivery of watcher notifications."""

import html
import smtplib
from datetime import datetime, timezone
from email.message import EmailMessage
from typing import List

from ..config import WatcherConfig
from ..exceptions import NotificationError
from ..logging_config import get_logger
from ..report.assembler import format_timestamp
from ..report.models import Notification

logger = get_logger(__name__)

_HTML_TEMPLATE = """\
<div style="font-family:system-ui,-apple-system,Segoe UI,Roboto,Helvetica,Arial">
  <h2 style="margin:0 0 12px;">{subject}</h2>
  <p style="color:#555;margin:0 0 16px;">{sent_at}</p>
  <pre style="background:#f6f8fa;padding:12px;border-radius:8px;white-space:pre-wrap;margin:0 0 16px;">{body}</pre>
  <hr style="border:none;border-top:1px solid #eee;margin:16px 0"/>
  <p style="color:#888;font-size:12px">Sent automatically by Design Drift</p>
</div>"""


class SmtpNotifier:
    """Sends notifications as multipart e-mail with JSON attachments."""

    channel = "smtp"

    def __init__(self, config: WatcherConfig):
        self.config = config

    def _connect(self) -> smtplib.SMTP:
        cfg = self.config
        if cfg.smtp_secure:
            server: smtplib.SMTP = smtplib.SMTP_SSL(
                cfg.smtp_host, cfg.smtp_port, timeout=cfg.request_timeout
            )
        else:
            server = smtplib.SMTP(cfg.smtp_host, cfg.smtp_port, timeout=cfg.request_timeout)
        try:
            if not cfg.smtp_secure:
                server.starttls()
            if cfg.smtp_user:
                server.login(cfg.smtp_user, cfg.smtp_pass or "")
        except BaseException:
            server.close()
            raise
        return server

    def verify(self) -> None:
        """Connect and authenticate without sending anything."""
        try:
            with self._connect() as server:
                server.noop()
        except smtplib.SMTPAuthenticationError as e:
            text = e.smtp_error
            if isinstance(text, bytes):
                text = text.decode("utf-8", errors="replace")
            if e.smtp_code == 534 and "Application-specific password" in text:
                logger.error(
                    "Gmail rejects account passwords over SMTP. Enable 2-step "
                    "verification and put an app password in SMTP_PASS."
                )
            raise NotificationError(self.channel, f"{e.smtp_code} {text}") from e
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(self.channel, str(e)) from e
        logger.info(f"SMTP connection to {self.config.smtp_host} verified")

    def build_message(self, notification: Notification) -> EmailMessage:
        cfg = self.config
        subject = f"{cfg.mail_subject_prefix} {notification.subject}".strip()
        sent_at = format_timestamp(datetime.now(timezone.utc), cfg.timezone)

        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = cfg.mail_from
        msg["To"] = ", ".join(cfg.recipients)

        msg.set_content("\n".join([notification.subject, sent_at, ""] + notification.lines))
        msg.add_alternative(
            _HTML_TEMPLATE.format(
                subject=html.escape(notification.subject),
                sent_at=html.escape(sent_at),
                body=_escape_lines(notification.lines),
            ),
            subtype="html",
        )

        for attachment in notification.attachments:
            maintype, _, subtype = attachment.mimetype.partition("/")
            msg.add_attachment(
                attachment.content.encode("utf-8"),
                maintype=maintype,
                subtype=subtype or "octet-stream",
                filename=attachment.filename,
            )
        return msg

    def send(self, notification: Notification) -> None:
        msg = self.build_message(notification)
        try:
            with self._connect() as server:
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(self.channel, str(e)) from e
        logger.info(f"Sent '{msg['Subject']}' to {len(self.config.recipients)} recipient(s)")


def _escape_lines(lines: List[str]) -> str:
    return "\n".join(html.escape(line, quote=False) for line in lines)
