"""Tests for notification channels."""

import smtplib

import pytest
from rich.console import Console

from design_drift.config import WatcherConfig
from design_drift.exceptions import NotificationError
from design_drift.notify import ConsoleNotifier, SmtpNotifier
from design_drift.report import Attachment, Notification


def _make_config(**overrides):
    values = dict(
        smtp_host="smtp.example.com",
        smtp_user="bot",
        smtp_pass="pw",
        mail_from="bot@example.com",
        mail_to="a@example.com, b@example.com",
        display_timezone="UTC",
    )
    values.update(overrides)
    return WatcherConfig(**values)


def _make_notification():
    return Notification(
        subject="Design system changes detected",
        lines=["Components: +1 / ~0 / -0", "  + <Button> -> https://x"],
        attachments=[Attachment("diff-summary.json", '{"a": 1}')],
    )


class _FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.started_tls = False
        self.logged_in = None
        self.messages = []
        self.closed = False
        _FakeSMTP.instances.append(self)

    def starttls(self):
        self.started_tls = True

    def login(self, user, password):
        self.logged_in = (user, password)

    def noop(self):
        return (250, b"OK")

    def send_message(self, msg):
        self.messages.append(msg)

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def fake_smtp(monkeypatch):
    _FakeSMTP.instances = []
    monkeypatch.setattr(smtplib, "SMTP", _FakeSMTP)
    monkeypatch.setattr(smtplib, "SMTP_SSL", _FakeSMTP)
    return _FakeSMTP


class TestBuildMessage:
    def test_headers(self):
        msg = SmtpNotifier(_make_config()).build_message(_make_notification())
        assert msg["Subject"] == "[DS] Design system changes detected"
        assert msg["From"] == "bot@example.com"
        assert msg["To"] == "a@example.com, b@example.com"

    def test_html_escapes_angle_brackets(self):
        msg = SmtpNotifier(_make_config()).build_message(_make_notification())
        html_part = msg.get_body(preferencelist=("html",)).get_content()
        assert "&lt;Button&gt;" in html_part
        assert "<Button>" not in html_part
        plain = msg.get_body(preferencelist=("plain",)).get_content()
        assert "<Button>" in plain

    def test_attachments(self):
        msg = SmtpNotifier(_make_config()).build_message(_make_notification())
        attachments = list(msg.iter_attachments())
        assert [a.get_filename() for a in attachments] == ["diff-summary.json"]
        assert attachments[0].get_content_type() == "application/json"


class TestDelivery:
    def test_send_uses_starttls(self, fake_smtp):
        SmtpNotifier(_make_config()).send(_make_notification())
        server = fake_smtp.instances[-1]
        assert (server.host, server.port) == ("smtp.example.com", 587)
        assert server.started_tls
        assert server.logged_in == ("bot", "pw")
        assert len(server.messages) == 1

    def test_secure_skips_starttls(self, fake_smtp):
        SmtpNotifier(_make_config(smtp_secure=True, smtp_port=465)).verify()
        assert not fake_smtp.instances[-1].started_tls

    def test_failure_wrapped(self, monkeypatch):
        def refuse(*args, **kwargs):
            raise ConnectionRefusedError("refused")

        monkeypatch.setattr(smtplib, "SMTP", refuse)
        with pytest.raises(NotificationError):
            SmtpNotifier(_make_config()).send(_make_notification())

    def test_auth_failure_wrapped(self, monkeypatch, fake_smtp):
        def bad_login(self, user, password):
            raise smtplib.SMTPAuthenticationError(534, b"5.7.9 Application-specific password required")

        monkeypatch.setattr(_FakeSMTP, "login", bad_login)
        with pytest.raises(NotificationError) as exc:
            SmtpNotifier(_make_config()).verify()
        assert "534" in str(exc.value)
        assert fake_smtp.instances[-1].closed

    def test_starttls_failure_closes_connection(self, monkeypatch, fake_smtp):
        def no_tls(self):
            raise smtplib.SMTPNotSupportedError("STARTTLS extension not supported by server.")

        monkeypatch.setattr(_FakeSMTP, "starttls", no_tls)
        with pytest.raises(NotificationError):
            SmtpNotifier(_make_config()).send(_make_notification())
        server = fake_smtp.instances[-1]
        assert server.closed
        assert server.messages == []


class TestConsoleNotifier:
    def test_prints_and_records(self):
        console = Console(record=True, width=120)
        notifier = ConsoleNotifier(console)
        notifier.send(_make_notification())

        output = console.export_text()
        assert "Design system changes detected" in output
        assert "<Button>" in output
        assert "diff-summary.json" in output
        assert len(notifier.sent) == 1
