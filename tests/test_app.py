"""
Tests for app wiring: root route, error envelope, startup checks, mail backends.
"""
import smtplib

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from motri.db.database import Database
from motri.main import create_app
from motri.utils.email_utils import ConsoleMailSender, SmtpMailSender, build_mail_sender


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"message": "API is running"}


def test_unknown_route_uses_message_envelope(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert set(resp.json()) == {"message"}


def test_invalid_path_param_is_400(client, auth_headers):
    resp = client.delete("/api/reports/abc", headers=auth_headers)
    assert resp.status_code == 400
    assert "message" in resp.json()


def test_cors_allows_configured_origin(client):
    resp = client.options(
        "/api/auth/login",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"


def test_startup_fails_without_database(settings, tmp_path, mailer):
    broken = Database(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'db.sqlite'}")
    app = create_app(settings, database=broken, mail_sender=mailer)
    with pytest.raises(OperationalError):
        with TestClient(app):
            pass


class TestMailSenders:
    def test_console_backend(self, settings):
        sender = build_mail_sender(settings)
        assert isinstance(sender, ConsoleMailSender)
        assert sender.send("a@example.org", "Hi", "text") is True

    def test_smtp_backend_requires_server(self, settings):
        with pytest.raises(ValueError):
            build_mail_sender(settings.model_copy(update={"MAIL_BACKEND": "smtp"}))

    def test_smtp_backend(self, settings):
        sender = build_mail_sender(
            settings.model_copy(update={"MAIL_BACKEND": "smtp", "MAIL_SERVER": "smtp.example.org"})
        )
        assert isinstance(sender, SmtpMailSender)
        assert sender.host == "smtp.example.org"

    def test_smtp_failure_returns_false(self, monkeypatch):
        class BrokenSMTP:
            def __init__(self, *args, **kwargs):
                raise smtplib.SMTPConnectError(421, "down")

        monkeypatch.setattr(smtplib, "SMTP", BrokenSMTP)
        sender = SmtpMailSender(host="smtp.example.org", mail_from="no-reply@example.org")
        assert sender.send("a@example.org", "Hi", "text", "<p>text</p>") is False

    def test_smtp_success(self, monkeypatch):
        sent = {}

        class FakeSMTP:
            def __init__(self, host, port, timeout=None):
                sent["host"] = (host, port, timeout)

            def __enter__(self):
                return self

            def __exit__(self, *exc):
                return False

            def starttls(self):
                sent["tls"] = True

            def login(self, user, password):
                sent["login"] = user

            def sendmail(self, from_addr, to_addrs, msg):
                sent["to"] = to_addrs
                sent["msg"] = msg

        monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
        sender = SmtpMailSender(
            host="smtp.example.org",
            mail_from="no-reply@example.org",
            username="user",
            password="pass",
        )
        assert sender.send("a@example.org", "Reset", "link here") is True
        assert sent["to"] == ["a@example.org"]
        assert sent["tls"] is True
        assert sent["login"] == "user"
        assert "Subject: Reset" in sent["msg"]
