# motri/utils/email_utils.py
from __future__ import annotations

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Optional, Protocol

from motri.core.config import Settings

log = logging.getLogger(__name__)


class MailSender(Protocol):
    def send(self, to_email: str, subject: str, text_body: str, html_body: Optional[str] = None) -> bool:
        ...


class SmtpMailSender:
    """Versand via SMTP. Gibt False zurueck, wenn der Versand scheitert."""

    def __init__(
        self,
        *,
        host: str,
        port: int = 587,
        mail_from: str,
        from_name: str = "Motri",
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        timeout: int = 15,
    ):
        self.host = host
        self.port = port
        self.mail_from = mail_from
        self.from_name = from_name
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def _build(self, to_email: str, subject: str, text_body: str, html_body: Optional[str]) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = formataddr((self.from_name, self.mail_from))
        msg["To"] = to_email
        msg["Subject"] = subject
        msg.attach(MIMEText(text_body, "plain", "utf-8"))
        if html_body:
            msg.attach(MIMEText(html_body, "html", "utf-8"))
        return msg

    def send(self, to_email: str, subject: str, text_body: str, html_body: Optional[str] = None) -> bool:
        msg = self._build(to_email, subject, text_body, html_body)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls()
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.sendmail(self.mail_from, [to_email], msg.as_string())
        except (smtplib.SMTPException, OSError):
            log.exception("Mailversand an %s fehlgeschlagen (%s)", to_email, subject)
            return False
        log.info("Mail gesendet an %s: %s", to_email, subject)
        return True


class ConsoleMailSender:
    """Entwicklung: Mail nur ins Log schreiben."""

    def send(self, to_email: str, subject: str, text_body: str, html_body: Optional[str] = None) -> bool:
        log.info("[MAIL] An: %s | Betreff: %s\n%s", to_email, subject, text_body)
        return True


def build_mail_sender(settings: Settings) -> MailSender:
    backend = (settings.MAIL_BACKEND or "console").lower().strip()
    if backend == "smtp":
        if not settings.MAIL_SERVER:
            raise ValueError("MAIL_SERVER muss fuer MAIL_BACKEND=smtp gesetzt sein")
        return SmtpMailSender(
            host=settings.MAIL_SERVER,
            port=settings.MAIL_PORT,
            mail_from=settings.MAIL_FROM,
            from_name=settings.MAIL_FROM_NAME,
            username=settings.MAIL_USERNAME,
            password=settings.MAIL_PASSWORD,
            use_tls=settings.MAIL_USE_TLS,
            timeout=settings.MAIL_TIMEOUT_SECONDS,
        )
    if backend == "console":
        return ConsoleMailSender()
    raise ValueError(f"unbekanntes MAIL_BACKEND: {backend!r}")
