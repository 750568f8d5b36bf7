# motri/services/password_reset_service.py
from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from motri.core.config import Settings
from motri.core.errors import InvalidOrExpiredToken, NotFound, ServerError, ValidationError
from motri.core.password_policy import validate_password, DEFAULT_MIN_LENGTH
from motri.core.security import PasswordHasher, hash_token
from motri.models.director import Director
from motri.repositories.director_repo import get_by_email, get_by_reset_token_hash, save
from motri.utils.dates import now_utc
from motri.utils.email_utils import MailSender

log = logging.getLogger(__name__)


# --------------- Helpers ---------------
def _now_utc() -> datetime:
    return now_utc()


def build_reset_link(base_url: str, raw_token: str) -> str:
    return f"{base_url.rstrip('/')}/reset-password/{raw_token}"


def _find_valid(db: Session, raw_token: Optional[str]) -> Optional[Director]:
    if not raw_token:
        return None
    director = get_by_reset_token_hash(db, hash_token(raw_token))
    if director is None or not director.reset_token_valid(_now_utc()):
        return None
    return director


# --------------- Public API ---------------
def request_password_reset(
    db: Session,
    settings: Settings,
    mailer: MailSender,
    email: Optional[str],
) -> str:
    """
    Erzeugt einen neuen Reset-Token (nur der Hash wird gespeichert) und
    verschickt den Link. Ein aelterer, noch offener Token wird dabei
    ueberschrieben. Rueckgabe: der Klartext-Token (nur fuer den Versand).
    """
    if not email or not email.strip():
        raise ValidationError("Please provide your email")

    director = get_by_email(db, email)
    if director is None:
        raise NotFound("Director not found")

    raw_token = secrets.token_urlsafe(32)
    expires_at = _now_utc() + timedelta(minutes=settings.RESET_TOKEN_EXPIRE_MINUTES)
    director.set_reset_token(hash_token(raw_token), expires_at)
    save(db, director)

    minutes = settings.RESET_TOKEN_EXPIRE_MINUTES
    link = build_reset_link(settings.FRONTEND_BASE_URL, raw_token)
    subject = "Password Reset Request"
    text_body = (
        f"Hi {director.username},\n\n"
        f"You requested a password reset. Click the link below to reset your password "
        f"(valid for {minutes} minutes):\n\n{link}\n\n"
        f"If you didn't request this, please ignore this email.\n"
    )
    html_body = (
        f"<p>Hi <b>{director.username}</b>,</p>"
        f"<p>You requested a password reset.</p>"
        f'<p><a href="{link}" target="_blank">Click here to set a new password</a></p>'
        f"<p>The link is valid for {minutes} minutes.</p>"
        f"<p>If you didn't request this, please ignore this email.</p>"
    )

    if not mailer.send(director.email, subject, text_body, html_body):
        raise ServerError("Server error while sending email")

    log.info("Reset-Link verschickt: director_id=%s", director.id)
    return raw_token


def verify_reset_token(db: Session, raw_token: Optional[str]) -> bool:
    """Nur lesen – der Token wird hier nicht verbraucht."""
    return _find_valid(db, raw_token) is not None


def reset_password(
    db: Session,
    hasher: PasswordHasher,
    raw_token: Optional[str],
    new_password: Optional[str],
    min_length: int = DEFAULT_MIN_LENGTH,
) -> None:
    """
    Setzt das neue Passwort und leert Token-Hash + Ablauf in einem Commit.
    Policy wird vor jeder Aenderung geprueft.
    """
    if not new_password:
        raise ValidationError("Please provide a new password")
    validate_password(new_password, min_length)

    director = _find_valid(db, raw_token)
    if director is None:
        raise InvalidOrExpiredToken("Invalid or expired reset token")

    director.set_password(new_password, hasher)
    director.clear_reset_token()
    save(db, director)
    log.info("Passwort per Reset-Link gesetzt: director_id=%s", director.id)
