# motri/services/auth_service.py
from __future__ import annotations

import logging
from typing import Dict, Optional

from jwt import ExpiredSignatureError, InvalidTokenError
from sqlalchemy.orm import Session

from motri.core.errors import InvalidCredentials, NotFound, Unauthorized, ValidationError
from motri.core.password_policy import validate_password, DEFAULT_MIN_LENGTH
from motri.core.security import JWTService, PasswordHasher
from motri.models.director import Director
from motri.repositories.director_repo import get_by_id, get_by_identifier, save

log = logging.getLogger(__name__)

# Eine Meldung fuer "unbekannt" und "falsches Passwort" (keine User-Enumeration)
INVALID_LOGIN_MESSAGE = "Invalid credentials"


def director_public(director: Director) -> Dict:
    return {
        "id": director.id,
        "username": director.username,
        "email": director.email,
    }


def verify_login(db: Session, hasher: PasswordHasher, identifier: str, password: str) -> Optional[Director]:
    director = get_by_identifier(db, identifier)
    if director is None:
        hasher.dummy_verify()
        return None
    if not director.check_password(password, hasher):
        return None
    return director


def login_director(
    db: Session,
    hasher: PasswordHasher,
    tokens: JWTService,
    *,
    identifier: Optional[str],
    password: Optional[str],
) -> Dict:
    if not identifier or not password:
        raise ValidationError("Please provide username/email and password")

    director = verify_login(db, hasher, identifier, password)
    if director is None:
        log.info("Login fehlgeschlagen fuer %r", identifier)
        raise InvalidCredentials(INVALID_LOGIN_MESSAGE)

    token = tokens.create_token(
        subject=director.id,
        claims={"username": director.username},
    )
    log.info("Login erfolgreich: director_id=%s", director.id)
    return {
        "message": "Login successful",
        "token": token,
        "director": director_public(director),
    }


def authenticate(db: Session, tokens: JWTService, token: Optional[str]) -> int:
    """Session-Token pruefen und die Director-ID liefern."""
    if not token:
        raise Unauthorized("Not authenticated")
    try:
        payload = tokens.decode_token(token)
    except ExpiredSignatureError:
        raise Unauthorized("Token expired")
    except InvalidTokenError:
        raise Unauthorized("Invalid token")

    try:
        director_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise Unauthorized("Invalid token")

    if get_by_id(db, director_id) is None:
        raise Unauthorized("Director not found")
    return director_id


def change_password(
    db: Session,
    hasher: PasswordHasher,
    director_id: int,
    *,
    old_password: Optional[str],
    new_password: Optional[str],
    min_length: int = DEFAULT_MIN_LENGTH,
) -> None:
    """
    Bereits ausgestellte Session-Tokens bleiben gueltig (zustandslose JWTs,
    kein Widerruf moeglich).
    """
    if not old_password or not new_password:
        raise ValidationError("Please provide both old and new passwords")

    director = get_by_id(db, director_id)
    if director is None:
        raise NotFound("Director not found")

    if not director.check_password(old_password, hasher):
        raise InvalidCredentials("Old password is incorrect")

    validate_password(new_password, min_length)

    director.set_password(new_password, hasher)
    save(db, director)
    log.info("Passwort geaendert: director_id=%s", director.id)
