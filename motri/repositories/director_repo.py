# motri/repositories/director_repo.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import select, or_
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from motri.core.security import PasswordHasher
from motri.models.director import Director, normalize_email


# ------------------------------------------------------------
# READ
# ------------------------------------------------------------
def get_by_id(db: Session, director_id: int) -> Optional[Director]:
    return db.get(Director, director_id)


def get_by_email(db: Session, email: str) -> Optional[Director]:
    return db.scalar(select(Director).where(Director.email == normalize_email(email)))


def get_by_username(db: Session, username: str) -> Optional[Director]:
    return db.scalar(select(Director).where(Director.username == (username or "").strip()))


def get_by_identifier(db: Session, identifier: str) -> Optional[Director]:
    """Username ODER E-Mail (E-Mail case-insensitiv)."""
    ident = (identifier or "").strip()
    stmt = select(Director).where(
        or_(Director.username == ident, Director.email == normalize_email(ident))
    ).limit(1)
    return db.scalar(stmt)


def get_by_reset_token_hash(db: Session, token_hash: str) -> Optional[Director]:
    stmt = select(Director).where(Director.reset_token_hash == token_hash).limit(1)
    return db.scalar(stmt)


# ------------------------------------------------------------
# CREATE
# ------------------------------------------------------------
def create_director(
    db: Session,
    *,
    username: str,
    email: str,
    password: str,
    hasher: PasswordHasher,
) -> Director:
    if get_by_username(db, username):
        raise ValueError("USERNAME_EXISTS")
    if get_by_email(db, email):
        raise ValueError("EMAIL_EXISTS")

    director = Director(username=username, email=email)
    director.set_password(password, hasher)
    db.add(director)
    try:
        db.flush()
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    db.refresh(director)
    return director


# ------------------------------------------------------------
# UPDATE
# ------------------------------------------------------------
def save(db: Session, director: Director) -> Director:
    db.add(director)
    db.commit()
    db.refresh(director)
    return director
