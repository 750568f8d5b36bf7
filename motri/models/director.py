# motri/models/director.py
from __future__ import annotations

from datetime import datetime
from typing import Optional, TYPE_CHECKING

from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, validates

from motri.db.database import Base
from motri.utils.dates import as_aware_utc, now_utc

if TYPE_CHECKING:
    from motri.core.security import PasswordHasher


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class Director(Base):
    __tablename__ = "directors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    # Nur der Hash wird gespeichert – gesetzt ausschliesslich ueber set_password()
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # ------------------------------------------------------------
    # Passwort-Reset (Hash + Ablauf immer gemeinsam gesetzt/geleert)
    # ------------------------------------------------------------
    reset_token_hash: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    reset_token_expires_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=now_utc,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=now_utc,
        onupdate=now_utc,
    )

    @validates("username")
    def _strip_username(self, _key: str, value: str) -> str:
        return (value or "").strip()

    @validates("email")
    def _normalize_email(self, _key: str, value: str) -> str:
        return normalize_email(value)

    # ------------------------------------------------------------
    # Passwort
    # ------------------------------------------------------------
    def set_password(self, password: str, hasher: "PasswordHasher") -> None:
        self.password_hash = hasher.hash(password)

    def check_password(self, password: str, hasher: "PasswordHasher") -> bool:
        return hasher.verify(password, self.password_hash)

    # ------------------------------------------------------------
    # Reset-Token
    # ------------------------------------------------------------
    def set_reset_token(self, token_hash: str, expires_at: datetime) -> None:
        self.reset_token_hash = token_hash
        self.reset_token_expires_at = expires_at

    def clear_reset_token(self) -> None:
        self.reset_token_hash = None
        self.reset_token_expires_at = None

    def reset_token_valid(self, now: datetime) -> bool:
        expires = as_aware_utc(self.reset_token_expires_at)
        if not self.reset_token_hash or expires is None:
            return False
        return now < expires

    def __repr__(self) -> str:
        return f"<Director id={self.id} username={self.username!r} email={self.email!r}>"
