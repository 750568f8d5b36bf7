# motri/core/security.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional
import hashlib

import jwt
from passlib.context import CryptContext

from motri.core.config import Settings

# =============================
# 🔐 Passwort-Hashing
# =============================

# bcrypt hat ein 72-Byte-Limit; wir kappen auf 64 Zeichen (Policy & UI-Konsistenz).
MAX_PWD_LEN_BCRYPT_SAFE = 64

SUPPORTED_SCHEMES = ("argon2", "bcrypt")


class PasswordHasher:
    """
    Salted, absichtlich teures Einweg-Hashing.
    - Default: Argon2id (speicherhart)
    - Alternativ: bcrypt
    Die Kostenparameter kommen aus den Settings und koennen ohne
    Codeaenderung an neue Hardware angepasst werden. Hashes des jeweils
    anderen Schemas bleiben verifizierbar.
    """

    def __init__(
        self,
        scheme: str = "argon2",
        *,
        argon2_time_cost: int = 2,
        argon2_memory_cost: int = 102_400,
        argon2_parallelism: int = 8,
        bcrypt_rounds: int = 12,
    ):
        scheme = (scheme or "argon2").lower().strip()
        if scheme not in SUPPORTED_SCHEMES:
            raise ValueError(f"unsupported password scheme: {scheme!r}")
        self.scheme = scheme
        schemes = [scheme] + [s for s in SUPPORTED_SCHEMES if s != scheme]
        self._context = CryptContext(
            schemes=schemes,
            default=scheme,
            argon2__type="ID",
            argon2__time_cost=argon2_time_cost,
            argon2__memory_cost=argon2_memory_cost,
            argon2__parallelism=argon2_parallelism,
            bcrypt__rounds=bcrypt_rounds,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordHasher":
        return cls(
            settings.PASSWORD_SCHEME,
            argon2_time_cost=settings.ARGON2_TIME_COST,
            argon2_memory_cost=settings.ARGON2_MEMORY_COST,
            argon2_parallelism=settings.ARGON2_PARALLELISM,
            bcrypt_rounds=settings.BCRYPT_ROUNDS,
        )

    def _prepare(self, password: str) -> str:
        if self.scheme == "bcrypt":
            return password[:MAX_PWD_LEN_BCRYPT_SAFE]
        return password

    def hash(self, password: str) -> str:
        return self._context.hash(self._prepare(password))

    def verify(self, password: str, password_hash: str) -> bool:
        if not password_hash:
            return False
        try:
            scheme = self._context.identify(password_hash)
        except ValueError:
            return False
        if scheme is None:
            return False
        if scheme == "bcrypt":
            password = password[:MAX_PWD_LEN_BCRYPT_SAFE]
        try:
            return self._context.verify(password, password_hash)
        except ValueError:
            # kaputter Hash in der DB -> wie falsches Passwort behandeln
            return False

    def dummy_verify(self) -> None:
        """Gleicher CPU-Aufwand wie ein echter Vergleich (unbekannter Login)."""
        self._context.dummy_verify()


# =============================
# 🔑 Token-Hashing (Passwort-Reset)
# =============================

def hash_token(token: str) -> str:
    """Einmal-Tokens nur gehasht in DB speichern (kein Klartext)."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


# =============================
# 🪙 JWT Service (Session-Tokens)
# =============================

ALGORITHM = "HS256"


class JWTService:
    def __init__(
        self,
        secret: str,
        algorithm: str = ALGORITHM,
        expires_delta: timedelta = timedelta(days=1),
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    @classmethod
    def from_settings(cls, settings: Settings) -> "JWTService":
        return cls(
            settings.SECRET_KEY,
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )

    def create_token(
        self,
        subject: str | int,
        expires_delta: Optional[timedelta] = None,
        claims: Optional[dict[str, Any]] = None,
    ) -> str:
        """JWT erstellen (mit Ablaufzeit, Subject und optionalen Claims)."""
        now = datetime.now(timezone.utc)
        delta = self.expires_delta if expires_delta is None else expires_delta
        payload: dict[str, Any] = {
            "sub": str(subject),
            "iat": int(now.timestamp()),
            "exp": int((now + delta).timestamp()),
        }
        if claims:
            payload.update(claims)
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_token(self, token: str) -> dict[str, Any]:
        """JWT pruefen (Signatur + exp) und Payload liefern."""
        return jwt.decode(
            token,
            self.secret,
            algorithms=[self.algorithm],
            options={"require": ["sub", "exp"]},
        )
