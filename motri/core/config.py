# motri/core/config.py
from __future__ import annotations

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,  # .env keys dürfen groß/klein geschrieben sein
        extra="forbid",        # nur bekannte Variablen erlaubt
    )

    # ------------------------------------------------------------
    # 🧭 Allgemeine App-Einstellungen
    # ------------------------------------------------------------
    APP_NAME: str = "Motri"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    SECRET_KEY: str = Field(..., min_length=16)

    # Basis-URL des Frontends (Reset-Links zeigen auf /reset-password/<token>)
    FRONTEND_BASE_URL: str = "http://localhost:3000"

    # Erlaubte Origins, kommagetrennt
    CORS_ORIGINS: str = (
        "https://motri-et.vercel.app,"
        "https://motri-topaz.vercel.app,"
        "http://localhost:5173,"
        "http://localhost:3000"
    )

    # ------------------------------------------------------------
    # 🔐 Tokens & Passwörter
    # ------------------------------------------------------------
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    RESET_TOKEN_EXPIRE_MINUTES: int = 60
    PASSWORD_MIN_LENGTH: int = 6

    # "argon2" | "bcrypt"
    PASSWORD_SCHEME: str = "argon2"
    ARGON2_TIME_COST: int = 2
    ARGON2_MEMORY_COST: int = 102_400  # KiB
    ARGON2_PARALLELISM: int = 8
    BCRYPT_ROUNDS: int = 12

    # ------------------------------------------------------------
    # 🗄️ Datenbank
    # ------------------------------------------------------------
    DB_URL: str = "sqlite:///./motri.db"

    # ------------------------------------------------------------
    # 📂 Uploads (Bild zum Report)
    # ------------------------------------------------------------
    UPLOAD_DIR: str = "./uploads"
    MAX_UPLOAD_MB: int = 10
    ALLOWED_IMAGE_TYPES: str = "image/jpeg,image/png,image/gif,image/webp"

    # ------------------------------------------------------------
    # 📩 SMTP / Mail
    # ------------------------------------------------------------
    MAIL_BACKEND: str = "console"  # "smtp" | "console"
    MAIL_FROM: str = "no-reply@motri.local"
    MAIL_FROM_NAME: str = "Motri"
    MAIL_SERVER: str | None = None
    MAIL_PORT: int = 587
    MAIL_USERNAME: str | None = None
    MAIL_PASSWORD: str | None = None
    MAIL_USE_TLS: bool = True
    MAIL_TIMEOUT_SECONDS: int = 15

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def allowed_image_types(self) -> set[str]:
        return {t.strip().lower() for t in self.ALLOWED_IMAGE_TYPES.split(",") if t.strip()}
