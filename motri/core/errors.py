# motri/core/errors.py
from __future__ import annotations

from fastapi import status


class AppError(Exception):
    """Basis aller fachlichen Fehler; wird am Request-Rand zu {"message": ...}."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class InvalidCredentials(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InvalidOrExpiredToken(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid or expired reset token"


class WeakPassword(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Password is too short"


class ServerError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"
