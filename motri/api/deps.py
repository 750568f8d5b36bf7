# motri/api/deps.py
from __future__ import annotations
from dataclasses import dataclass

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from motri.core.config import Settings
from motri.core.security import JWTService, PasswordHasher
from motri.db.database import get_db
from motri.services.auth_service import authenticate
from motri.utils.email_utils import MailSender
from motri.utils.files import ImageStorage

# ----------------------------------------------------------
# Security
# ----------------------------------------------------------
security = HTTPBearer(auto_error=False)


@dataclass
class CurrentDirector:
    id: int


# ----------------------------------------------------------
# App-weite Objekte (beim Start in app.state abgelegt)
# ----------------------------------------------------------
def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def get_jwt_service(request: Request) -> JWTService:
    return request.app.state.jwt_service


def get_mail_sender(request: Request) -> MailSender:
    return request.app.state.mail_sender


def get_image_storage(request: Request) -> ImageStorage:
    return request.app.state.image_storage


# ----------------------------------------------------------
# Bearer-Token-Authentifizierung (API)
# ----------------------------------------------------------
def get_current_director(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
    tokens: JWTService = Depends(get_jwt_service),
) -> CurrentDirector:
    token = None
    if credentials and credentials.scheme.lower() == "bearer":
        token = credentials.credentials
    return CurrentDirector(id=authenticate(db, tokens, token))
