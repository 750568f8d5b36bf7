# motri/api/routes/auth.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from motri.api.deps import (
    CurrentDirector,
    get_current_director,
    get_hasher,
    get_jwt_service,
    get_mail_sender,
    get_settings,
)
from motri.core.config import Settings
from motri.core.errors import InvalidOrExpiredToken
from motri.core.security import JWTService, PasswordHasher
from motri.db.database import get_db
from motri.schemas.auth import (
    ChangePasswordIn,
    ForgotPasswordIn,
    LoginIn,
    LoginOut,
    MessageOut,
    ResetPasswordIn,
    SuccessOut,
)
from motri.services.auth_service import change_password, login_director
from motri.services.password_reset_service import (
    request_password_reset,
    reset_password,
    verify_reset_token,
)
from motri.utils.email_utils import MailSender

router = APIRouter(tags=["Auth"])


# ============================================================
# Login / Passwort aendern
# ============================================================

@router.post("/login", response_model=LoginOut, openapi_extra={"security": []})
def api_login(
    body: LoginIn,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
    tokens: JWTService = Depends(get_jwt_service),
):
    return login_director(
        db,
        hasher,
        tokens,
        identifier=body.identifier,
        password=body.password,
    )


@router.put("/change-password", response_model=MessageOut)
def api_change_password(
    body: ChangePasswordIn,
    director: CurrentDirector = Depends(get_current_director),
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
    settings: Settings = Depends(get_settings),
):
    change_password(
        db,
        hasher,
        director.id,
        old_password=body.old_password,
        new_password=body.new_password,
        min_length=settings.PASSWORD_MIN_LENGTH,
    )
    return {"message": "Password changed successfully"}


# ============================================================
# Passwort vergessen / Reset-Link
# ============================================================

@router.post("/forgot-password", response_model=MessageOut, openapi_extra={"security": []})
def api_forgot_password(
    body: ForgotPasswordIn,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    mailer: MailSender = Depends(get_mail_sender),
):
    request_password_reset(db, settings, mailer, body.email)
    return {"message": "Password reset link sent to your email"}


@router.get("/reset-password/{token}", response_model=SuccessOut, openapi_extra={"security": []})
def api_verify_reset_token(token: str, db: Session = Depends(get_db)):
    if not verify_reset_token(db, token):
        raise InvalidOrExpiredToken("Invalid or expired reset token")
    return {"success": True}


@router.post("/reset-password/{token}", response_model=MessageOut, openapi_extra={"security": []})
def api_reset_password(
    token: str,
    body: ResetPasswordIn,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
    settings: Settings = Depends(get_settings),
):
    reset_password(db, hasher, token, body.new_password, settings.PASSWORD_MIN_LENGTH)
    return {"message": "Password reset successfully"}
