# motri/schemas/auth.py
from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

# Pflichtfelder werden im Service geprueft (400 mit eigener Meldung),
# deshalb sind hier alle Eingaben optional.

# ---------- Login ----------
class LoginIn(BaseModel):
    identifier: Optional[str] = Field(default=None, description="E-Mail oder Benutzername")
    password: Optional[str] = None


class DirectorOut(BaseModel):
    id: int
    username: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class LoginOut(BaseModel):
    message: str
    token: str
    director: DirectorOut


# ---------- Passwort aendern ----------
class ChangePasswordIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    old_password: Optional[str] = Field(default=None, alias="oldPassword")
    new_password: Optional[str] = Field(default=None, alias="newPassword")


# ---------- Passwort vergessen / Reset ----------
class ForgotPasswordIn(BaseModel):
    email: Optional[str] = None


class ResetPasswordIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    new_password: Optional[str] = Field(default=None, alias="newPassword")


# ---------- Allgemein ----------
class MessageOut(BaseModel):
    message: str


class SuccessOut(BaseModel):
    success: bool
