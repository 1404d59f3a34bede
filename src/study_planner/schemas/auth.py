"""Schemas describing authentication payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .user import UserSummary


class RegisterRequest(BaseModel):
    """Incoming payload for registering a new user."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6)


class LoginRequest(BaseModel):
    """Email and password credentials."""

    email: EmailStr
    password: str = Field(min_length=1)


class AuthResponse(BaseModel):
    """Issued bearer token and the account it was issued for."""

    token: str
    token_type: str = Field(default="bearer", frozen=True)
    expires_in: int
    user: UserSummary


class TokenPayload(BaseModel):
    """Validated JWT payload."""

    model_config = ConfigDict(extra="ignore")

    sub: str
    exp: datetime
    iat: datetime
    jti: str


__all__ = ["AuthResponse", "LoginRequest", "RegisterRequest", "TokenPayload"]
