"""Password hashing and signed bearer tokens."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

from jose import JWTError, jwt
from passlib.context import CryptContext

from .config import Settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(frozen=True, slots=True)
class AccessToken:
    """A signed bearer token and the window in which it is accepted."""

    value: str
    issued_at: datetime
    expires_at: datetime

    @property
    def lifetime_seconds(self) -> int:
        return int((self.expires_at - self.issued_at).total_seconds())


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    return pwd_context.verify(password, hashed_password)


def issue_access_token(
    user_id: str,
    settings: Settings,
    *,
    lifetime: timedelta | None = None,
) -> AccessToken:
    """Sign a token whose subject is ``user_id``.

    ``lifetime`` defaults to ``access_token_expire_minutes``.
    """

    issued_at = datetime.now(timezone.utc)
    expires_at = issued_at + (lifetime or timedelta(minutes=settings.access_token_expire_minutes))
    claims: dict[str, Any] = {
        "sub": user_id,
        "iat": issued_at,
        "exp": expires_at,
        "jti": uuid4().hex,
    }
    value = jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    return AccessToken(value=value, issued_at=issued_at, expires_at=expires_at)


def read_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """Verify signature and expiry and return the claims.

    Raises ``JWTError`` for anything that is not a valid, unexpired token.
    """

    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])


__all__ = [
    "AccessToken",
    "JWTError",
    "hash_password",
    "issue_access_token",
    "read_access_token",
    "verify_password",
]
