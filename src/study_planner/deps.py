"""Reusable FastAPI dependencies."""

from __future__ import annotations

from typing import Annotated

from beanie import PydanticObjectId
from bson import ObjectId
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError

from .core.config import Settings, get_settings
from .core.context import bind_user_id
from .core.identity import AuthenticatedIdentity
from .core.security import JWTError, read_access_token
from .db.store import DocumentStore
from .errors import AuthenticationError
from .schemas.auth import TokenPayload

SettingsDependency = Annotated[Settings, Depends(get_settings)]

_bearer_scheme = HTTPBearer(auto_error=False, description="Access token issued by /api/auth/login")


def get_store(request: Request) -> DocumentStore:
    """Return the document store opened for this application."""

    return request.app.state.store


StoreDependency = Annotated[DocumentStore, Depends(get_store)]


def _decode_access_token(token: str, settings: Settings) -> TokenPayload:
    try:
        payload = read_access_token(token, settings)
    except JWTError as exc:
        raise AuthenticationError("Token is not valid") from exc

    try:
        return TokenPayload.model_validate(payload)
    except ValidationError as exc:
        raise AuthenticationError("Token is not valid") from exc


async def get_current_identity(
    settings: SettingsDependency,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> AuthenticatedIdentity:
    """Resolve the bearer token into the caller's identity or fail with 401."""

    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("No token, authorization denied")
    token_payload = _decode_access_token(credentials.credentials, settings)
    if not ObjectId.is_valid(token_payload.sub):
        raise AuthenticationError("Token is not valid")
    bind_user_id(token_payload.sub)
    return AuthenticatedIdentity(user_id=PydanticObjectId(token_payload.sub))


CurrentIdentityDependency = Annotated[AuthenticatedIdentity, Depends(get_current_identity)]


__all__ = [
    "CurrentIdentityDependency",
    "SettingsDependency",
    "StoreDependency",
    "get_current_identity",
    "get_store",
]
