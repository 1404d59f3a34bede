"""Authentication service encapsulating registration and token issuance."""

from __future__ import annotations

import logging

from fastapi import status
from pymongo.errors import DuplicateKeyError

from ..core.config import Settings
from ..core.security import AccessToken, issue_access_token, verify_password
from ..db.store import DocumentStore
from ..errors import ApplicationError, ConflictError
from ..models import User
from .users import UserService

logger = logging.getLogger(__name__)


class AuthService:
    """Register accounts, check credentials and sign access tokens."""

    def __init__(self, store: DocumentStore, settings: Settings) -> None:
        self._settings = settings
        self._user_service = UserService(store)

    async def register_user(self, *, name: str, email: str, password: str) -> User:
        existing = await self._user_service.get_user_by_email(email)
        if existing is not None:
            raise ConflictError(
                "User already exists",
                code="user_exists",
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        try:
            user = await self._user_service.create_user(name=name, email=email, password=password)
        except DuplicateKeyError as exc:
            raise ConflictError(
                "User already exists",
                code="user_exists",
                status_code=status.HTTP_400_BAD_REQUEST,
            ) from exc
        logger.info("User registered", extra={"user_id": str(user.id)})
        return user

    async def authenticate_user(self, email: str, password: str) -> User | None:
        user = await self._user_service.get_user_by_email(email)
        if user is None:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    def issue_token(self, user: User) -> AccessToken:
        if user.id is None:
            raise ApplicationError("User must be persisted before issuing tokens.")
        return issue_access_token(str(user.id), self._settings)


__all__ = ["AuthService"]
