"""Service layer orchestrating user-related repository operations."""

from __future__ import annotations

from beanie import PydanticObjectId

from ..core.security import hash_password
from ..db.store import DocumentStore
from ..models import User
from ..repositories import UserRepository


class UserService:
    """High-level business operations for ``User`` documents."""

    def __init__(self, store: DocumentStore) -> None:
        self._repository = UserRepository(store)

    async def create_user(self, *, name: str, email: str, password: str) -> User:
        """Create and persist a new user record with an empty XP ledger."""
        user = User(name=name, email=email, hashed_password=hash_password(password))
        return await self._repository.add(user)

    async def get_user(self, user_id: PydanticObjectId) -> User | None:
        return await self._repository.get(user_id)

    async def get_user_by_email(self, email: str) -> User | None:
        return await self._repository.get_by_email(email)

    async def leaderboard(self, limit: int) -> list[User]:
        """Return the ``limit`` users with the most XP, highest first."""
        return await self._repository.top_by_xp(limit)


__all__ = ["UserService"]
