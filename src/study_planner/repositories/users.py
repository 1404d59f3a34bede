"""Repository for user documents and their XP ledger."""

from __future__ import annotations

from beanie import PydanticObjectId
from pymongo import ASCENDING, DESCENDING

from ..db.store import DocumentStore
from ..models import User, utcnow
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Concrete repository for ``User`` documents."""

    def __init__(self, store: DocumentStore) -> None:
        super().__init__(store, User)

    async def get_by_email(self, email: str) -> User | None:
        """Return a user matching the supplied email if it exists."""
        return self._parse(await self.collection.find_one({"email": email.strip().lower()}))

    async def credit_xp(self, user_id: PydanticObjectId, amount: int) -> bool:
        """Atomically add ``amount`` to the user's XP. ``False`` if the user is absent."""
        if amount < 0:
            raise ValueError("XP credits cannot be negative")
        result = await self.collection.update_one(
            {"_id": user_id},
            {"$inc": {"xp": amount}, "$set": {"updated_at": utcnow()}},
        )
        return result.matched_count == 1

    async def top_by_xp(self, limit: int) -> list[User]:
        cursor = self.collection.find(
            {},
            sort=[("xp", DESCENDING), ("_id", ASCENDING)],
            limit=limit,
        )
        return [User.model_validate(raw) for raw in await cursor.to_list(length=None)]
