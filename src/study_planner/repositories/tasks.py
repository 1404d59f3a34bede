"""Repository for task documents."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from beanie import PydanticObjectId
from pymongo import ASCENDING, ReturnDocument

from ..db.store import DocumentStore
from ..models import Task, utcnow
from .base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    """Task persistence. Every write is a single atomic document operation."""

    def __init__(self, store: DocumentStore) -> None:
        super().__init__(store, Task)

    async def list_for_owner(self, owner_id: PydanticObjectId) -> list[Task]:
        """Return the owner's tasks by ``order`` ascending, ties in insertion order."""
        cursor = self.collection.find(
            {"owner_id": owner_id},
            sort=[("order", ASCENDING), ("_id", ASCENDING)],
        )
        return [Task.model_validate(raw) for raw in await cursor.to_list(length=None)]

    async def count_for_owner(self, task_ids: Sequence[PydanticObjectId], owner_id: PydanticObjectId) -> int:
        if not task_ids:
            return 0
        return await self.collection.count_documents(
            {"_id": {"$in": list(task_ids)}, "owner_id": owner_id}
        )

    async def update_fields(
        self,
        task_id: PydanticObjectId,
        owner_id: PydanticObjectId,
        changes: dict[str, Any],
    ) -> Task | None:
        """Set ``changes`` on an owned task and return the updated document."""
        raw = await self.collection.find_one_and_update(
            {"_id": task_id, "owner_id": owner_id},
            {"$set": {**changes, "updated_at": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        return self._parse(raw)

    async def mark_completed(self, task_id: PydanticObjectId, owner_id: PydanticObjectId) -> bool:
        """Flip ``is_completed`` to true iff it is currently false.

        Returns ``True`` only for the caller whose write performed the flip.
        """
        result = await self.collection.update_one(
            {"_id": task_id, "owner_id": owner_id, "is_completed": False},
            {"$set": {"is_completed": True, "updated_at": utcnow()}},
        )
        return result.modified_count == 1

    async def revert_completion(self, task_id: PydanticObjectId, owner_id: PydanticObjectId) -> bool:
        result = await self.collection.update_one(
            {"_id": task_id, "owner_id": owner_id, "is_completed": True},
            {"$set": {"is_completed": False, "updated_at": utcnow()}},
        )
        return result.modified_count == 1

    async def set_order(
        self,
        task_id: PydanticObjectId,
        owner_id: PydanticObjectId,
        order: int,
    ) -> Task | None:
        """Write ``order`` on an owned task; ``None`` when nothing matched."""
        raw = await self.collection.find_one_and_update(
            {"_id": task_id, "owner_id": owner_id},
            {"$set": {"order": order, "updated_at": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        return self._parse(raw)
