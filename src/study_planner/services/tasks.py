"""Service layer encapsulating task CRUD operations."""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from beanie import PydanticObjectId
from bson import ObjectId

from ..core.identity import AuthenticatedIdentity
from ..db.store import DocumentStore
from ..errors import NotFoundError, ValidationError
from ..models import Task, TaskPriority
from ..repositories import TaskRepository
from .ownership import TaskOwnershipGuard

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({"title", "description", "due_date", "priority", "tags"})


def parse_task_id(raw_id: str) -> PydanticObjectId:
    """Convert a path parameter into an ObjectId or fail with a 400."""
    if not ObjectId.is_valid(raw_id):
        raise ValidationError("Invalid task ID", code="invalid_task_id", details={"task_id": raw_id})
    return PydanticObjectId(raw_id)


def _serialise_updates(updates: Mapping[str, Any]) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    for key, value in updates.items():
        if key not in EDITABLE_FIELDS:
            continue
        if isinstance(value, Enum):
            cleaned[key] = value.value
        else:
            cleaned[key] = value
    return cleaned


class TaskService:
    """High-level business orchestration for ``Task`` documents."""

    def __init__(self, store: DocumentStore) -> None:
        self._repository = TaskRepository(store)
        self._guard = TaskOwnershipGuard(self._repository)

    async def create_task(
        self,
        identity: AuthenticatedIdentity,
        *,
        title: str,
        xp: int,
        description: str | None = None,
        due_date: datetime | None = None,
        priority: TaskPriority | None = None,
        tags: list[str] | None = None,
        order: int | None = None,
    ) -> Task:
        """Create a new task owned by the caller."""
        task = Task(
            title=title,
            xp=xp,
            description=description,
            due_date=due_date,
            priority=priority,
            tags=tags or [],
            order=order,
            owner_id=identity.user_id,
        )
        await self._repository.add(task)
        logger.info("Task created", extra={"task_id": str(task.id), "user_id": str(identity.user_id)})
        return task

    async def list_tasks(self, identity: AuthenticatedIdentity) -> list[Task]:
        """Return the caller's tasks in display order."""
        return await self._repository.list_for_owner(identity.user_id)

    async def update_task(
        self,
        task_id: PydanticObjectId,
        identity: AuthenticatedIdentity,
        changes: Mapping[str, Any],
    ) -> Task:
        """Apply edits to an owned task.

        Fields outside the editable set are dropped. A task the caller does not
        own is reported as not found.
        """
        updates = _serialise_updates(changes)
        if not updates:
            raise ValidationError("At least one field must be provided for update.")
        await self._guard.require_owned(task_id, identity, conceal=True)
        updated = await self._repository.update_fields(task_id, identity.user_id, updates)
        if updated is None:
            raise NotFoundError("Task not found or unauthorized", details={"task_id": str(task_id)})
        logger.info(
            "Task updated",
            extra={"task_id": str(task_id), "fields": sorted(updates)},
        )
        return updated

    async def delete_task(self, task_id: PydanticObjectId, identity: AuthenticatedIdentity) -> None:
        """Delete an owned task."""
        task = await self._guard.require_owned(task_id, identity)
        if not await self._repository.delete(task):
            raise NotFoundError("Task not found", details={"task_id": str(task_id)})
        logger.info("Task deleted", extra={"task_id": str(task_id)})


__all__ = ["EDITABLE_FIELDS", "TaskService", "parse_task_id"]
