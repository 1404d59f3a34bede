"""Task documents stored in the ``tasks`` collection."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from beanie import Document, PydanticObjectId
from pydantic import ConfigDict, Field, field_validator
from pymongo import ASCENDING, IndexModel

from .common import utcnow

TASK_COLLECTION = "tasks"


class TaskPriority(str, Enum):
    """Priority labels a task may carry."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


def dedupe_tags(value: object) -> list[str]:
    """Return ``value`` as a list of stripped labels, first occurrence wins."""

    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple, set)):
        raise ValueError("tags must be a list of strings")
    seen: dict[str, None] = {}
    for item in value:
        label = str(item).strip()
        if label and label not in seen:
            seen[label] = None
    return list(seen)


class Task(Document):
    """A unit of work owned by exactly one user.

    ``owner_id`` and ``xp`` are fixed at creation. ``is_completed`` only ever
    moves from ``False`` to ``True`` and ``order`` is only written by reorder
    batches.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1)
    description: str | None = None
    is_completed: bool = False
    due_date: datetime | None = None
    xp: int = Field(ge=0)
    priority: TaskPriority | None = None
    owner_id: PydanticObjectId
    tags: list[str] = Field(default_factory=list)
    order: int | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("tags", mode="before")
    @classmethod
    def _normalise_tags(cls, value: object) -> list[str]:
        return dedupe_tags(value)

    class Settings:
        name = TASK_COLLECTION
        indexes = [
            IndexModel(
                [("owner_id", ASCENDING), ("order", ASCENDING)],
                name="tasks_owner_order",
            ),
        ]


__all__ = ["TASK_COLLECTION", "Task", "TaskPriority", "dedupe_tags"]
