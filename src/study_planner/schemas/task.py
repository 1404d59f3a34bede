"""Task-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from beanie import PydanticObjectId
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..models import TaskPriority
from ..models.task import dedupe_tags

TASK_READ_EXAMPLE = {
    "id": "665f1c2e9b1e8a3d4c5b6a79",
    "title": "Read chapter 1",
    "description": "Linear algebra, vectors and spaces.",
    "isCompleted": False,
    "dueDate": "2024-06-10T18:00:00Z",
    "xp": 10,
    "priority": TaskPriority.MEDIUM.value,
    "ownerId": "665f1b9a9b1e8a3d4c5b6a70",
    "tags": ["math"],
    "order": 0,
    "createdAt": "2024-06-04T12:00:00Z",
    "updatedAt": "2024-06-04T12:00:00Z",
}


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskCreate(_CamelModel):
    """Payload for creating a new task.

    Ownership and completion are never taken from the payload.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "title": "Read chapter 1",
                "xp": 10,
                "priority": TaskPriority.MEDIUM.value,
                "tags": ["math"],
            }
        },
    )

    title: str = Field(min_length=1)
    xp: int = Field(ge=0)
    description: str | None = None
    due_date: datetime | None = None
    priority: TaskPriority | None = None
    tags: list[str] = Field(default_factory=list)
    order: int | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def _normalise_tags(cls, value: object) -> list[str]:
        return dedupe_tags(value)


class TaskUpdate(_CamelModel):
    """Partial update of the editable task fields."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={"example": {"title": "Read chapters 1-2", "priority": TaskPriority.HIGH.value}},
    )

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    due_date: datetime | None = None
    priority: TaskPriority | None = None
    tags: list[str] | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def _normalise_tags(cls, value: object) -> list[str]:
        return dedupe_tags(value)

    @model_validator(mode="after")
    def _ensure_payload_not_empty(self) -> "TaskUpdate":
        if not self.model_dump(exclude_unset=True):
            raise ValueError("At least one field must be provided for update.")
        if "title" in self.model_fields_set and self.title is None:
            raise ValueError("Title cannot be cleared.")
        return self


class TaskRead(_CamelModel):
    """Public representation of a task."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={"example": TASK_READ_EXAMPLE},
    )

    id: PydanticObjectId
    title: str
    description: str | None = None
    is_completed: bool
    due_date: datetime | None = None
    xp: int
    priority: TaskPriority | None = None
    owner_id: PydanticObjectId
    tags: list[str] = Field(default_factory=list)
    order: int | None = None
    created_at: datetime
    updated_at: datetime


class ReorderEntry(BaseModel):
    """One ``{id, order}`` pair of a reorder batch.

    The id stays a raw string here so that a malformed id fails the whole
    batch inside the workflow rather than at request parsing.
    """

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    order: int


class ReorderRequest(BaseModel):
    """Batch of position updates for the caller's tasks."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "tasks": [
                    {"id": "665f1c2e9b1e8a3d4c5b6a79", "order": 1},
                    {"id": "665f1c2e9b1e8a3d4c5b6a7a", "order": 0},
                ]
            }
        }
    )

    tasks: list[ReorderEntry]


class TaskDeletedResponse(BaseModel):
    """Confirmation returned after a task is removed."""

    message: str = "Task deleted successfully"


__all__ = [
    "ReorderEntry",
    "ReorderRequest",
    "TaskCreate",
    "TaskDeletedResponse",
    "TaskRead",
    "TaskUpdate",
]
