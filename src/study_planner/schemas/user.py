"""User-facing Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from beanie import PydanticObjectId
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UserSummary(BaseModel):
    """Account details returned alongside an issued token."""

    model_config = ConfigDict(from_attributes=True)

    id: PydanticObjectId
    name: str
    email: str
    xp: int


class UserPublic(BaseModel):
    """The caller's own profile, without credentials."""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: PydanticObjectId
    name: str
    email: str
    xp: int
    streak: int = 0
    last_completed_date: datetime | None = None
    achievements: list[str] = Field(default_factory=list)
    total_tasks_completed: int = 0
    created_at: datetime
    updated_at: datetime


class LeaderboardEntry(BaseModel):
    """One row of the XP leaderboard."""

    model_config = ConfigDict(from_attributes=True)

    id: PydanticObjectId
    name: str
    xp: int


__all__ = ["LeaderboardEntry", "UserPublic", "UserSummary"]
