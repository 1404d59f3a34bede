"""User documents stored in the ``users`` collection."""

from __future__ import annotations

from datetime import datetime

from beanie import Document
from pydantic import ConfigDict, Field, field_validator
from pymongo import ASCENDING, DESCENDING, IndexModel

from .common import utcnow

USER_COLLECTION = "users"


class User(Document):
    """A registered account and its XP ledger.

    ``xp`` is only ever increased, by the XP value of a task at the moment
    that task is completed. The remaining gamification counters are carried
    for clients but not maintained by the server.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255)
    email: str = Field(max_length=320)
    hashed_password: str
    xp: int = Field(default=0, ge=0)
    streak: int = Field(default=0, ge=0)
    last_completed_date: datetime | None = None
    achievements: list[str] = Field(default_factory=list)
    total_tasks_completed: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("email", mode="before")
    @classmethod
    def _normalise_email(cls, value: object) -> str:
        return str(value or "").strip().lower()

    class Settings:
        name = USER_COLLECTION
        indexes = [
            IndexModel([("email", ASCENDING)], name="users_email_unique", unique=True),
            IndexModel([("xp", DESCENDING)], name="users_xp"),
        ]


__all__ = ["USER_COLLECTION", "User"]
