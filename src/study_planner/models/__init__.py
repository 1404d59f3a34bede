"""Document models exposed for the study planner."""

from __future__ import annotations

from .common import utcnow
from .task import TASK_COLLECTION, Task, TaskPriority
from .user import USER_COLLECTION, User

DOCUMENT_MODELS = [Task, User]

__all__ = [
    "DOCUMENT_MODELS",
    "TASK_COLLECTION",
    "Task",
    "TaskPriority",
    "USER_COLLECTION",
    "User",
    "utcnow",
]
