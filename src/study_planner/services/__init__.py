"""Domain services and workflows."""

from __future__ import annotations

from .auth import AuthService
from .completion import CompletionWorkflow
from .ownership import TaskOwnershipGuard
from .reorder import ReorderWorkflow
from .tasks import TaskService, parse_task_id
from .users import UserService

__all__ = [
    "AuthService",
    "CompletionWorkflow",
    "ReorderWorkflow",
    "TaskOwnershipGuard",
    "TaskService",
    "UserService",
    "parse_task_id",
]
