"""Owner check shared by every task operation that takes a task id."""

from __future__ import annotations

import logging

from beanie import PydanticObjectId

from ..core.identity import AuthenticatedIdentity
from ..errors import AuthorizationError, NotFoundError
from ..models import Task
from ..repositories import TaskRepository

logger = logging.getLogger(__name__)


class TaskOwnershipGuard:
    """Load a task and verify that the caller owns it.

    The check is load-then-compare and carries no lock: a task deleted between
    the check and a later write is reported by that write, not here.
    """

    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    async def require_owned(
        self,
        task_id: PydanticObjectId,
        identity: AuthenticatedIdentity,
        *,
        conceal: bool = False,
    ) -> Task:
        """Return the task if ``identity`` owns it.

        With ``conceal`` a foreign task is reported as missing so that callers
        cannot probe for ids they do not own.
        """
        task = await self._repository.get(task_id)
        if task is None:
            raise NotFoundError("Task not found", details={"task_id": str(task_id)})
        if not identity.owns(task.owner_id):
            logger.warning(
                "Task access denied",
                extra={"task_id": str(task_id), "user_id": str(identity.user_id)},
            )
            if conceal:
                raise NotFoundError("Task not found or unauthorized", details={"task_id": str(task_id)})
            raise AuthorizationError("User not authorized")
        return task


__all__ = ["TaskOwnershipGuard"]
