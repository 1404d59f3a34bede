"""Task completion and the XP award that follows it."""

from __future__ import annotations

import logging

from beanie import PydanticObjectId
from pymongo.errors import PyMongoError

from ..core.config import Settings
from ..core.identity import AuthenticatedIdentity
from ..db.store import DocumentStore
from ..errors import TaskAlreadyCompletedError, XpCreditError
from ..models import Task
from ..repositories import TaskRepository, UserRepository
from .ownership import TaskOwnershipGuard

logger = logging.getLogger(__name__)


class CompletionWorkflow:
    """Complete a task and credit its XP to the owner exactly once.

    The flip of ``is_completed`` is a compare-and-swap on the task document,
    so of N concurrent requests for the same task only one proceeds to the
    credit step. The two writes are not transactional. If the credit fails
    the task stays completed unless ``completion_compensate`` is enabled, in
    which case the flip is reverted before the error is raised.
    """

    def __init__(self, store: DocumentStore, settings: Settings) -> None:
        self._tasks = TaskRepository(store)
        self._users = UserRepository(store)
        self._guard = TaskOwnershipGuard(self._tasks)
        self._compensate = settings.completion_compensate

    async def complete(self, task_id: PydanticObjectId, identity: AuthenticatedIdentity) -> Task:
        task = await self._guard.require_owned(task_id, identity)
        if task.is_completed:
            raise TaskAlreadyCompletedError(details={"task_id": str(task_id)})

        if not await self._tasks.mark_completed(task_id, task.owner_id):
            # Another request flipped it between our read and our write.
            raise TaskAlreadyCompletedError(details={"task_id": str(task_id)})
        logger.info(
            "Task marked completed",
            extra={"task_id": str(task_id), "user_id": str(task.owner_id)},
        )

        try:
            credited = await self._users.credit_xp(task.owner_id, task.xp)
        except PyMongoError as exc:
            await self._credit_failed(task)
            raise XpCreditError(details={"task_id": str(task_id)}) from exc
        if not credited:
            await self._credit_failed(task)
            raise XpCreditError(details={"task_id": str(task_id)})

        logger.info(
            "XP credited",
            extra={"task_id": str(task_id), "user_id": str(task.owner_id), "xp": task.xp},
        )
        completed = await self._tasks.get(task_id)
        if completed is None:
            return task.model_copy(update={"is_completed": True})
        return completed

    async def _credit_failed(self, task: Task) -> None:
        logger.error(
            "XP credit failed after task completion",
            extra={
                "task_id": str(task.id),
                "user_id": str(task.owner_id),
                "xp": task.xp,
                "compensate": self._compensate,
            },
        )
        if not self._compensate:
            return
        try:
            reverted = await self._tasks.revert_completion(task.id, task.owner_id)
        except PyMongoError:
            logger.exception("Completion revert failed", extra={"task_id": str(task.id)})
            return
        if reverted:
            logger.info("Completion reverted", extra={"task_id": str(task.id)})


__all__ = ["CompletionWorkflow"]
