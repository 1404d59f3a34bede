"""Batch updates of the ``order`` position of a caller's tasks."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from beanie import PydanticObjectId
from bson import ObjectId

from ..core.identity import AuthenticatedIdentity
from ..db.store import DocumentStore
from ..errors import InvalidReorderBatchError, NotFoundError
from ..models import Task
from ..repositories import TaskRepository

logger = logging.getLogger(__name__)


class ReorderWorkflow:
    """Apply ``(task id, order)`` assignments to tasks owned by the caller.

    Entries are written concurrently and independently. Entries naming a task
    that is missing or owned by someone else are skipped and reported as
    ``None``. When the same id appears twice the last write to land wins.
    """

    def __init__(self, store: DocumentStore) -> None:
        self._tasks = TaskRepository(store)

    async def reorder(
        self,
        identity: AuthenticatedIdentity,
        entries: Sequence[tuple[str, int]],
        *,
        strict: bool = False,
    ) -> list[Task | None]:
        task_ids = [self._parse_id(raw_id) for raw_id, _ in entries]

        if strict:
            requested = set(task_ids)
            owned = await self._tasks.count_for_owner(list(requested), identity.user_id)
            if owned != len(requested):
                raise NotFoundError(
                    "One or more tasks were not found",
                    details={"requested": len(requested), "owned": owned},
                )

        outcomes = await asyncio.gather(
            *(
                self._tasks.set_order(task_id, identity.user_id, order)
                for task_id, (_, order) in zip(task_ids, entries)
            ),
            return_exceptions=True,
        )
        failures = [outcome for outcome in outcomes if isinstance(outcome, BaseException)]
        if failures:
            # Entries that succeeded stay applied.
            logger.error(
                "Reorder batch partially failed",
                extra={
                    "user_id": str(identity.user_id),
                    "requested": len(entries),
                    "failed": len(failures),
                },
            )
            raise failures[0]
        results: list[Task | None] = list(outcomes)
        applied = sum(1 for task in results if task is not None)
        logger.info(
            "Tasks reordered",
            extra={
                "user_id": str(identity.user_id),
                "requested": len(entries),
                "applied": applied,
                "skipped": len(entries) - applied,
            },
        )
        return results

    @staticmethod
    def _parse_id(raw_id: str) -> PydanticObjectId:
        if not ObjectId.is_valid(raw_id):
            raise InvalidReorderBatchError(details={"task_id": raw_id})
        return PydanticObjectId(raw_id)


__all__ = ["ReorderWorkflow"]
