"""Routes handling task CRUD, completion and reordering."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, status

from ...deps import CurrentIdentityDependency, SettingsDependency, StoreDependency
from ...models import Task
from ...schemas import ReorderRequest, TaskCreate, TaskDeletedResponse, TaskRead, TaskUpdate
from ...services import CompletionWorkflow, ReorderWorkflow, TaskService, parse_task_id

router = APIRouter(prefix="/tasks", tags=["tasks"])

StrictQuery = Annotated[
    bool,
    Query(description="Reject the whole batch if any id is missing or not owned by the caller."),
]


def _map_task(task: Task) -> TaskRead:
    return TaskRead.model_validate(task)


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
)
async def create_task(
    payload: TaskCreate,
    store: StoreDependency,
    identity: CurrentIdentityDependency,
) -> TaskRead:
    task = await TaskService(store).create_task(
        identity,
        title=payload.title,
        xp=payload.xp,
        description=payload.description,
        due_date=payload.due_date,
        priority=payload.priority,
        tags=payload.tags,
        order=payload.order,
    )
    return _map_task(task)


@router.get("", response_model=list[TaskRead], summary="List the caller's tasks in display order")
async def list_tasks(
    store: StoreDependency,
    identity: CurrentIdentityDependency,
) -> list[TaskRead]:
    tasks = await TaskService(store).list_tasks(identity)
    return [_map_task(task) for task in tasks]


# Registered before "/{task_id}" so that "reorder" is not taken for an id.
@router.put(
    "/reorder",
    response_model=list[TaskRead | None],
    summary="Assign new positions to the caller's tasks",
)
async def reorder_tasks(
    payload: ReorderRequest,
    store: StoreDependency,
    identity: CurrentIdentityDependency,
    strict: StrictQuery = False,
) -> list[TaskRead | None]:
    results = await ReorderWorkflow(store).reorder(
        identity,
        [(entry.id, entry.order) for entry in payload.tasks],
        strict=strict,
    )
    return [_map_task(task) if task is not None else None for task in results]


@router.put("/{task_id}", response_model=TaskRead, summary="Update an existing task")
async def update_task(
    task_id: str,
    payload: TaskUpdate,
    store: StoreDependency,
    identity: CurrentIdentityDependency,
) -> TaskRead:
    task = await TaskService(store).update_task(
        parse_task_id(task_id),
        identity,
        payload.model_dump(exclude_unset=True),
    )
    return _map_task(task)


@router.delete(
    "/{task_id}",
    response_model=TaskDeletedResponse,
    summary="Delete a task",
)
async def delete_task(
    task_id: str,
    store: StoreDependency,
    identity: CurrentIdentityDependency,
) -> TaskDeletedResponse:
    await TaskService(store).delete_task(parse_task_id(task_id), identity)
    return TaskDeletedResponse()


@router.patch(
    "/{task_id}/complete",
    response_model=TaskRead,
    summary="Complete a task and award its XP",
)
async def complete_task(
    task_id: str,
    store: StoreDependency,
    settings: SettingsDependency,
    identity: CurrentIdentityDependency,
) -> TaskRead:
    task = await CompletionWorkflow(store, settings).complete(parse_task_id(task_id), identity)
    return _map_task(task)
