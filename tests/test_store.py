from __future__ import annotations

import beanie
import pytest
from mongomock_motor import AsyncMongoMockClient

from study_planner.core.identity import AuthenticatedIdentity
from study_planner.db import DocumentStore, StoreNotOpenError
from study_planner.errors import AuthorizationError, NotFoundError
from study_planner.repositories import TaskRepository, UserRepository
from study_planner.services import TaskOwnershipGuard, TaskService, UserService

pytestmark = pytest.mark.asyncio


async def test_store_must_be_opened_before_use() -> None:
    store = DocumentStore(AsyncMongoMockClient(), "study_planner_unopened")

    with pytest.raises(StoreNotOpenError):
        _ = store.tasks

    await store.open()
    assert store.is_open
    await store.close()
    assert not store.is_open


async def test_open_creates_indexes(store: DocumentStore) -> None:
    task_indexes = await store.tasks.index_information()
    user_indexes = await store.users.index_information()

    assert "tasks_owner_order" in task_indexes
    assert user_indexes["users_email_unique"].get("unique") is True


async def test_guard_distinguishes_missing_and_foreign(store: DocumentStore) -> None:
    users = UserService(store)
    owner = await users.create_user(name="Owner", email="owner@example.com", password="secret1")
    other = await users.create_user(name="Other", email="other@example.com", password="secret1")
    owner_identity = AuthenticatedIdentity(user_id=owner.id)
    other_identity = AuthenticatedIdentity(user_id=other.id)
    task = await TaskService(store).create_task(owner_identity, title="Essay", xp=3)
    guard = TaskOwnershipGuard(TaskRepository(store))

    assert (await guard.require_owned(task.id, owner_identity)).id == task.id
    with pytest.raises(AuthorizationError):
        await guard.require_owned(task.id, other_identity)
    with pytest.raises(NotFoundError) as concealed:
        await guard.require_owned(task.id, other_identity, conceal=True)
    assert concealed.value.message == "Task not found or unauthorized"

    await store.tasks.delete_one({"_id": task.id})
    with pytest.raises(NotFoundError):
        await guard.require_owned(task.id, owner_identity)


async def test_credit_xp_is_additive_and_rejects_negative(store: DocumentStore) -> None:
    user = await UserService(store).create_user(name="Ada", email="ada@example.com", password="secret1")
    repository = UserRepository(store)

    assert await repository.credit_xp(user.id, 7) is True
    assert await repository.credit_xp(user.id, 3) is True
    assert (await repository.get(user.id)).xp == 10

    with pytest.raises(ValueError):
        await repository.credit_xp(user.id, -1)


async def test_installed_beanie_still_accepts_motor_databases() -> None:
    major = int(beanie.__version__.split(".")[0])
    assert major < 2
