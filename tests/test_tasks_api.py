from __future__ import annotations

import pytest
from fastapi import status
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

MISSING_TASK_ID = "665f1c2e9b1e8a3d4c5b6a79"


async def test_create_task_round_trip(client: AsyncClient, register_user) -> None:
    user = await register_user()
    response = await client.post(
        "/api/tasks",
        json={
            "title": "Read chapter 1",
            "xp": 15,
            "description": "Vectors and spaces",
            "dueDate": "2024-06-10T18:00:00Z",
            "priority": "High",
            "tags": ["math", "math", "reading"],
        },
        headers=user.headers,
    )

    assert response.status_code == status.HTTP_201_CREATED
    created = response.json()
    assert created["title"] == "Read chapter 1"
    assert created["xp"] == 15
    assert created["isCompleted"] is False
    assert created["ownerId"] == user.id
    assert created["priority"] == "High"
    assert created["tags"] == ["math", "reading"]
    assert created["order"] is None

    listing = await client.get("/api/tasks", headers=user.headers)
    assert listing.status_code == status.HTTP_200_OK
    assert [task["id"] for task in listing.json()] == [created["id"]]


async def test_create_ignores_client_supplied_owner_and_completion(client: AsyncClient, register_user) -> None:
    user = await register_user()
    other = await register_user("Grace")

    response = await client.post(
        "/api/tasks",
        json={"title": "Sneaky", "xp": 5, "ownerId": other.id, "isCompleted": True},
        headers=user.headers,
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["ownerId"] == user.id
    assert response.json()["isCompleted"] is False


@pytest.mark.parametrize(
    "payload",
    [
        {"xp": 10},
        {"title": "No xp"},
        {"title": "   ", "xp": 10},
        {"title": "Negative", "xp": -1},
    ],
)
async def test_create_rejects_missing_title_or_xp(client: AsyncClient, register_user, payload) -> None:
    user = await register_user()
    response = await client.post("/api/tasks", json=payload, headers=user.headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "validation_error"


async def test_tasks_require_authentication(client: AsyncClient) -> None:
    response = await client.get("/api/tasks")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["code"] == "unauthorized"

    response = await client.get("/api/tasks", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


async def test_list_sorted_by_order_with_stable_ties(client: AsyncClient, register_user, create_task) -> None:
    user = await register_user()
    third = await create_task(user, title="third", order=2)
    first = await create_task(user, title="first", order=1)
    second = await create_task(user, title="second", order=1)
    unordered = await create_task(user, title="unordered")

    response = await client.get("/api/tasks", headers=user.headers)

    assert [task["id"] for task in response.json()] == [
        unordered["id"],
        first["id"],
        second["id"],
        third["id"],
    ]


async def test_list_only_returns_own_tasks(client: AsyncClient, register_user, create_task) -> None:
    alice = await register_user("Alice")
    bob = await register_user("Bob")
    await create_task(alice, title="alice task")
    await create_task(bob, title="bob task")

    response = await client.get("/api/tasks", headers=alice.headers)

    assert [task["title"] for task in response.json()] == ["alice task"]


async def test_update_editable_fields(client: AsyncClient, register_user, create_task) -> None:
    user = await register_user()
    task = await create_task(user, xp=20, order=3)

    response = await client.put(
        f"/api/tasks/{task['id']}",
        json={"title": "Read chapter 2", "priority": "Low", "tags": ["a", "a"], "xp": 999, "order": 0},
        headers=user.headers,
    )

    assert response.status_code == status.HTTP_200_OK
    updated = response.json()
    assert updated["title"] == "Read chapter 2"
    assert updated["priority"] == "Low"
    assert updated["tags"] == ["a"]
    assert updated["xp"] == 20
    assert updated["order"] == 3
    assert updated["isCompleted"] is False


async def test_update_requires_an_editable_field(client: AsyncClient, register_user, create_task) -> None:
    user = await register_user()
    task = await create_task(user)

    response = await client.put(f"/api/tasks/{task['id']}", json={"xp": 1}, headers=user.headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST


async def test_update_conceals_foreign_tasks(client: AsyncClient, register_user, create_task) -> None:
    owner = await register_user("Owner")
    intruder = await register_user("Intruder")
    task = await create_task(owner)

    foreign = await client.put(f"/api/tasks/{task['id']}", json={"title": "mine"}, headers=intruder.headers)
    missing = await client.put(f"/api/tasks/{MISSING_TASK_ID}", json={"title": "x"}, headers=intruder.headers)
    malformed = await client.put("/api/tasks/not-an-id", json={"title": "x"}, headers=intruder.headers)

    assert foreign.status_code == status.HTTP_404_NOT_FOUND
    assert foreign.json()["message"] == "Task not found or unauthorized"
    assert missing.status_code == status.HTTP_404_NOT_FOUND
    assert malformed.status_code == status.HTTP_400_BAD_REQUEST
    assert malformed.json()["code"] == "invalid_task_id"

    unchanged = await client.get("/api/tasks", headers=owner.headers)
    assert unchanged.json()[0]["title"] == task["title"]


async def test_delete_task(client: AsyncClient, register_user, create_task) -> None:
    owner = await register_user("Owner")
    intruder = await register_user("Intruder")
    task = await create_task(owner)

    forbidden = await client.delete(f"/api/tasks/{task['id']}", headers=intruder.headers)
    assert forbidden.status_code == status.HTTP_403_FORBIDDEN
    assert forbidden.json()["code"] == "forbidden"

    malformed = await client.delete("/api/tasks/not-an-id", headers=owner.headers)
    assert malformed.status_code == status.HTTP_400_BAD_REQUEST

    deleted = await client.delete(f"/api/tasks/{task['id']}", headers=owner.headers)
    assert deleted.status_code == status.HTTP_200_OK
    assert deleted.json() == {"message": "Task deleted successfully"}

    again = await client.delete(f"/api/tasks/{task['id']}", headers=owner.headers)
    assert again.status_code == status.HTTP_404_NOT_FOUND

    listing = await client.get("/api/tasks", headers=owner.headers)
    assert listing.json() == []


async def test_long_titles_are_accepted(client: AsyncClient, register_user, create_task) -> None:
    user = await register_user()
    title = "t" * 300

    created = await create_task(user, title=title)
    renamed = await client.put(f"/api/tasks/{created['id']}", json={"title": title + "!"}, headers=user.headers)

    assert created["title"] == title
    assert renamed.status_code == status.HTTP_200_OK
    assert renamed.json()["title"] == title + "!"
