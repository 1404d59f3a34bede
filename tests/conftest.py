from __future__ import annotations

import os
from collections.abc import AsyncIterator, Awaitable, Callable, Iterator
from dataclasses import dataclass
from uuid import uuid4

os.environ.setdefault("PLANNER_ENVIRONMENT", "test")
os.environ.setdefault("PLANNER_JWT_SECRET_KEY", "test-secret-key")

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from study_planner.core.config import get_settings
from study_planner.db import DocumentStore
from study_planner.main import create_app


@dataclass(slots=True)
class RegisteredUser:
    id: str
    name: str
    email: str
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


RegisterUser = Callable[..., Awaitable[RegisteredUser]]
CreateTask = Callable[..., Awaitable[dict]]


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
async def store() -> AsyncIterator[DocumentStore]:
    document_store = DocumentStore(AsyncMongoMockClient(), f"study_planner_test_{uuid4().hex}")
    await document_store.open()
    try:
        yield document_store
    finally:
        await document_store.close()


@pytest.fixture()
def app(store: DocumentStore) -> FastAPI:
    return create_app(store=store)


@pytest.fixture()
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client


@pytest.fixture()
def register_user(client: AsyncClient) -> RegisterUser:
    async def _register(name: str = "Ada", email: str | None = None, password: str = "secret1") -> RegisteredUser:
        email = email or f"{name.lower()}-{uuid4().hex[:8]}@example.com"
        response = await client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        payload = response.json()
        return RegisteredUser(
            id=payload["user"]["id"],
            name=name,
            email=email,
            token=payload["token"],
        )

    return _register


@pytest.fixture()
def create_task(client: AsyncClient) -> CreateTask:
    async def _create(user: RegisteredUser, **fields) -> dict:
        payload = {"title": "Read chapter 1", "xp": 10, **fields}
        response = await client.post("/api/tasks", json=payload, headers=user.headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
