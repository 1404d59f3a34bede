from __future__ import annotations

import pytest
from fastapi import status
from httpx import AsyncClient

from study_planner.db import DocumentStore

pytestmark = pytest.mark.asyncio


async def test_health_reports_open_store(client: AsyncClient) -> None:
    response = await client.get("/healthz")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok", "document_store": "open"}


async def test_health_degrades_when_store_closed(client: AsyncClient, store: DocumentStore) -> None:
    await store.close()

    response = await client.get("/healthz")

    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert response.json()["document_store"] == "closed"


async def test_metadata_endpoint(client: AsyncClient) -> None:
    response = await client.get("/api/metadata")

    assert response.status_code == status.HTTP_200_OK
    payload = response.json()
    assert payload["name"] == "Study Planner"
    assert payload["environment"] == "test"
    assert payload["api_prefix"] == "/api"
    assert payload["leaderboard_size"] == 10
