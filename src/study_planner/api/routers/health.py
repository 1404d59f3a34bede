"""Liveness endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from ...deps import StoreDependency
from ...schemas.system import HealthCheckResponse

router = APIRouter(tags=["system"])


@router.get("/healthz", response_model=HealthCheckResponse, summary="Health check")
async def read_health(store: StoreDependency, response: Response) -> HealthCheckResponse:
    """Report 503 while the document store handle is closed."""
    if store.is_open:
        return HealthCheckResponse(status="ok", document_store="open")
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthCheckResponse(status="degraded", document_store="closed")
