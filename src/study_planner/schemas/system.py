"""Service-level response models."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class ServiceMetadata(BaseModel):
    """Static facts about the running deployment."""

    name: str
    environment: str
    version: str
    api_prefix: str
    leaderboard_size: int = Field(description="Number of users the leaderboard returns")


class HealthCheckResponse(BaseModel):
    status: Literal["ok", "degraded"] = "ok"
    document_store: Literal["open", "closed"] = Field(description="Whether the store handle is open")


class ErrorResponse(BaseModel):
    """Body of every error response."""

    code: str = Field(description="Stable machine-readable error code")
    message: str = Field(description="Short human-readable explanation")
    details: Any | None = Field(default=None, description="Optional structured context")
