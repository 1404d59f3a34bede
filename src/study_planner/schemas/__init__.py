"""Pydantic schemas for public interfaces."""

from __future__ import annotations

from .auth import AuthResponse, LoginRequest, RegisterRequest, TokenPayload
from .system import ErrorResponse, HealthCheckResponse, ServiceMetadata
from .task import (
    ReorderEntry,
    ReorderRequest,
    TaskCreate,
    TaskDeletedResponse,
    TaskRead,
    TaskUpdate,
)
from .user import LeaderboardEntry, UserPublic, UserSummary

__all__ = [
    "AuthResponse",
    "ErrorResponse",
    "HealthCheckResponse",
    "LeaderboardEntry",
    "LoginRequest",
    "RegisterRequest",
    "ReorderEntry",
    "ReorderRequest",
    "ServiceMetadata",
    "TaskCreate",
    "TaskDeletedResponse",
    "TaskRead",
    "TaskUpdate",
    "TokenPayload",
    "UserPublic",
    "UserSummary",
]
