"""Per-request values that log records pick up without being passed around."""

from __future__ import annotations

from contextvars import ContextVar, Token

REQUEST_ID_HEADER = "X-Request-ID"
UNBOUND = "-"

_request_id: ContextVar[str] = ContextVar("planner_request_id", default=UNBOUND)
_user_id: ContextVar[str] = ContextVar("planner_user_id", default=UNBOUND)


def get_request_id() -> str:
    return _request_id.get()


def bind_request_id(request_id: str) -> Token[str]:
    """Bind the correlation id of the request being served."""

    return _request_id.set(request_id)


def reset_request_id(token: Token[str]) -> None:
    _request_id.reset(token)


def get_user_id() -> str:
    return _user_id.get()


def bind_user_id(user_id: str) -> Token[str]:
    """Bind the authenticated caller.

    Set from inside the request task, so the value is dropped together with
    that task's context and needs no explicit reset.
    """

    return _user_id.set(user_id)


__all__ = [
    "REQUEST_ID_HEADER",
    "UNBOUND",
    "bind_request_id",
    "bind_user_id",
    "get_request_id",
    "get_user_id",
    "reset_request_id",
]
