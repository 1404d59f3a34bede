"""Application-level exception handling helpers."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Mapping

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from .core.context import REQUEST_ID_HEADER
from .schemas.system import ErrorResponse

logger = logging.getLogger(__name__)


class ApplicationError(Exception):
    """Base class for domain-specific errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "application_error",
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details


class ValidationError(ApplicationError):
    """Malformed input: a missing required field or an unparseable identifier."""

    def __init__(
        self,
        message: str = "Validation failed.",
        *,
        code: str = "validation_error",
        details: Any | None = None,
    ) -> None:
        super().__init__(
            message,
            code=code,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class AuthenticationError(ApplicationError):
    """Missing or invalid bearer credentials."""

    def __init__(
        self,
        message: str = "Could not validate credentials.",
        *,
        code: str = "unauthorized",
        details: Any | None = None,
    ) -> None:
        super().__init__(
            message,
            code=code,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
        )


class AuthorizationError(ApplicationError):
    """A valid caller acting on a resource it does not own."""

    def __init__(
        self,
        message: str = "Not authorized to access this resource.",
        *,
        code: str = "forbidden",
        details: Any | None = None,
    ) -> None:
        super().__init__(
            message,
            code=code,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
        )


class NotFoundError(ApplicationError):
    """Error representing missing resources."""

    def __init__(
        self,
        message: str = "Resource not found.",
        *,
        code: str = "not_found",
        details: Any | None = None,
    ) -> None:
        super().__init__(
            message,
            code=code,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
        )


class ConflictError(ApplicationError):
    """The requested transition clashes with the current resource state."""

    def __init__(
        self,
        message: str = "Resource state conflict.",
        *,
        code: str = "conflict",
        status_code: int = status.HTTP_409_CONFLICT,
        details: Any | None = None,
    ) -> None:
        super().__init__(message, code=code, status_code=status_code, details=details)


class TaskAlreadyCompletedError(ConflictError):
    """Re-completion of a task. Reported as 400 for client compatibility."""

    def __init__(self, message: str = "Task already completed", *, details: Any | None = None) -> None:
        super().__init__(
            message,
            code="task_already_completed",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class StoreError(ApplicationError):
    """Underlying persistence failure; fatal to the request."""

    def __init__(
        self,
        message: str = "Server Error",
        *,
        code: str = "store_error",
        details: Any | None = None,
    ) -> None:
        super().__init__(
            message,
            code=code,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
        )


class XpCreditError(StoreError):
    """The owner's ledger could not be credited after a task was completed."""

    def __init__(self, message: str = "Failed to credit XP", *, details: Any | None = None) -> None:
        super().__init__(message, code="xp_credit_failed", details=details)


class InvalidReorderBatchError(StoreError):
    """A reorder batch named a malformed task id; nothing was written."""

    def __init__(self, message: str = "Server Error", *, details: Any | None = None) -> None:
        super().__init__(message, code="invalid_task_id", details=details)


def _status_phrase(status_code: int) -> str | None:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return None


def _status_code_slug(status_code: int) -> str:
    phrase = _status_phrase(status_code)
    if phrase is None:
        return "http_error"
    return phrase.lower().replace(" ", "_").replace("-", "_")


def _with_request_id(request: Request, details: Any | None) -> Any | None:
    request_id = getattr(request.state, "request_id", None)
    if not request_id:
        return details
    if details is None:
        return {"request_id": request_id}
    if isinstance(details, dict):
        return {"request_id": request_id, **details} if "request_id" not in details else details
    return {"request_id": request_id, "detail": details}


def _render(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Any | None = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(code=code, message=message, details=_with_request_id(request, details))
    response = JSONResponse(status_code=status_code, content=jsonable_encoder(body), headers=headers)
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
    return response


async def _application_error_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    level = logging.ERROR if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR else logging.WARNING
    logger.log(
        level,
        "Request failed: %s",
        exc.message,
        extra={"code": exc.code, "status_code": exc.status_code, "path": request.url.path},
    )
    return _render(request, exc.status_code, exc.code, exc.message, exc.details)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = jsonable_encoder(exc.errors())
    logger.warning("Request validation failed", extra={"path": request.url.path, "errors": errors})
    return _render(
        request,
        status.HTTP_400_BAD_REQUEST,
        "validation_error",
        "Request validation failed.",
        {"errors": errors},
    )


async def _driver_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    # Driver messages can carry hostnames and query fragments.
    logger.error("Document store operation failed", exc_info=exc, extra={"path": request.url.path})
    return _render(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "store_error", "Server Error")


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _status_code_slug(exc.status_code)
    if isinstance(exc.detail, str):
        message, details = exc.detail, None
    else:
        message = _status_phrase(exc.status_code) or "Error"
        details = {"errors": exc.detail} if isinstance(exc.detail, list) else exc.detail
    logger.warning(
        "HTTP exception raised",
        extra={"code": code, "status_code": exc.status_code, "path": request.url.path},
    )
    return _render(request, exc.status_code, code, message, details, headers=exc.headers)


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled application error", extra={"path": request.url.path})
    return _render(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "server_error", "Internal server error.")


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure with the ``ErrorResponse`` envelope."""

    app.add_exception_handler(ApplicationError, _application_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(PyMongoError, _driver_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)


__all__ = [
    "ApplicationError",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "InvalidReorderBatchError",
    "NotFoundError",
    "StoreError",
    "TaskAlreadyCompletedError",
    "ValidationError",
    "XpCreditError",
    "register_exception_handlers",
]
