"""
Error kinds shared by repositories and services, and their HTTP rendering.

Every failure reaches the client as JSON `{"message": "..."}`.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(ApiError):
    """Client payload is malformed; raised before the repository is touched."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ApiError):
    """Targeted row is absent (empty lookup or zero affected rows)."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, resource_id: Any):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"Not found {resource} with id {resource_id}.")


class InfrastructureError(ApiError):
    """Store unreachable, constraint violated, or another driver failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def with_fallback(self, fallback: str) -> "InfrastructureError":
        if not self.message:
            self.message = fallback
        return self


class AuthError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str, *, status_code: int = status.HTTP_401_UNAUTHORIZED):
        self.status_code = status_code
        super().__init__(message)


def _message_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if isinstance(exc, InfrastructureError):
        logger.warning(
            "infrastructure_error method=%s path=%s message=%s",
            request.method,
            request.url.path,
            exc.message,
        )
    return _message_response(exc.status_code, exc.message)


async def _http_error_handler(_: Request, exc: HTTPException) -> JSONResponse:
    return _message_response(exc.status_code, str(exc.detail))


async def _request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    # Surface the first pydantic error in the same shape as service-level validation.
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request."
    return _message_response(status.HTTP_400_BAD_REQUEST, message)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled_error method=%s path=%s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return _message_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Some error occurred.")


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(HTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
