"""
API error taxonomy and the exception handlers that render it.

Every error leaves the API as ``{"msg": "<message>"}`` with the status
code carried by the exception.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base error with an HTTP status and a client-facing message."""

    status_code: int = 400

    def __init__(self, msg: str, status_code: int | None = None) -> None:
        super().__init__(msg)
        self.msg = msg
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApiError):
    status_code = 422


class AuthError(ApiError):
    pass


class Unauthorized(AuthError):
    status_code = 401

    def __init__(self, msg: str = "access denied") -> None:
        super().__init__(msg)


class InvalidToken(AuthError):
    status_code = 400

    def __init__(self, msg: str = "invalid token") -> None:
        super().__init__(msg)


class NotFoundError(ApiError):
    status_code = 400


class PersistenceError(ApiError):
    """Save/delete failures; reported as 400 for client compatibility."""

    status_code = 400


class ServerError(ApiError):
    status_code = 500

    def __init__(self, msg: str = "server error, try again later") -> None:
        super().__init__(msg)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the ``{"msg": ...}`` renderers to the app."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"msg": exc.msg},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def body_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"msg": "invalid request body"},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "[%s] Unhandled error on %s %s",
            getattr(request.state, "request_id", "-"), request.method, request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={"msg": ServerError().msg},
        )
