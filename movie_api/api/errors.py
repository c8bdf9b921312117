"""
API error types and the exception handlers that render them.

Every error response has the body {"code": ..., "message": ...}.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors returned to API clients."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(ApiError):
    """Malformed or invalid input."""

    status_code = 422
    code = "BAD_REQUEST"


class ConflictError(ApiError):
    """Duplicate movie title. Reported as 400, not 409."""

    status_code = 400
    code = "BAD_REQUEST"


class UnauthorizedError(ApiError):
    """Missing or invalid credentials."""

    status_code = 401
    code = "UNAUTHORIZED"


class NotFoundError(ApiError):
    """Unknown movie."""

    status_code = 404
    code = "NOT_FOUND"


class InternalError(ApiError):
    """Persistence or unexpected server failure."""

    status_code = 500
    code = "INTERNAL_ERROR"


def error_response(error: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"code": error.code, "message": error.message},
    )


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return error_response(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    return error_response(BadRequestError(f"Invalid request body: {details}"))


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error while handling %s %s", request.method, request.url.path)
    return error_response(InternalError("Internal server error"))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error while handling %s %s", request.method, request.url.path)
    return error_response(InternalError("Internal server error"))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the API error handlers to an application."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
