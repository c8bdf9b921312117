"""
Authentication and rater identity middleware.
"""

import logging
import secrets
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from movie_api.api.config import get_auth_token
from movie_api.api.errors import UnauthorizedError, error_response

logger = logging.getLogger(__name__)

HEALTH_PATH = "/healthz"
RATINGS_SEGMENT = "/ratings"
RATER_ID_HEADER = "X-Rater-Id"


def is_auth_exempt(method: str, path: str) -> bool:
    """
    Whether a request skips bearer authentication.

    Any path containing the ratings segment is exempt, which includes
    rating submission.
    """
    return method == "GET" or path == HEALTH_PATH or RATINGS_SEGMENT in path


class BearerAuthMiddleware(BaseHTTPMiddleware):
    """Require 'Authorization: Bearer <token>' on mutating endpoints."""

    def __init__(self, app, token_provider: Callable[[], str] = get_auth_token):
        super().__init__(app)
        self.token_provider = token_provider

    async def dispatch(self, request: Request, call_next):
        if is_auth_exempt(request.method, request.url.path):
            return await call_next(request)

        auth_header = request.headers.get("Authorization")
        if not auth_header:
            return error_response(UnauthorizedError("Missing authorization header"))

        expected = self.token_provider()
        parts = auth_header.split(" ")
        if (
            not expected
            or len(parts) != 2
            or parts[0] != "Bearer"
            or not secrets.compare_digest(parts[1].encode(), expected.encode())
        ):
            logger.info("Rejected %s %s: invalid token", request.method, request.url.path)
            return error_response(UnauthorizedError("Invalid authorization token"))

        return await call_next(request)


class RaterIdMiddleware(BaseHTTPMiddleware):
    """Require the X-Rater-Id header on rating submissions."""

    async def dispatch(self, request: Request, call_next):
        if request.method == "POST" and RATINGS_SEGMENT in request.url.path:
            rater_id = request.headers.get(RATER_ID_HEADER)
            if not rater_id:
                return error_response(UnauthorizedError(f"Missing {RATER_ID_HEADER} header"))
            request.state.rater_id = rater_id
        return await call_next(request)
