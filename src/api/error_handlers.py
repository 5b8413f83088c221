"""
Global exception handlers mapping post-layer errors to HTTP responses.

NotFoundError covers both "missing" and "not yours", so the response never
reveals whether a post exists.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.domain.errors import (
    ConflictError,
    GatewayUnavailableError,
    MalformedRowError,
    NotFoundError,
    PostError,
    UnauthenticatedError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: list[tuple[type[PostError], int]] = [
    (UnauthenticatedError, 401),
    (NotFoundError, 404),
    (ConflictError, 409),
    (ValidationFailedError, 422),
    (MalformedRowError, 502),
    (GatewayUnavailableError, 503),
]


def status_for(exc: PostError) -> int:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return 500


def register_error_handlers(app: FastAPI) -> None:
    """Register the post error handler on the FastAPI app."""

    @app.exception_handler(PostError)
    async def post_error_handler(request: Request, exc: PostError) -> JSONResponse:
        code = status_for(exc)
        if code >= 500:
            logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc)
        else:
            logger.info("%s on %s: %s", type(exc).__name__, request.url.path, exc)

        content: dict[str, object] = {"detail": str(exc)}
        headers = None
        if isinstance(exc, ValidationFailedError):
            content["errors"] = [
                {"code": e.code, "message": e.message, "field": e.field} for e in exc.errors
            ]
        if isinstance(exc, UnauthenticatedError):
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(status_code=code, content=content, headers=headers)
