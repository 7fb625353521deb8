"""Translate result failures and unhandled exceptions into HTTP responses.

Response bodies only ever carry the public message for a failure kind; the
detail of storage and unexpected errors stays in the server log.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from taskmgmt_shared.models import ErrorKind, PlatformResult

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred."
NOT_AUTHENTICATED_MESSAGE = "Not authenticated"

ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION_FAILURE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.DUPLICATE_EMAIL: status.HTTP_400_BAD_REQUEST,
    ErrorKind.WEAK_PASSWORD: status.HTTP_400_BAD_REQUEST,
    ErrorKind.AUTHENTICATION_FAILURE: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.TOKEN_INVALID: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.STORAGE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def unauthorized() -> HTTPException:
    """The single 401 used for every authentication failure."""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=NOT_AUTHENTICATED_MESSAGE,
        headers={"WWW-Authenticate": "Bearer"},
    )


def http_error(result: PlatformResult) -> HTTPException:
    """Build the HTTPException for a failed result."""
    code = ERROR_STATUS.get(result.error, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if code == status.HTTP_401_UNAUTHORIZED:
        return unauthorized()
    if code == status.HTTP_500_INTERNAL_SERVER_ERROR:
        return HTTPException(status_code=code, detail=GENERIC_ERROR_MESSAGE)
    return HTTPException(status_code=code, detail=result.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request-shape errors as 400 with per-field detail."""
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"][1:]) or str(error["loc"][0]),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": errors},
    )


async def unhandled_error_middleware(request: Request, call_next):
    """Catch anything that escaped the routes and answer with a generic 500."""
    try:
        return await call_next(request)
    except Exception:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": GENERIC_ERROR_MESSAGE},
        )
