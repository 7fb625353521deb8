"""Pydantic base models shared across components.

These serve as the contract types that flow between the HTTP boundary and the
auth and task stores. Expected business failures (unknown task, bad password,
expired token) are returned as values rather than raised, so the boundary can
map each failure kind to a transport response without catching exceptions.
"""

from enum import StrEnum

from pydantic import BaseModel


class ErrorKind(StrEnum):
    """Named failure kinds carried by a failed PlatformResult."""

    VALIDATION_FAILURE = "validation_failure"
    AUTHENTICATION_FAILURE = "authentication_failure"
    NOT_FOUND = "not_found"
    STORAGE_FAILURE = "storage_failure"
    DUPLICATE_EMAIL = "duplicate_email"
    WEAK_PASSWORD = "weak_password"
    INVALID_CREDENTIALS = "invalid_credentials"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_INVALID = "token_invalid"


class PlatformResult(BaseModel):
    """Standard result envelope returned by store and boundary operations.

    Every operation returns this (or a subclass) so callers have a consistent
    interface for checking success/failure. `error` is set only when
    `success` is False.
    """

    success: bool
    message: str
    error: ErrorKind | None = None

    @classmethod
    def failure(cls, error: ErrorKind, message: str, **fields):
        """Build a failed result of this type."""
        return cls(success=False, message=message, error=error, **fields)
