"""Auth Boundary: the register/login protocol.

Composes the Credential Store and the token service. Registration never
issues a token; login is a separate step. Login failures carry no hint of
their cause, and internal faults are reported as STORAGE_FAILURE with a
generic message while the detail goes to the log.
"""

from __future__ import annotations

import logging

from taskmgmt_shared.auth_models import LoginResult, RegisterResult
from taskmgmt_shared.models import ErrorKind
from taskmgmt_shared.settings import ServiceSettings

from taskmgmt_auth.credentials import CredentialStore
from taskmgmt_auth.jwt import issue_token

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "Invalid email or password"
INTERNAL_FAILURE_MESSAGE = "An unexpected error occurred."


class AuthService:
    def __init__(self, credentials: CredentialStore, settings: ServiceSettings) -> None:
        self._credentials = credentials
        self._settings = settings

    async def register(self, email: str, password: str) -> RegisterResult:
        """Create an account. DUPLICATE_EMAIL and WEAK_PASSWORD pass through with detail."""
        created = await self._credentials.create_user(email, password)
        if not created.success:
            return RegisterResult.failure(created.error, created.message, errors=created.errors)
        return RegisterResult(success=True, message="Registration succeeded", user_id=created.user_id)

    async def login(self, email: str, password: str) -> LoginResult:
        """Verify credentials and issue a bearer token."""
        try:
            verified = await self._credentials.verify_password(email, password)
            if verified.error == ErrorKind.STORAGE_FAILURE:
                return LoginResult.failure(ErrorKind.STORAGE_FAILURE, INTERNAL_FAILURE_MESSAGE)
            if not verified.success:
                logger.info("Login rejected")
                return LoginResult.failure(ErrorKind.AUTHENTICATION_FAILURE, LOGIN_FAILED_MESSAGE)

            issued = issue_token(verified.user_id, verified.email, self._settings)
        except Exception:
            logger.exception("Login failed with an internal error")
            return LoginResult.failure(ErrorKind.STORAGE_FAILURE, INTERNAL_FAILURE_MESSAGE)

        logger.info(f"Issued token for user {verified.user_id}")
        return LoginResult(
            success=True, message="Login succeeded", token=issued.token, expires_at=issued.expires_at
        )
