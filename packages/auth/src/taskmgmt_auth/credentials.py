"""Credential Store: user records with bcrypt-hashed passwords.

Emails are stored lower-cased, which makes uniqueness case-insensitive at
the database level. Only the bcrypt hash of a password is ever persisted.

Hashing is CPU-bound, so it runs in a worker thread via asyncio.to_thread
and never stalls the event loop.

verify_password answers an unknown email and a wrong password with the same
result, and spends the same bcrypt work on both, so callers cannot use it to
probe which emails are registered.
"""

from __future__ import annotations

import asyncio
import logging

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from taskmgmt_data_access.tables import users
from taskmgmt_shared.auth_models import CreateUserResult, VerifyCredentialsResult
from taskmgmt_shared.models import ErrorKind

from taskmgmt_auth.passwords import check_password, check_password_policy, hash_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
DUPLICATE_EMAIL_MESSAGE = "Email is already registered"
STORAGE_FAILURE_MESSAGE = "Credential storage is unavailable"


def normalize_email(email: str) -> str:
    return email.strip().lower()


class CredentialStore:
    """Create users and verify their passwords."""

    def __init__(self, engine: AsyncEngine, bcrypt_rounds: int = 12) -> None:
        self._engine = engine
        self._rounds = bcrypt_rounds
        # Compared against when the email is unknown, to keep timing uniform.
        self._dummy_hash = hash_password("dummy-Password-0", bcrypt_rounds)

    async def create_user(self, email: str, raw_password: str) -> CreateUserResult:
        """Register a new identity.

        Fails with WEAK_PASSWORD (listing each unmet rule) or DUPLICATE_EMAIL.
        """
        problems = check_password_policy(raw_password)
        if problems:
            return CreateUserResult.failure(
                ErrorKind.WEAK_PASSWORD, "Password does not meet policy", errors=problems
            )

        email = normalize_email(email)
        password_hash = await asyncio.to_thread(hash_password, raw_password, self._rounds)
        try:
            async with self._engine.begin() as conn:
                existing = await conn.execute(select(users.c.id).where(users.c.email == email))
                if existing.fetchone() is not None:
                    return CreateUserResult.failure(
                        ErrorKind.DUPLICATE_EMAIL,
                        DUPLICATE_EMAIL_MESSAGE,
                        errors=[DUPLICATE_EMAIL_MESSAGE],
                    )
                result = await conn.execute(
                    insert(users)
                    .values(email=email, password_hash=password_hash)
                    .returning(users.c.id)
                )
                user_id = result.scalar()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email.
            return CreateUserResult.failure(
                ErrorKind.DUPLICATE_EMAIL, DUPLICATE_EMAIL_MESSAGE, errors=[DUPLICATE_EMAIL_MESSAGE]
            )
        except SQLAlchemyError:
            logger.exception("create_user failed")
            return CreateUserResult.failure(ErrorKind.STORAGE_FAILURE, STORAGE_FAILURE_MESSAGE)

        logger.info(f"Registered user {user_id}")
        return CreateUserResult(success=True, message="User created", user_id=user_id)

    async def verify_password(self, email: str, raw_password: str) -> VerifyCredentialsResult:
        """Check credentials, returning the user id on success.

        Unknown email and wrong password both return INVALID_CREDENTIALS with
        the same message.
        """
        email = normalize_email(email)
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(
                    select(users.c.id, users.c.password_hash).where(users.c.email == email)
                )
                row = result.fetchone()
        except SQLAlchemyError:
            logger.exception("verify_password failed")
            return VerifyCredentialsResult.failure(ErrorKind.STORAGE_FAILURE, STORAGE_FAILURE_MESSAGE)

        stored_hash = row.password_hash if row is not None else self._dummy_hash
        matches = await asyncio.to_thread(check_password, raw_password, stored_hash)

        if row is None or not matches:
            return VerifyCredentialsResult.failure(
                ErrorKind.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE
            )
        return VerifyCredentialsResult(
            success=True, message="Credentials verified", user_id=row.id, email=email
        )
