"""Test fixtures for authentication: settings, a fresh database, the stores."""

from __future__ import annotations

import pytest
import pytest_asyncio
from taskmgmt_auth.credentials import CredentialStore
from taskmgmt_auth.service import AuthService
from taskmgmt_data_access.client import create_engine, create_schema
from taskmgmt_shared.settings import ServiceSettings


@pytest.fixture
def settings() -> ServiceSettings:
    return ServiceSettings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret="test-signing-secret-that-is-at-least-32-bytes",
        jwt_issuer="taskmanagement-api",
        jwt_audience="taskmanagement-clients",
        bcrypt_rounds=4,
    )


@pytest_asyncio.fixture
async def engine(settings):
    engine = create_engine(settings.database_url)
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def credentials(engine, settings) -> CredentialStore:
    return CredentialStore(engine, bcrypt_rounds=settings.bcrypt_rounds)


@pytest.fixture
def auth_service(credentials, settings) -> AuthService:
    return AuthService(credentials, settings)
