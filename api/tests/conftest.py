"""Test fixtures for the HTTP surface.

The app is built with create_app() over a shared in-memory SQLite engine and
driven through httpx.AsyncClient + ASGITransport, so requests go through the
full FastAPI stack (dependencies, validation, exception handling) without a
network socket.
"""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio
from taskmgmt_api.app import create_app
from taskmgmt_data_access.client import create_engine, create_schema
from taskmgmt_shared.settings import ServiceSettings


@pytest.fixture
def settings() -> ServiceSettings:
    return ServiceSettings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret="api-test-signing-secret-at-least-32-bytes",
        bcrypt_rounds=4,
    )


@pytest_asyncio.fixture
async def engine(settings):
    engine = create_engine(settings.database_url)
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def app(settings, engine):
    return create_app(settings, engine=engine)


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def login_as(client):
    """Register (if needed) and log in; returns Authorization headers."""

    async def _login_as(email: str, password: str = "Secret123") -> dict[str, str]:
        await client.post("/auth/register", json={"email": email, "password": password})
        response = await client.post("/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login_as
