"""Test fixtures for the Task Store.

Most tests run against a real in-memory SQLite database (aiosqlite) seeded
with two users, so ownership scoping is exercised by actual SQL. Storage
failure paths use FailingEngine, which mimics the AsyncEngine.begin()
context manager and raises on every execute().
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy import insert
from sqlalchemy.exc import OperationalError
from taskmgmt_data_access.client import create_engine, create_schema
from taskmgmt_data_access.tables import users
from taskmgmt_data_access.tasks import TaskStore

ALICE_ID = 1
BOB_ID = 2
NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=UTC)


# ============================================================================
# Failing SQLAlchemy async engine/connection
# ============================================================================


class FailingConnection:
    """Mimics AsyncConnection; every execute() raises OperationalError."""

    def __init__(self) -> None:
        self.executed: list[Any] = []

    async def execute(self, stmt: Any, parameters: Any = None) -> Any:
        self.executed.append(stmt)
        raise OperationalError(str(stmt), {}, ConnectionRefusedError("db down"))


class FailingEngine:
    """Mimics AsyncEngine with begin() context manager."""

    def __init__(self) -> None:
        self.connection = FailingConnection()

    def begin(self) -> FailingEngine:
        return self

    async def __aenter__(self) -> FailingConnection:
        return self.connection

    async def __aexit__(self, *args: Any) -> None:
        pass


# ============================================================================
# Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def engine():
    """In-memory database with the schema and two users (Alice, Bob)."""
    engine = create_engine("sqlite+aiosqlite:///:memory:")
    await create_schema(engine)
    async with engine.begin() as conn:
        await conn.execute(
            insert(users),
            [
                {"id": ALICE_ID, "email": "alice@example.com", "password_hash": "unused"},
                {"id": BOB_ID, "email": "bob@example.com", "password_hash": "unused"},
            ],
        )
    yield engine
    await engine.dispose()


@pytest.fixture
def store(engine) -> TaskStore:
    """Task Store with a fixed clock."""
    return TaskStore(engine, clock=lambda: NOW)


@pytest.fixture
def failing_store() -> TaskStore:
    return TaskStore(FailingEngine(), clock=lambda: NOW)
