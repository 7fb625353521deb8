"""Async database engine factory for the Task Store and Credential Store.

Builds a SQLAlchemy async engine from the configured database URL. PostgreSQL
runs on asyncpg; SQLite runs on aiosqlite for local development and tests.

The engine is created once at startup from ServiceSettings and handed to the
stores that need it; there is no module-level engine singleton.

Usage:
    from taskmgmt_data_access.client import create_engine

    engine = create_engine(settings.database_url)
    async with engine.begin() as conn:
        result = await conn.execute(select(tasks))
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from taskmgmt_data_access.tables import metadata


def normalize_url(db_url: str) -> str:
    """Ensure PostgreSQL URLs use the asyncpg driver."""
    if db_url.startswith("postgresql://"):
        return db_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if db_url.startswith("postgres://"):
        return db_url.replace("postgres://", "postgresql+asyncpg://", 1)
    return db_url


def create_engine(db_url: str) -> AsyncEngine:
    """Create an async engine for `db_url`.

    In-memory SQLite databases live only as long as their connection, so they
    are pinned to a single shared connection with StaticPool.
    """
    if not db_url:
        raise RuntimeError("Database URL is empty.")

    db_url = normalize_url(db_url)

    if db_url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in db_url or db_url.endswith("://"):
            kwargs["poolclass"] = StaticPool
        return create_async_engine(db_url, **kwargs)

    return create_async_engine(
        db_url,
        pool_size=10,
        max_overflow=0,
        pool_pre_ping=True,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create the users and tasks tables if they do not exist."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
