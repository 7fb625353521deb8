"""Tests for the engine factory."""

import pytest
from taskmgmt_data_access.client import create_engine, normalize_url


class TestNormalizeUrl:
    def test_postgresql_scheme_uses_asyncpg(self) -> None:
        assert (
            normalize_url("postgresql://u:p@db:5432/tasks")
            == "postgresql+asyncpg://u:p@db:5432/tasks"
        )

    def test_postgres_shorthand_uses_asyncpg(self) -> None:
        assert normalize_url("postgres://u:p@db/tasks") == "postgresql+asyncpg://u:p@db/tasks"

    def test_explicit_driver_untouched(self) -> None:
        url = "sqlite+aiosqlite:///./tasks.db"
        assert normalize_url(url) == url


class TestCreateEngine:
    def test_empty_url_raises(self) -> None:
        with pytest.raises(RuntimeError):
            create_engine("")

    def test_sqlite_memory_engine(self) -> None:
        engine = create_engine("sqlite+aiosqlite:///:memory:")
        assert engine.dialect.name == "sqlite"
        assert engine.pool.__class__.__name__ == "StaticPool"
