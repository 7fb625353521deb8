"""Tests for ServiceSettings."""

import pytest
from pydantic import ValidationError
from taskmgmt_shared.settings import DEFAULT_AUDIENCE, DEFAULT_ISSUER, ServiceSettings

ENV = {
    "TASKMGMT_DATABASE_URL": "postgresql://u:p@db:5432/tasks",
    "TASKMGMT_JWT_SECRET": "s" * 32,
}


class TestFromEnv:
    def test_defaults(self) -> None:
        settings = ServiceSettings.from_env(ENV)

        assert settings.database_url == "postgresql://u:p@db:5432/tasks"
        assert settings.jwt_issuer == DEFAULT_ISSUER
        assert settings.jwt_audience == DEFAULT_AUDIENCE
        assert settings.jwt_algorithm == "HS256"
        assert settings.token_ttl_seconds == 3600
        assert settings.bcrypt_rounds == 12

    def test_overrides(self) -> None:
        settings = ServiceSettings.from_env(
            {
                **ENV,
                "TASKMGMT_JWT_ISSUER": "issuer-x",
                "TASKMGMT_JWT_AUDIENCE": "aud-y",
                "TASKMGMT_TOKEN_TTL_SECONDS": "600",
                "TASKMGMT_BCRYPT_ROUNDS": "10",
            }
        )
        assert settings.jwt_issuer == "issuer-x"
        assert settings.jwt_audience == "aud-y"
        assert settings.token_ttl_seconds == 600
        assert settings.bcrypt_rounds == 10

    def test_missing_database_url(self) -> None:
        with pytest.raises(RuntimeError, match="TASKMGMT_DATABASE_URL"):
            ServiceSettings.from_env({"TASKMGMT_JWT_SECRET": "s" * 32})

    def test_missing_secret(self) -> None:
        with pytest.raises(RuntimeError, match="TASKMGMT_JWT_SECRET"):
            ServiceSettings.from_env({"TASKMGMT_DATABASE_URL": "sqlite+aiosqlite://"})

    def test_reads_process_environment(self, monkeypatch) -> None:
        for key, value in ENV.items():
            monkeypatch.setenv(key, value)
        assert ServiceSettings.from_env().jwt_secret == "s" * 32


class TestImmutability:
    def test_frozen(self) -> None:
        settings = ServiceSettings.from_env(ENV)
        with pytest.raises(ValidationError):
            settings.jwt_secret = "changed"

    def test_ttl_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ServiceSettings(database_url="x", jwt_secret="y", token_ttl_seconds=0)
