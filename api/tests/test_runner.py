"""Tests for the runner entrypoint's configuration handling."""

import pytest
from taskmgmt_api import runner

BASE_ENV = {
    "TASKMGMT_DATABASE_URL": "sqlite+aiosqlite:///:memory:",
    "TASKMGMT_JWT_SECRET": "runner-test-secret-at-least-32-bytes",
}


def _set_env(monkeypatch, env: dict[str, str]) -> None:
    for name in ("TASKMGMT_TOKEN_TTL_SECONDS", "TASKMGMT_BCRYPT_ROUNDS"):
        monkeypatch.delenv(name, raising=False)
    for name, value in env.items():
        monkeypatch.setenv(name, value)


@pytest.fixture
def served(monkeypatch) -> list:
    calls: list = []
    monkeypatch.setattr(runner.uvicorn, "run", lambda *args, **kwargs: calls.append(kwargs))
    return calls


class TestMain:
    @pytest.mark.parametrize(
        "override",
        [
            {"TASKMGMT_TOKEN_TTL_SECONDS": "an-hour"},
            {"TASKMGMT_BCRYPT_ROUNDS": "twelve"},
            {"TASKMGMT_BCRYPT_ROUNDS": "99"},
            {"TASKMGMT_TOKEN_TTL_SECONDS": "0"},
        ],
    )
    def test_bad_setting_exits_with_status_1(self, monkeypatch, served, caplog, override) -> None:
        _set_env(monkeypatch, {**BASE_ENV, **override})

        with pytest.raises(SystemExit) as exc_info:
            runner.main()

        assert exc_info.value.code == 1
        assert served == []
        assert any(record.levelname == "ERROR" for record in caplog.records)

    def test_missing_secret_exits_with_status_1(self, monkeypatch, served) -> None:
        monkeypatch.setenv("TASKMGMT_DATABASE_URL", BASE_ENV["TASKMGMT_DATABASE_URL"])
        monkeypatch.delenv("TASKMGMT_JWT_SECRET", raising=False)

        with pytest.raises(SystemExit) as exc_info:
            runner.main()

        assert exc_info.value.code == 1
        assert served == []

    def test_valid_settings_start_server(self, monkeypatch, served) -> None:
        _set_env(monkeypatch, BASE_ENV)
        monkeypatch.setenv("PORT", "8123")

        runner.main()

        assert len(served) == 1
        assert served[0]["port"] == 8123
