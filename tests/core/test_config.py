"""Unit tests for src/core/config.py"""

import pytest

from src.core.config import DEFAULT_DATABASE_URL, Settings
from src.core.exceptions import ConfigError

ENV_VARS = [
    "SQL_CONN",
    "HOST_ADDR",
    "LOG_LEVEL",
    "SQL_ECHO",
    "DB_CONNECT_ATTEMPTS",
    "DB_CONNECT_DELAY",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """No .env file and no leftovers from the shell running the tests."""
    monkeypatch.setattr("src.core.config.load_dotenv", lambda: False)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = Settings.from_env()
    assert settings == Settings()
    assert settings.database_url == DEFAULT_DATABASE_URL


def test_values_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SQL_CONN", "postgresql://user:pw@db:5432/games")
    monkeypatch.setenv("HOST_ADDR", "http://tictactoe:8080/")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("SQL_ECHO", "True")
    monkeypatch.setenv("DB_CONNECT_ATTEMPTS", "3")
    monkeypatch.setenv("DB_CONNECT_DELAY", "0.5")

    settings = Settings.from_env()
    assert settings.database_url == "postgresql://user:pw@db:5432/games"
    # trailing slash is dropped so that locations can be appended directly
    assert settings.host_address == "http://tictactoe:8080"
    assert settings.log_level == "DEBUG"
    assert settings.sql_echo is True
    assert settings.db_connect_attempts == 3
    assert settings.db_connect_delay == 0.5


@pytest.mark.parametrize(
    "name, value",
    [
        ("HOST_ADDR", "not a url"),
        ("HOST_ADDR", "localhost"),
        ("LOG_LEVEL", "chatty"),
        ("DB_CONNECT_ATTEMPTS", "many"),
        ("DB_CONNECT_ATTEMPTS", "0"),
        ("DB_CONNECT_DELAY", "-1"),
        ("SQL_CONN", ""),
        ("SQL_CONN", "not a url"),
    ],
)
def test_invalid_values(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigError):
        Settings.from_env()
