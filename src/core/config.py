"""Application settings, read from the environment (and a `.env` file when present)."""

import os
from dataclasses import dataclass
from typing import Callable, Self
from urllib.parse import urlparse

from dotenv import load_dotenv
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from src.core.exceptions import ConfigError

DEFAULT_DATABASE_URL = "sqlite:///./tictactoe.db"
DEFAULT_HOST_ADDRESS = "http://localhost:8080"
TRUTHY = {"1", "true", "yes", "on"}
Number = int | float


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    host_address: str = DEFAULT_HOST_ADDRESS
    log_level: str = "INFO"
    sql_echo: bool = False
    db_connect_attempts: int = 12
    db_connect_delay: float = 5.0

    @classmethod
    def from_env(cls) -> Self:
        """Build settings from environment variables. Raises ConfigError on values that cannot be used."""
        load_dotenv()

        host_address = os.getenv("HOST_ADDR", DEFAULT_HOST_ADDRESS).rstrip("/")
        parsed = urlparse(host_address)
        if not (parsed.scheme and parsed.netloc):
            raise ConfigError(f"Invalid HOST_ADDR: {host_address!r}")

        database_url = os.getenv("SQL_CONN", DEFAULT_DATABASE_URL)
        try:
            make_url(database_url)
        except ArgumentError as exc:
            raise ConfigError(f"Invalid SQL_CONN: {database_url!r}") from exc

        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        if log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ConfigError(f"Invalid LOG_LEVEL: {log_level!r}")

        return cls(
            database_url=database_url,
            host_address=host_address,
            log_level=log_level,
            sql_echo=os.getenv("SQL_ECHO", "false").lower() in TRUTHY,
            db_connect_attempts=_positive_number("DB_CONNECT_ATTEMPTS", "12", int),
            db_connect_delay=_positive_number("DB_CONNECT_DELAY", "5", float),
        )


def _positive_number(
    name: str, default: str, cast: Callable[[str], Number]
) -> Number:
    raw = os.getenv(name, default)
    try:
        value = cast(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value
