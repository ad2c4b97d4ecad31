"""Unit tests for src/db/database.py"""

import logging
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError

from src.core.config import Settings
from src.core.exceptions import StoreError
from src.db.database import build_engine, connect_database, session_factory


def test_connect_creates_tables(test_logger: logging.Logger) -> None:
    engine = build_engine(Settings(database_url="sqlite:///:memory:"))
    connect_database(engine, test_logger, attempts=1, delay=0)

    assert "games" in inspect(engine).get_table_names()
    with session_factory(engine)() as session:
        assert session.bind is engine


def test_connect_retries_until_database_is_up(
    test_logger: logging.Logger, caplog: pytest.LogCaptureFixture
) -> None:
    """
    Two failed pings, then the database answers.

    NOTE creating the tables opens connections of its own, so only failures and waits are counted.
    """
    engine = build_engine(Settings(database_url="sqlite:///:memory:"))
    real_connect = engine.connect
    failure = OperationalError("SELECT 1", {}, Exception("connection refused"))
    attempts = [failure, failure]

    def flaky_connect() -> object:
        if attempts:
            raise attempts.pop()
        return real_connect()

    with (
        patch.object(engine, "connect", side_effect=flaky_connect),
        patch("src.db.database.time.sleep") as sleep,
    ):
        connect_database(engine, test_logger, attempts=5, delay=2)

    assert attempts == []
    assert caplog.text.count("failed connecting to database") == 2
    assert "games" in inspect(engine).get_table_names()
    assert sleep.call_count == 2
    sleep.assert_called_with(2)


def test_connect_gives_up(
    test_logger: logging.Logger, caplog: pytest.LogCaptureFixture
) -> None:
    engine = MagicMock()
    engine.connect.side_effect = OperationalError(
        "SELECT 1", {}, Exception("connection refused")
    )

    with patch("src.db.database.time.sleep") as sleep, pytest.raises(StoreError):
        connect_database(engine, test_logger, attempts=3, delay=1)

    assert engine.connect.call_count == 3
    # no pointless wait after the last attempt
    assert sleep.call_count == 2
    assert "attempt 3/3" in caplog.text


def test_sqlite_engine_is_shareable_between_threads() -> None:
    engine = build_engine(Settings(database_url="sqlite:///:memory:"))
    assert engine.dialect.name == "sqlite"
    assert engine.pool.__class__.__name__ == "StaticPool"
