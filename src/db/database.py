"""Database engine, startup connection check and per-request sessions."""

import logging
import time
from typing import Generator

from fastapi import Request
from sqlalchemy import Engine, StaticPool, create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import Settings
from src.core.exceptions import StoreError
from src.db.schema import Base


def build_engine(settings: Settings) -> Engine:
    """SQLite needs a couple of extra arguments to be shared between request threads (and to stay alive in memory)."""
    if settings.database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in settings.database_url:
            kwargs["poolclass"] = StaticPool
        return create_engine(settings.database_url, echo=settings.sql_echo, **kwargs)
    return create_engine(
        settings.database_url, echo=settings.sql_echo, pool_pre_ping=True
    )


def connect_database(
    engine: Engine,
    logger: logging.Logger,
    attempts: int = 12,
    delay: float = 5.0,
) -> None:
    """
    Wait for the database to accept connections, then make sure all tables exist.

    ---
    The database container usually comes up slower than the API, hence the retry loop.
    """
    for attempt in range(1, attempts + 1):
        try:
            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            break
        except OperationalError as exc:
            logger.error(
                "failed connecting to database (attempt %d/%d): %s",
                attempt,
                attempts,
                exc,
            )
            if attempt < attempts:
                logger.info("retrying in %s seconds", delay)
                time.sleep(delay)
    else:
        raise StoreError("unable to connect to database")

    logger.info("connected to database")
    Base.metadata.create_all(bind=engine)


def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False)


def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
