"""Application factory and command line entrypoint."""

import argparse
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import Engine

from src.api.errors import register_exception_handlers
from src.api.routes import router
from src.core.config import Settings
from src.core.log import child_logger, configure_logging
from src.db.database import build_engine, connect_database, session_factory


def create_app(
    settings: Optional[Settings] = None,
    logger: Optional[logging.Logger] = None,
    engine: Optional[Engine] = None,
) -> FastAPI:
    """Wire settings, logger and database together. Everything a request needs ends up on `app.state`."""
    settings = settings or Settings.from_env()
    logger = logger or configure_logging(settings.log_level)
    engine = engine or build_engine(settings)

    connect_database(
        engine,
        child_logger(logger, "database"),
        attempts=settings.db_connect_attempts,
        delay=settings.db_connect_delay,
    )

    app = FastAPI(
        title="Tic Tac Toe Backend",
        description="Play tic-tac-toe against a computer that picks its moves at random.",
        version="0.1.0",
        openapi_tags=[
            {"name": "Game", "description": "Game creation, moves, and listing endpoints."},
        ],
    )
    app.state.settings = settings
    app.state.logger = logger
    app.state.session_factory = session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app, child_logger(logger, "api"))
    app.include_router(router)

    @app.get("/", tags=["General"])
    def health_check() -> dict[str, str]:
        """Health Check endpoint for backend"""
        return {"message": "Healthy"}

    return app


def parse_address(address: str) -> tuple[str, int]:
    """':8080' -> ('0.0.0.0', 8080), 'localhost:9000' -> ('localhost', 9000)"""
    host, _, port = address.rpartition(":")
    if not port.isdigit():
        raise argparse.ArgumentTypeError(f"invalid listen address: {address!r}")
    return host or "0.0.0.0", int(port)


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Tic Tac Toe REST API")
    parser.add_argument(
        "--http.addr",
        dest="http_addr",
        type=parse_address,
        default=":8080",
        help="http listen address (default: :8080)",
    )
    args = parser.parse_args(argv)
    host, port = args.http_addr

    app = create_app()
    app.state.logger.info("listening on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
