"""Logging setup. Components never grab a global logger: they get one handed to them."""

import logging

LOGGER_NAME = "tictactoe"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Configure the root handler once and return the application's top-level logger."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    return logger


def child_logger(parent: logging.Logger, component: str) -> logging.Logger:
    """ex. child_logger(app_logger, "service") -> logger named 'tictactoe.service'"""
    return parent.getChild(component)
