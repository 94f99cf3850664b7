"""Logging configuration helpers."""

import logging

LOGGER_NAME = "freshfocus"
LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach one stream handler to the package logger; safe to call twice."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
