"""Logging setup for the proxy."""

from __future__ import annotations

import logging

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stream handler to the package logger."""

    logger = logging.getLogger("strava_proxy")
    logger.setLevel(level.upper())

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    # avoid duplicate handlers in reload environments
    logger.handlers = [handler]
    logger.propagate = False
    return logger


__all__ = ["LOG_FORMAT", "configure_logging"]
