"""Logging helpers for the engine."""

from __future__ import annotations

import logging
from logging import Logger

DEFAULT_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
DEFAULT_DATEFMT = "%H:%M:%S"


def setup_logging(level: int | str | None = None) -> Logger:
    """Configure the root logger and return the package logger.

    When ``level`` is omitted the level comes from ``DOGMA_LOG_LEVEL``.
    """
    if level is None:
        from .config import EngineSettings

        level = EngineSettings.from_env().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, format=DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT)
    logger = logging.getLogger("dogma")
    logger.setLevel(level)
    logger.debug("Logging initialized.")
    return logger


__all__ = ["setup_logging", "DEFAULT_FORMAT", "DEFAULT_DATEFMT"]
