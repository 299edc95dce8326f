"""Logging configuration for the review article engine."""

from __future__ import annotations

import logging
import os
import sys


def setup_logging(
    level: int | None = None,
    module_name: str = "article_engine",
) -> logging.Logger:
    """Configure and return a logger with consistent formatting.

    Args:
        level: Logging level. Defaults to LOG_LEVEL from the environment,
               or INFO.
        module_name: Name for the logger instance.

    Returns:
        Configured logger.
    """
    logger = logging.getLogger(module_name)

    if logger.handlers:
        return logger

    if level is None:
        level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)

    return logger
