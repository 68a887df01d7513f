"""Logging setup shared by the app, the blueprints and the AI services."""

import logging
import sys

from config import Config


def setup_logging(level=None, module_name="smart_blog"):
    """Configure and return a logger with consistent formatting.

    Level defaults to LOG_LEVEL from the environment. Calling it twice for the
    same name returns the already configured logger.
    """
    logger = logging.getLogger(module_name)

    if logger.handlers:
        return logger

    level = level or Config.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(handler)

    return logger
