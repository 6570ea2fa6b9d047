"""
Logging setup shared by the next-value modules.
"""

import logging
import sys
from pathlib import Path
from typing import List

from .config import settings

FORMATTER = logging.Formatter(
    fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)


def _build_handlers() -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if settings.LOG_FILE:
        log_path = Path(settings.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    for handler in handlers:
        handler.setLevel(settings.LOG_LEVEL)
        handler.setFormatter(FORMATTER)
    return handlers


def setup_logger(name: str) -> logging.Logger:
    """
    Get a module logger writing to stdout (and LOG_FILE when set).

    Handlers are attached once per logger name.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(settings.LOG_LEVEL)
        for handler in _build_handlers():
            logger.addHandler(handler)

    return logger


def log_error(logger: logging.Logger, error: Exception, context: str = "") -> None:
    """
    Log an error, prefixed with context and the tag/field it concerns.

    Errors raised by generators carry `tag` and `field` attributes; they are
    appended when present. The traceback is included in DEBUG mode.
    """
    parts = [f"{type(error).__name__}: {error}"]
    for attr in ("tag", "field"):
        value = getattr(error, attr, None)
        if value is not None:
            parts.append(f"{attr}={value}")

    message = " ".join(parts)
    if context:
        message = f"{context}: {message}"

    logger.error(message, exc_info=error if settings.DEBUG else None)
