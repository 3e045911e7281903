"""
Logging infrastructure.

Provides logging utilities for the dispatch layer.
"""
import logging
from typing import Union

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance.

    Args:
        name: Logger name (usually module name)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


def configure_logging(level: Union[str, int] = "INFO") -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or numeric level

    Returns:
        The "push_dispatch" logger
    """
    logger = get_logger("push_dispatch")
    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level}")
        level = numeric
    logger.setLevel(level)
    return logger
