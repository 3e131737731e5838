"""Logging configuration for the tabletop demo."""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(
    level: str = "INFO",
    name: str = "tabletop",
    fmt: Optional[str] = None,
) -> logging.Logger:
    """
    Set up console logging for the package.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        name: Root logger name to configure
        fmt: Optional format string, defaults to LOG_FORMAT

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Calling twice must not duplicate output
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt or LOG_FORMAT))
        logger.addHandler(handler)

    return logger
