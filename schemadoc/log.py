"""Logging setup for the served document."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from . import config


def setup_logging(name: str = "schemadoc", level: Optional[str] = None) -> logging.Logger:
    """Attach a Rich console handler to the ``schemadoc`` logger.

    Args:
        name: Logger name
        level: Log level (defaults to config.LOG_LEVEL)

    Returns:
        Configured logger instance
    """
    level = level or config.LOG_LEVEL

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_path=config.DEBUG,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    logger.addHandler(handler)
    return logger
