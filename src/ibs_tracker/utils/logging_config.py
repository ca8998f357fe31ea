"""
Logging configuration.

Log output goes through Rich so it matches the CLI's console styling.
"""

import logging
from typing import Optional

from rich.logging import RichHandler

PACKAGE_LOGGER = "ibs_tracker"


def setup_logging(level: str = "INFO", logger_name: Optional[str] = PACKAGE_LOGGER) -> logging.Logger:
    """
    Set up logging for the application.

    Args:
        level: Log level name, e.g. "INFO" or "debug".
        logger_name: Logger to configure. None configures the root logger.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    logger.handlers.clear()

    handler = RichHandler(show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)

    return logger
