"""
Logging setup shared by the service entry points.
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Get a logger with a console handler attached.

    Args:
        name: Logger name (usually __name__)
        level: Level name; defaults to settings.LOG_LEVEL

    Returns:
        Configured logger (handlers are only added once)
    """
    if level is None:
        from markov_service.config import settings
        level = settings.LOG_LEVEL

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger
