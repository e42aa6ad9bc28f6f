"""Simple logging configuration for the firm model."""

import logging
import time
from contextlib import contextmanager
from typing import Generator

from .config import Settings


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


@contextmanager
def log_execution_time(
    logger: logging.Logger, operation: str
) -> Generator[None, None, None]:
    """Context manager to log execution time of operations."""
    start_time = time.time()
    logger.debug(f"Starting {operation}")
    try:
        yield
    except Exception as e:
        logger.error(f"Error in {operation}: {e}")
        raise
    finally:
        duration = time.time() - start_time
        logger.debug(f"Completed {operation} in {duration:.3f}s")


def set_log_level(level: str, prefix: str = "firmmodel") -> None:
    """Set the level of every logger created under a package prefix."""
    for name in list(logging.root.manager.loggerDict):
        if name == prefix or name.startswith(prefix + "."):
            logging.getLogger(name).setLevel(level.upper())


def configure_logging(settings: Settings) -> None:
    """Apply the configured log level; debug mode forces DEBUG."""
    set_log_level("DEBUG" if settings.debug else settings.log_level)
