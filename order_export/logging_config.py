"""
Logging configuration for the order export.
"""
import logging
import os
from typing import Optional

DEFAULT_LOG_LEVEL = os.getenv("EXPORT_LOG_LEVEL", "INFO")

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def setup_logger(name: str = "order_export", log_file: Optional[str] = None, level: Optional[str] = None) -> logging.Logger:
    """
    Set up a logger with a console handler and, optionally, an append-only file handler.

    Args:
        name: Logger name; child loggers (order_export.*) inherit its handlers
        log_file: Path of the run log, appended to across runs
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    log_level = getattr(logging, (level or DEFAULT_LOG_LEVEL).upper())
    logger.setLevel(log_level)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger
