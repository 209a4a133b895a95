"""
Logging configuration and utilities.

Provides centralized logging setup for the application.
"""

import logging
import sys
from pathlib import Path

from fitness_tracker.utils.parameters import LoggingConfig


def setup_logging(config: LoggingConfig, logger_name: str | None = None) -> logging.Logger:
    """
    Set up logging for the application.

    Args:
        config: Logging configuration.
        logger_name: Optional logger name. If None, returns root logger.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(logger_name)
    level = getattr(logging, config.level.upper())
    logger.setLevel(level)

    logger.handlers.clear()

    formatter = logging.Formatter(config.format)

    if config.console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if config.file:
        log_file = Path(config.file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
