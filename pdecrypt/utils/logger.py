"""Logging configuration and utilities for the PDF decryption tool."""

import logging
import os
from typing import Optional

from pdecrypt.config.settings import LOG_FORMAT, LOG_LEVEL, LOGS_DIR

ROOT_LOGGER_NAME = "pdecrypt"


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    log_file: Optional[str] = None,
    level: str = LOG_LEVEL,
    logs_dir: str = LOGS_DIR,
    to_file: bool = False,
    log_format: str = LOG_FORMAT
) -> logging.Logger:
    """Set up a logger with console and optional file handlers.

    Args:
        name: Logger name.
        log_file: Optional log file name. If None, uses logger name.
        level: Logging level.
        logs_dir: Directory receiving the log file.
        to_file: Whether to attach a file handler.
        log_format: Format string for both handlers.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Clear existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if to_file:
        if log_file is None:
            log_file = f"{name}.log"

        os.makedirs(logs_dir, exist_ok=True)
        file_handler = logging.FileHandler(os.path.join(logs_dir, log_file), encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
