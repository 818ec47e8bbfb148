"""
Unified logging configuration for bucket-mirror.

Provides a standardized logger with:
- Console output on stdout
- Optional file output with rotation
- Consistent formatting across all modules
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional

ROOT_LOGGER_NAME = 'bucket_mirror'


def setup_logger(
    name: Optional[str] = None,
    level: str = 'INFO',
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the package logger once and return it.

    Args:
        name: Logger name. Defaults to the package logger, which every
              module logger obtained through get_logger propagates to.
        level: Level name such as 'DEBUG' or 'INFO'
        log_file: Path of a rotating log file. None disables file output.

    Returns:
        Configured logger instance

    Example:
        >>> from bucket_mirror.utils import setup_logger
        >>> logger = setup_logger(level='DEBUG')
        >>> logger.info("Mirror started")
    """
    logger = logging.getLogger(name or ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Only attach handlers once
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(logging.Formatter(
        '%(levelname)s [%(name)s] %(message)s'
    ))
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    # Prevent propagation to avoid duplicate logs
    logger.propagate = False

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return a module logger. Handlers live on the package logger, so this
    never configures anything itself.

    Args:
        name: Logger name (typically __name__)
    """
    return logging.getLogger(name or ROOT_LOGGER_NAME)
