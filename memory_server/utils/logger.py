"""
Logging configuration for the memory server.

This module sets up logging with proper formatting, log levels, and file handling.
It provides a consistent logging interface across the application.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

# Default log format
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DETAILED_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"

# Log levels mapping
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

class LoggerConfig:
    """Configuration for logger setup."""

    def __init__(
        self,
        log_level: str = "INFO",
        log_format: str = DEFAULT_LOG_FORMAT,
        log_file: Optional[str] = None,
        log_dir: str = "logs",
        max_file_size: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
        console_output: bool = True,
        detailed_format: bool = False,
    ):
        self.log_level = LOG_LEVELS.get(log_level.upper(), logging.INFO)
        self.log_format = DETAILED_LOG_FORMAT if detailed_format else log_format
        self.log_file = log_file
        self.log_dir = log_dir
        self.max_file_size = max_file_size
        self.backup_count = backup_count
        self.console_output = console_output


def setup_logger(
    name: str,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_dir: str = "logs",
) -> logging.Logger:
    """
    Set up and configure a logger instance.

    Level, log file and detailed format fall back to the MEMORY_SERVER_LOG_LEVEL,
    MEMORY_SERVER_LOG_FILE and MEMORY_SERVER_DEBUG_MODE environment variables.

    Args:
        name: Name of the logger (typically __name__)
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file name, written under log_dir with rotation
        log_dir: Directory to store log files

    Returns:
        Configured logger instance
    """
    logger_config = LoggerConfig(
        log_level=log_level or os.environ.get("MEMORY_SERVER_LOG_LEVEL", "INFO"),
        log_file=log_file or os.environ.get("MEMORY_SERVER_LOG_FILE"),
        log_dir=log_dir,
        detailed_format=os.environ.get("MEMORY_SERVER_DEBUG_MODE", "false").lower() == "true",
    )

    logger = logging.getLogger(name)
    logger.setLevel(logger_config.log_level)

    # Clear existing handlers to avoid duplicates
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(logger_config.log_format)

    if logger_config.console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if logger_config.log_file:
        log_dir_path = Path(logger_config.log_dir)
        log_dir_path.mkdir(exist_ok=True, parents=True)

        file_handler = RotatingFileHandler(
            log_dir_path / logger_config.log_file,
            maxBytes=logger_config.max_file_size,
            backupCount=logger_config.backup_count
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def apply_log_level(level: str) -> None:
    """Re-level every logger configured through setup_logger (used once config is loaded)."""
    numeric = LOG_LEVELS.get(level.upper(), logging.INFO)
    for name, logger in logging.root.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and name.startswith("memory_server"):
            logger.setLevel(numeric)
