"""Structured logging configuration for the local help scraper.

This module provides colored console logging and rotating file logging
with timing utilities.
"""

import logging
import os
import time
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import colorlog


CONSOLE_FORMAT_COLOR = "%(log_color)s%(levelname)-8s%(reset)s %(blue)s%(name)s%(reset)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _setup_console_handler(level: int) -> logging.Handler:
    """Create and configure colored console handler.

    Args:
        level: Logging level

    Returns:
        Configured console handler
    """
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    formatter = colorlog.ColoredFormatter(
        CONSOLE_FORMAT_COLOR,
        datefmt=DATE_FORMAT,
        log_colors={
            'DEBUG': 'cyan',
            'INFO': 'green',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'red,bg_white',
        }
    )

    console_handler.setFormatter(formatter)
    return console_handler


def _setup_file_handler(level: int, log_dir: Optional[Path] = None) -> logging.Handler:
    """Create and configure rotating file handler.

    Args:
        level: Logging level
        log_dir: Directory for log files (default: logs/)

    Returns:
        Configured rotating file handler
    """
    if log_dir is None:
        project_root = Path(__file__).parent.parent.parent
        log_dir = project_root / "logs"

    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / "localhelp.log"

    # Rotating file handler: max 10MB, keep 5 backup files
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setLevel(level)

    formatter = logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT)
    file_handler.setFormatter(formatter)

    return file_handler


PACKAGE_LOGGER_NAME = "src"


def _configure_package_logger(log_dir: Optional[Path] = None, level: Optional[str] = None) -> logging.Logger:
    """Attach the console and file handlers to the package logger once.

    Module loggers below it carry no handlers of their own and propagate
    here, so its level governs the whole package.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)

    # Only configure once (avoid duplicate handlers)
    if not package_logger.handlers:
        if level is not None:
            log_level_str = level.upper()
        else:
            log_level_str = os.environ.get('LOG_LEVEL', 'INFO').upper()
        log_level = getattr(logging, log_level_str, logging.INFO)

        package_logger.setLevel(log_level)
        package_logger.addHandler(_setup_console_handler(log_level))
        package_logger.addHandler(_setup_file_handler(log_level, log_dir))

        # Prevent propagation to root logger
        package_logger.propagate = False

    return package_logger


def get_logger(name: str, log_dir: Optional[Path] = None, level: Optional[str] = None) -> logging.Logger:
    """Get a logger inside the package hierarchy.

    Args:
        name: Logger name (typically __name__ from calling module). Names
              outside the package (e.g. "__main__") are nested under it.
        log_dir: Directory for log files (default: logs/), used when the
                 package handlers are first created
        level: Initial package log level (DEBUG, INFO, WARNING, ERROR,
               CRITICAL). If None, uses LOG_LEVEL environment variable,
               defaulting to INFO.

    Returns:
        Logger that propagates to the configured package logger
    """
    _configure_package_logger(log_dir, level)

    if name != PACKAGE_LOGGER_NAME and not name.startswith(PACKAGE_LOGGER_NAME + "."):
        name = f"{PACKAGE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


@contextmanager
def log_execution_time(logger: logging.Logger, operation: str):
    """Context manager to automatically log operation execution time.

    Args:
        logger: Logger instance
        operation: Name of the operation

    Usage:
        with log_execution_time(logger, "directory crawl"):
            await crawler.crawl(page)
    """
    logger.debug(f"Starting: {operation}")
    start_time = time.time()

    try:
        yield
    finally:
        duration = time.time() - start_time
        logger.info(f"Completed: {operation} in {duration:.3f}s")


def set_log_level(level: str, logger: Optional[logging.Logger] = None) -> None:
    """Change the log level of a logger and all its handlers.

    Args:
        level: New log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        logger: Logger instance. Defaults to the package logger, which
                changes the level of every module logger at once.
    """
    if logger is None:
        logger = _configure_package_logger()

    level_upper = level.upper()
    log_level = getattr(logging, level_upper, logging.INFO)

    logger.setLevel(log_level)
    for handler in logger.handlers:
        handler.setLevel(log_level)

    logger.info(f"Log level changed to {level_upper}")


def log_exception(logger: logging.Logger, operation: str, exception: Exception) -> None:
    """Log an exception with context.

    Args:
        logger: Logger instance
        operation: Name of the operation that failed
        exception: The exception that was raised
    """
    logger.error(f"Failed: {operation}: {exception}", exc_info=exception)
