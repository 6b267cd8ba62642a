"""
Logging Configuration for the Plaza runner

Provides structured logging with:
- Timestamps
- Console and file handlers
- File rotation (1 file per day)
- Separate error log
"""

import logging
import os
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from typing import Optional


# Log directory (created on first use), PLAZA_LOG_DIR overrides it
DEFAULT_LOG_DIR = "logs"

# Log formats
DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

RUNNER_LOGGER_NAME = "plaza_runner"


def get_log_dir() -> Path:
    """Log directory from ``PLAZA_LOG_DIR``, read when called."""
    return Path(os.getenv("PLAZA_LOG_DIR", DEFAULT_LOG_DIR))


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    console: bool = True,
    detailed: bool = False,
    log_dir: Optional[Path] = None,
    file_logging: bool = True,
) -> logging.Logger:
    """
    Setup a logger with console and file handlers.

    Args:
        name: Logger name (typically the package name)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file name (defaults to name.log)
        console: Whether to log to console
        detailed: Whether to use detailed format (includes file/line)
        log_dir: Directory for log files (defaults to get_log_dir())
        file_logging: Whether to attach the rotating file handlers

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger("plaza_runner", level=logging.DEBUG)
        >>> logger.info("Executing deposit...")
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    log_format = DETAILED_FORMAT if detailed else SIMPLE_FORMAT
    formatter = logging.Formatter(log_format, datefmt=DATE_FORMAT)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if not file_logging:
        return logger

    directory = Path(log_dir) if log_dir is not None else get_log_dir()
    directory.mkdir(parents=True, exist_ok=True)

    if log_file is None:
        log_file = f"{name}.log"

    file_handler = TimedRotatingFileHandler(
        directory / log_file,
        when="midnight",
        interval=1,
        backupCount=30,  # Keep 30 days of logs
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # Separate error log
    error_handler = RotatingFileHandler(
        directory / f"{name}_errors.log",
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(error_handler)

    return logger


def log_run_summary(logger: logging.Logger, results) -> None:
    """
    Log one structured line summarising a finished run.

    Each step has already logged its own outcome, so only the counts and the
    labels of failed steps are repeated here.

    Args:
        logger: Logger instance
        results: ``TxResult`` objects from the transaction helpers, in step order
    """
    failed = [r for r in results if not r.ok]
    msg = f"RUN COMPLETE | Steps: {len(results)} | OK: {len(results) - len(failed)} | Failed: {len(failed)}"
    if failed:
        msg += " | " + ", ".join(f"{r.label} ({r.status.value})" for r in failed)
        logger.warning(msg)
    else:
        logger.info(msg)


def get_runner_logger(debug: bool = False, file_logging: bool = True) -> logging.Logger:
    """Configure the package logger that every runner module logs through."""
    level = logging.DEBUG if debug else logging.INFO
    return setup_logger(RUNNER_LOGGER_NAME, level=level, detailed=debug, file_logging=file_logging)
