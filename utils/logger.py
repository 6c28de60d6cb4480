"""Logging utilities for feedsmith."""

import logging
import sys
import time
import functools
from pathlib import Path
from typing import Optional

ROOT_LOGGER = 'feedsmith'
DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(
    name: str = ROOT_LOGGER,
    log_file: Optional[Path] = None,
    level: str = 'INFO',
    log_format: Optional[str] = None
) -> logging.Logger:
    """
    Set up a logger with console and optional file output.

    Module loggers obtained through get_logger() are children of the
    'feedsmith' logger, so configuring it once configures all of them.

    Args:
        name: Logger name
        log_file: Path to log file (optional)
        level: Logging level name
        log_format: Log format string (optional)

    Returns:
        Configured logger instance
    """
    if log_format is None:
        log_format = DEFAULT_FORMAT

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper() if isinstance(level, str) else 'INFO', logging.INFO))

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger under the 'feedsmith' hierarchy.

    The root 'feedsmith' logger is set up with defaults the first time it is needed.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        setup_logger(ROOT_LOGGER)

    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def _format_elapsed(elapsed: float) -> str:
    if elapsed < 1:
        return f"{elapsed*1000:.0f}ms"
    return f"{elapsed:.1f}s"


def timed_operation(operation_name: str):
    """
    Decorator to log operation timing.

    Args:
        operation_name: Human-readable operation name for logging
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger(func.__module__)
            start_time = time.time()

            try:
                result = func(*args, **kwargs)
                logger.debug(f"⏱ {operation_name}: {_format_elapsed(time.time() - start_time)}")
                return result
            except Exception as e:
                elapsed = time.time() - start_time
                logger.warning(f"⚠ {operation_name} failed after {elapsed:.1f}s: {str(e)[:100]}")
                raise
        return wrapper
    return decorator


def log_milestone(message: str, elapsed_time: Optional[float] = None, prefix: str = "✓"):
    """
    Log a milestone with optional timing information.

    Args:
        message: Milestone message
        elapsed_time: Optional elapsed time in seconds
        prefix: Prefix symbol (default ✓)
    """
    logger = get_logger(ROOT_LOGGER)
    timing_str = f" ({_format_elapsed(elapsed_time)})" if elapsed_time is not None else ""
    logger.info(f"{prefix} {message}{timing_str}")
