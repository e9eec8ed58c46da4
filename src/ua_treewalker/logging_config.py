"""
Logging Configuration for the user-agent tree walker.

Provides centralized setup for the walk trace logger used by verbose
walk lists. The trace always goes to stderr (unless disabled) and, when a
log directory is configured, to a file as well.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

TRACE_LOGGER_NAME = "ua_treewalker.trace"
TRACE_LOG_FILENAME = "walk_trace.log"

# Set UA_TREEWALKER_TRACE_STDERR="" to keep the trace off stderr
_stderr_env = os.getenv("UA_TREEWALKER_TRACE_STDERR")
STDERR_TRACE_ENABLED = _stderr_env is None or _stderr_env != ""

_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _get_log_directory() -> Optional[Path]:
    """Get the trace log directory, or None when file logging is off."""
    log_dir = os.getenv("UA_TREEWALKER_LOG_DIR")
    if not log_dir:
        return None
    return Path(log_dir)


def _create_file_handler(log_filename: str) -> Optional[logging.FileHandler]:
    """
    Create a file handler for the specified log file.

    Args:
        log_filename: Name of the log file (e.g., 'walk_trace.log')

    Returns:
        Configured FileHandler, or None if no log directory is configured
    """
    log_dir = _get_log_directory()
    if log_dir is None:
        return None

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_dir / log_filename, mode='a', encoding='utf-8')
    except OSError as e:
        logging.getLogger(__name__).warning(
            "Cannot open trace log in %s: %s", log_dir, e
        )
        return None
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    return handler


class FlushingStreamHandler(logging.StreamHandler):
    """StreamHandler that flushes after every emit.

    ::: This is-in-layer Infrastructure-Layer.
    ::: This is a handler.
    ::: This is stateless.
    """
    def emit(self, record):
        super().emit(record)
        self.flush()


def _create_stderr_handler() -> logging.StreamHandler:
    """Create a stderr handler for console output with auto-flush."""
    handler = FlushingStreamHandler(sys.stderr)
    handler.setLevel(logging.DEBUG if STDERR_TRACE_ENABLED else logging.CRITICAL + 1)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    return handler


def get_trace_logger() -> logging.Logger:
    """
    Get the walk trace logger.

    Verbose walk lists report every step entry and exit through this
    logger. Output goes to stderr and, if UA_TREEWALKER_LOG_DIR is set,
    to walk_trace.log in that directory.

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(TRACE_LOGGER_NAME)

    # Only configure once
    if not logger.handlers:
        logger.setLevel(logging.DEBUG)
        logger.propagate = False  # Don't propagate to root logger

        file_handler = _create_file_handler(TRACE_LOG_FILENAME)
        if file_handler:
            logger.addHandler(file_handler)

        logger.addHandler(_create_stderr_handler())

    return logger


def reset_trace_logger() -> logging.Logger:
    """
    Drop and rebuild the trace logger handlers.

    Call this after changing UA_TREEWALKER_LOG_DIR so the file handler
    points to the new directory.

    Returns:
        Reconfigured logger instance
    """
    logger = logging.getLogger(TRACE_LOGGER_NAME)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    return get_trace_logger()


def suppress_stderr_logging():
    """
    Suppress stderr output of the trace logger.

    File logging continues to work normally.
    """
    for handler in get_trace_logger().handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            handler.setLevel(logging.CRITICAL + 1)  # Effectively disable


def restore_stderr_logging():
    """Restore stderr output of the trace logger."""
    for handler in get_trace_logger().handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            handler.setLevel(logging.DEBUG)
