"""
Logging utilities for GOOSE subscription reconciliation.

This module provides a simple logging setup that:
- Stores log files in a per-user directory (overridable by environment)
- Handles writes from several threads via queue-based logging
- Logs classification results, computed edit batches, and errors
- Suppresses logs from external libraries
- Outputs JSON Lines format for easy machine parsing

Usage:
    from logging_config import setup_logging, get_logger

    # Call once at startup (get_logger also does it on first use)
    setup_logging()

    # Get logger in any module
    logger = get_logger(__name__)
    logger.info("Publisher selected")

Log Format (JSON Lines):
    Each line is a self-contained JSON object:
    {"timestamp": "2024-01-15T10:30:45+00:00", "name": "module", "level": "INFO", "username": "user", "message": "text"}
"""

import logging
import logging.handlers
import json
import os
import queue
import atexit
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Any, Dict

# Module-level state
_logging_initialized = False
_log_queue: Optional[queue.Queue] = None
_queue_listener: Optional[logging.handlers.QueueListener] = None

LOG_DIR_ENV = "GOOSE_SUBSCRIBER_LOG_DIR"
LOG_FILE_NAME = "goose_subscriber.log"

# Application logger prefixes - only these will log at INFO level
# All other loggers (external libraries) will be set to WARNING
_APP_LOGGER_PREFIXES = (
    "__main__",
    "subscription",
    "logging_config",
    "config",
    "core",
    "utils",
)

# External libraries to explicitly suppress (set to WARNING)
_SUPPRESSED_LOGGERS = [
    "lxml",
]


def get_log_path(subdir: str = "GooseSubscriberLog") -> Path:
    """
    Get the directory for log files.

    The GOOSE_SUBSCRIBER_LOG_DIR environment variable wins when set;
    otherwise logs go to a subdirectory of the user's home.

    Args:
        subdir: Subdirectory name below the home directory

    Returns:
        Path object for the log directory
    """
    override = os.getenv(LOG_DIR_ENV)
    if override:
        log_path = Path(override)
    else:
        log_path = Path.home() / subdir

    log_path.mkdir(parents=True, exist_ok=True)
    return log_path


def setup_logging(log_level: int = logging.INFO) -> None:
    """
    Initialize the logging system.

    Sets up a queue-based logging system writing JSON Lines to a
    rotating file. External library logs are suppressed (set to WARNING
    level). Only application loggers log at log_level.

    Calling it again after the first time has no effect.

    Args:
        log_level: Logging level for application loggers (default: logging.INFO)
    """
    global _logging_initialized, _log_queue, _queue_listener

    if _logging_initialized:
        return

    log_file = get_log_path() / LOG_FILE_NAME

    # Create rotating file handler (10MB max, keep 5 backups)
    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        delay=True
    )
    file_handler.setFormatter(_JsonFormatter())

    _log_queue = queue.Queue(-1)
    queue_handler = logging.handlers.QueueHandler(_log_queue)

    # Root logger at WARNING suppresses external libraries by default
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING)
    root_logger.addHandler(queue_handler)

    for lib_name in _SUPPRESSED_LOGGERS:
        lib_logger = logging.getLogger(lib_name)
        lib_logger.setLevel(logging.WARNING)
        lib_logger.handlers.clear()

    for prefix in _APP_LOGGER_PREFIXES:
        logging.getLogger(prefix).setLevel(log_level)

    _queue_listener = logging.handlers.QueueListener(
        _log_queue,
        file_handler,
        respect_handler_level=True
    )
    _queue_listener.start()

    atexit.register(_shutdown_logging)

    _logging_initialized = True


def _shutdown_logging() -> None:
    """Clean up logging resources on exit."""
    global _queue_listener

    if _queue_listener:
        _queue_listener.stop()
        _queue_listener = None


class _JsonFormatter(logging.Formatter):
    """
    Formatter that outputs JSON Lines format.

    Each log record becomes a single JSON object on one line.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "name": record.name,
            "level": record.levelname,
            "username": os.getenv("USERNAME", os.getenv("USER", "unknown")),
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exc_info"] = self.formatException(record.exc_info)

        # Structured payload passed as extra={"extra_data": ...}
        if hasattr(record, "extra_data"):
            log_entry["extra"] = record.extra_data

        return json.dumps(log_entry, ensure_ascii=False)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Automatically initializes logging if not already done.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    if not _logging_initialized:
        setup_logging()

    logger = logging.getLogger(name)

    if name.startswith(_APP_LOGGER_PREFIXES):
        logger.setLevel(logging.INFO)

    return logger
