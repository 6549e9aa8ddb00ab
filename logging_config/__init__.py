"""
Logging configuration package for GOOSE subscription reconciliation.

This package provides logging utilities that:
- Store log files in a per-user directory
- Handle writes from several threads via queue-based logging
- Log classification results, edit batches, and errors

Usage:
    from logging_config import setup_logging, get_logger

    # Initialize logging once at startup
    setup_logging()

    # Get logger in any module that needs it
    logger = get_logger(__name__)
    logger.info("Processing started")
"""

from logging_config.logging_utils import (
    setup_logging,
    get_logger,
    get_log_path,
)

from logging_config.configure_logging import (
    log_classification,
    log_edit_batch,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "get_log_path",
    "log_classification",
    "log_edit_batch",
]
