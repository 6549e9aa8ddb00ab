"""
Structured log helpers for subscription reconciliation.

The core logging functionality is in logging_utils.py. This module
adds helpers that log domain objects with a JSON payload, keeping the
message line short and the detail machine readable.

Usage:
    from logging_config.configure_logging import log_classification

    log_classification(result, publisher="IED1 > GCB1")
"""

from logging_config.logging_utils import get_logger

_logger = get_logger(__name__)


def log_classification(result, publisher: str) -> None:
    """
    Log the buckets of a classification result.

    IED names are logged per bucket; elements themselves are not.

    Args:
        result: ClassificationResult to log
        publisher: Label of the selected publisher
    """
    _logger.info(
        f"Subscriber IEDs for {publisher}: "
        f"{len(result.subscribed)} subscribed, {len(result.available)} available",
        extra={"extra_data": result.to_dict()},
    )


def log_edit_batch(batch, ied_name: str) -> None:
    """
    Log a computed edit batch for one IED.

    Empty batches are logged at INFO as "nothing to do".

    Args:
        batch: EditBatch to log
        ied_name: Name of the subscriber IED
    """
    if not batch:
        _logger.info(f"{batch.title} {ied_name}: nothing to do")
        return

    _logger.info(
        f"{batch.title} {ied_name}: {len(batch)} edits",
        extra={"extra_data": batch.to_dict()},
    )
