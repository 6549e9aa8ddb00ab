"""
Runtime settings for GOOSE subscription reconciliation.

Settings have sensible defaults matching the behaviour of the
subscriber editor. A small number can be overridden through the
environment so that batch tools can switch policies without code
changes.

Environment Variables:
    GOOSE_SUBSCRIBER_COUNT_POLICY: "occurrences" (default) or "distinct"
    GOOSE_SUBSCRIBER_SERVICE_TYPE: serviceType written on new ExtRefs
    GOOSE_SUBSCRIBER_LOG_DIR: Directory for log files (see logging_config)
"""

import os
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

SERVICE_TYPE_GOOSE = "GOOSE"
CONNECT_TITLE = "Connect"
DISCONNECT_TITLE = "Disconnect"


class CountPolicy(Enum):
    """How linked FCDAs are counted when classifying an IED."""
    OCCURRENCES = "occurrences"  # One per matching (FCDA, Inputs) pair
    DISTINCT = "distinct"  # One per FCDA matched anywhere in the IED


@dataclass(frozen=True)
class SubscriptionConfig:
    """
    Settings used by the classifier and the edit builders.

    Attributes:
        service_type: serviceType written on synthesized ExtRefs
        connect_title: Title of subscribe edit batches
        disconnect_title: Title of unsubscribe edit batches
        count_policy: Counting rule for the Fully-Linked threshold
        emit_empty_batches: If True, empty batches are still sent to the sink
    """
    service_type: str = SERVICE_TYPE_GOOSE
    connect_title: str = CONNECT_TITLE
    disconnect_title: str = DISCONNECT_TITLE
    count_policy: CountPolicy = CountPolicy.OCCURRENCES
    emit_empty_batches: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'SubscriptionConfig':
        """
        Build a configuration from environment variables.

        Unknown count policies fall back to the default with a warning.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            SubscriptionConfig instance
        """
        if environ is None:
            environ = os.environ

        policy = CountPolicy.OCCURRENCES
        raw_policy = environ.get("GOOSE_SUBSCRIBER_COUNT_POLICY")
        if raw_policy:
            try:
                policy = CountPolicy(raw_policy.strip().lower())
            except ValueError:
                logger.warning(
                    f"Unknown count policy {raw_policy!r}, using {policy.value}"
                )

        service_type = environ.get("GOOSE_SUBSCRIBER_SERVICE_TYPE") or SERVICE_TYPE_GOOSE

        return cls(service_type=service_type, count_policy=policy)


DEFAULT_CONFIG = SubscriptionConfig()
