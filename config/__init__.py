"""
Configuration package for GOOSE subscription reconciliation.

This package centralizes the SCL constants, runtime settings and
selection validation used throughout the application.

Modules:
    scl_schema: SCL tag and attribute names
    settings: SubscriptionConfig and environment overrides
    validation: Publisher selection validation

Usage:
    from config import SubscriptionConfig, CountPolicy

    config = SubscriptionConfig(count_policy=CountPolicy.DISTINCT)

    # Or from the environment
    config = SubscriptionConfig.from_env()
"""

from config.scl_schema import (
    SCL_NAMESPACE,
    TAG_IED,
    TAG_LDEVICE,
    TAG_LN0,
    TAG_LN,
    TAG_INPUTS,
    TAG_EXTREF,
    TAG_GSE_CONTROL,
    TAG_DATASET,
    TAG_FCDA,
    LOGICAL_NODE_TAGS,
    FCDA_REFERENCES,
)

from config.settings import (
    SERVICE_TYPE_GOOSE,
    CONNECT_TITLE,
    DISCONNECT_TITLE,
    CountPolicy,
    SubscriptionConfig,
    DEFAULT_CONFIG,
)

from config.validation import (
    ValidationResult,
    validate_selection,
)

__all__ = [
    # SCL schema
    "SCL_NAMESPACE",
    "TAG_IED",
    "TAG_LDEVICE",
    "TAG_LN0",
    "TAG_LN",
    "TAG_INPUTS",
    "TAG_EXTREF",
    "TAG_GSE_CONTROL",
    "TAG_DATASET",
    "TAG_FCDA",
    "LOGICAL_NODE_TAGS",
    "FCDA_REFERENCES",
    # Settings
    "SERVICE_TYPE_GOOSE",
    "CONNECT_TITLE",
    "DISCONNECT_TITLE",
    "CountPolicy",
    "SubscriptionConfig",
    "DEFAULT_CONFIG",
    # Validation
    "ValidationResult",
    "validate_selection",
]
