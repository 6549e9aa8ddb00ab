"""
Core domain objects for GOOSE subscription reconciliation.

This package contains the objects shared by the utils and subscription
packages. Nothing here reads configuration beyond SCL constants, so it
can be imported without side effects.

Classes:
    FcdaReference: Six-field reference shared by FCDA and ExtRef
    Create, Delete, EditBatch: Edit descriptions for the action sink
    SubscribeStatus, SubscriberIed, ClassificationResult: Classifier output
    SubscriptionError and subclasses: Collaborator failures

Usage:
    from core import FcdaReference, extref_matches

    ref = FcdaReference.from_element(fcda)
    if extref_matches(extref, ref, "IED1"):
        ...
"""

from core.errors import (
    SubscriptionError,
    IdentityResolutionError,
    EditApplicationError,
)

from core.identity import (
    local_name,
    closest,
    iter_tag,
    identity,
    find_by_identity,
)

from core.fcda_reference import (
    FcdaReference,
    reference_key,
    extref_matches,
)

from core.edit_action import (
    Create,
    Delete,
    EditAction,
    EditBatch,
)

from core.subscriber_ied import (
    SubscribeStatus,
    SubscriberIed,
    ClassificationResult,
)

__all__ = [
    # Errors
    "SubscriptionError",
    "IdentityResolutionError",
    "EditApplicationError",
    # Identity
    "local_name",
    "closest",
    "iter_tag",
    "identity",
    "find_by_identity",
    # References
    "FcdaReference",
    "reference_key",
    "extref_matches",
    # Edits
    "Create",
    "Delete",
    "EditAction",
    "EditBatch",
    # Classification
    "SubscribeStatus",
    "SubscriberIed",
    "ClassificationResult",
]
