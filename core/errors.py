"""
Exceptions raised around GOOSE subscription reconciliation.

The matching core itself never raises for documented inputs: missing
structure degrades to "nothing to do". These exceptions belong to the
collaborators around it (the reference edit sink and strict identity
lookups), so callers can separate their failures from programming errors.
"""

from typing import Optional


class SubscriptionError(Exception):
    """Base class for all subscription reconciliation errors."""


class IdentityResolutionError(SubscriptionError):
    """
    Raised when a structural identity cannot be resolved in a document.

    Attributes:
        tag: Element tag that was searched for
        identity: Identity string that was not found
    """

    def __init__(self, tag: str, identity: str):
        self.tag = tag
        self.identity = identity
        super().__init__(f"No {tag} element with identity {identity!r}")


class EditApplicationError(SubscriptionError):
    """
    Raised when an edit of a batch cannot be applied to the document.

    Attributes:
        title: Title of the batch being applied
        index: Position of the failing edit within the batch
    """

    def __init__(self, message: str, title: Optional[str] = None, index: Optional[int] = None):
        self.title = title
        self.index = index
        if title is not None and index is not None:
            message = f"{title} [{index}]: {message}"
        super().__init__(message)
