"""
Subscriber IED classification results.

This module contains the objects returned by the classifier: the
SubscribeStatus of an IED towards the selected GOOSE, the SubscriberIed
entry holding the IED element, and the ClassificationResult holding the
two ordered buckets (subscribed and available).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from config.scl_schema import ATTR_NAME


class SubscribeStatus(Enum):
    """Subscription state of an IED towards the selected data set."""
    FULL = "full"
    PARTIAL = "partial"
    NONE = "none"


@dataclass
class SubscriberIed:
    """
    An IED in one of the classification buckets.

    Attributes:
        element: The IED element of the document
        partial: True if some, but not all, FCDAs are linked
        linked_count: Number of counted links found for this IED
    """
    element: Any
    partial: bool = False
    linked_count: int = 0

    @property
    def name(self) -> str:
        return self.element.get(ATTR_NAME, "")

    def __str__(self) -> str:
        return f"{self.name} ({'partial' if self.partial else 'none'})"


@dataclass
class ClassificationResult:
    """
    Subscribed and available IEDs for one publisher selection.

    Both lists keep document order. Available IEDs carry the partial
    flag; partially_subscribed and not_subscribed split them.

    Attributes:
        subscribed: Fully linked IEDs
        available: Partially linked and unlinked IEDs
        total_fcdas: Number of FCDAs in the data set classified against
    """
    subscribed: List[SubscriberIed] = field(default_factory=list)
    available: List[SubscriberIed] = field(default_factory=list)
    total_fcdas: int = 0

    @property
    def partially_subscribed(self) -> List[SubscriberIed]:
        return [ied for ied in self.available if ied.partial]

    @property
    def not_subscribed(self) -> List[SubscriberIed]:
        return [ied for ied in self.available if not ied.partial]

    def status_of(self, ied: Any) -> Optional[SubscribeStatus]:
        """
        Look up the status of an IED element or IED name.

        Returns:
            SubscribeStatus, or None if the IED was not classified
            (for example the publishing IED itself)
        """
        name = ied if isinstance(ied, str) else ied.get(ATTR_NAME, "")
        for entry in self.subscribed:
            if entry.name == name:
                return SubscribeStatus.FULL
        for entry in self.available:
            if entry.name == name:
                return SubscribeStatus.PARTIAL if entry.partial else SubscribeStatus.NONE
        return None

    def to_dict(self) -> Dict[str, List[str]]:
        """IED names per bucket, for logging and reports."""
        return {
            "subscribed": [ied.name for ied in self.subscribed],
            "partially_subscribed": [ied.name for ied in self.partially_subscribed],
            "not_subscribed": [ied.name for ied in self.not_subscribed],
        }
