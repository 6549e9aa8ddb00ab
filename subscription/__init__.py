"""
GOOSE subscription package.

This package computes how subscriber IEDs relate to a published GOOSE
data set, and the edits needed to change that relation.

Main entry points:
- classify_ieds(): Bucket IEDs into subscribed / partial / not subscribed
- subscribe(): Create edits that fully link an IED
- unsubscribe(): Delete edits that remove all links of an IED
- SelectionState: Selection holder dispatching subscription requests
"""

from subscription.classifier import classify_ieds, count_linked_fcdas
from subscription.subscribe import subscribe, create_extref
from subscription.unsubscribe import unsubscribe, extend_delete_actions
from subscription.selection_state import SelectionState

__all__ = [
    "classify_ieds",
    "count_linked_fcdas",
    "subscribe",
    "create_extref",
    "unsubscribe",
    "extend_delete_actions",
    "SelectionState",
]
