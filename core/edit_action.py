"""
Edit descriptions handed to the action sink.

The subscription core never mutates the document. It describes the
changes it wants as Create and Delete edits, grouped into an EditBatch
with a human readable title. Applying a batch is the job of the action
sink, which must apply it as one unit.

Each edit records the identity of its parent at the time it was
computed, so that a sink can find the parent again even when the held
element is no longer attached to the tree.

Usage:
    batch = EditBatch(title="Connect")
    batch.append(Create(parent=inputs, element=extref))
    if batch:
        sink(batch)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Union

from core.identity import identity, local_name


@dataclass
class Create:
    """
    Insert a new element as last child of an existing parent.

    Attributes:
        parent: Existing element that receives the new child
        element: Detached element to insert (may carry its own children)
        parent_identity: Identity of parent when the edit was computed
    """
    parent: Any
    element: Any
    parent_identity: str = ""

    def __post_init__(self):
        if not self.parent_identity:
            self.parent_identity = identity(self.parent)

    def describe(self) -> str:
        return f"create {local_name(self.element)} under {self.parent_identity}"


@dataclass
class Delete:
    """
    Remove an existing element from its parent.

    Attributes:
        parent: Element currently holding the element to delete
        element: Element to remove
        parent_identity: Identity of parent when the edit was computed
        element_identity: Identity of element when the edit was computed
    """
    parent: Any
    element: Any
    parent_identity: str = ""
    element_identity: str = ""

    def __post_init__(self):
        if not self.parent_identity:
            self.parent_identity = identity(self.parent)
        if not self.element_identity:
            self.element_identity = identity(self.element)

    def describe(self) -> str:
        return f"delete {self.element_identity}"


EditAction = Union[Create, Delete]


@dataclass
class EditBatch:
    """
    Ordered list of edits applied as one logical unit.

    Attributes:
        title: Human readable title ("Connect", "Disconnect")
        actions: Edits in application order
    """
    title: str
    actions: List[EditAction] = field(default_factory=list)

    def append(self, action: EditAction) -> None:
        self.actions.append(action)

    def extend(self, actions: List[EditAction]) -> None:
        self.actions.extend(actions)

    @property
    def creates(self) -> List[Create]:
        return [a for a in self.actions if isinstance(a, Create)]

    @property
    def deletes(self) -> List[Delete]:
        return [a for a in self.actions if isinstance(a, Delete)]

    @property
    def is_empty(self) -> bool:
        return not self.actions

    def to_dict(self) -> Dict[str, Any]:
        """Summary for logging; elements are rendered by their description."""
        return {
            "title": self.title,
            "creates": len(self.creates),
            "deletes": len(self.deletes),
            "actions": [a.describe() for a in self.actions],
        }

    def __len__(self) -> int:
        return len(self.actions)

    def __iter__(self) -> Iterator[EditAction]:
        return iter(self.actions)

    def __str__(self) -> str:
        return f"EditBatch({self.title}: {len(self.actions)} actions)"
