"""
Reference action sink for edit batches.

The subscription core only describes edits. This module applies them
to an in-memory lxml document, the way the host editor does: creates
append the new element to its parent, deletes remove the element from
its parent. A batch is applied as one unit; if any edit fails, the
edits already applied from that batch are rolled back before the error
is raised.

Usage:
    editor = DocumentEditor(root)
    state = SelectionState(editor.document, editor)
    state.select_publisher(gse_control)
    state.on_subscription(ied, SubscribeStatus.NONE)
"""

import logging
from typing import Any, List, Optional, Tuple

from core.edit_action import Create, Delete, EditAction, EditBatch
from core.errors import EditApplicationError
from core.identity import find_by_identity, local_name

logger = logging.getLogger(__name__)

# (action, parent, element, position) needed to undo one applied edit
_UndoEntry = Tuple[EditAction, Any, Any, int]


def apply_edit_batch(batch: EditBatch, root: Optional[Any] = None) -> None:
    """
    Apply all edits of a batch in order.

    Args:
        batch: EditBatch to apply
        root: Document root used to re-resolve parents by identity.
            Defaults to the root of the first edit's parent.

    Raises:
        EditApplicationError: If an edit cannot be applied. No edit of
            the batch remains applied in that case.
    """
    applied: List[_UndoEntry] = []

    try:
        for index, action in enumerate(batch):
            if root is None:
                root = action.parent.getroottree().getroot()
            applied.append(_apply_action(action, root, batch.title, index))
    except EditApplicationError:
        _rollback(applied)
        logger.error(f"Edit batch {batch.title!r} rolled back after {len(applied)} edits")
        raise

    logger.info(f"Applied edit batch {batch.title!r} with {len(batch)} edits")


def _apply_action(action: EditAction, root: Any, title: str, index: int) -> _UndoEntry:
    """Apply a single edit and return what is needed to undo it."""
    if isinstance(action, Create):
        if action.element.getparent() is not None:
            raise EditApplicationError(
                f"{local_name(action.element)} is already attached", title, index
            )
        parent = _resolve_parent(action, root, title, index)
        parent.append(action.element)
        return action, parent, action.element, len(parent) - 1

    if isinstance(action, Delete):
        parent = action.element.getparent()
        if parent is None:
            raise EditApplicationError(
                f"{action.element_identity} is not attached", title, index
            )
        position = parent.index(action.element)
        parent.remove(action.element)
        return action, parent, action.element, position

    raise EditApplicationError(f"Unknown edit {action!r}", title, index)


def _resolve_parent(action: Create, root: Any, title: str, index: int) -> Any:
    """Parent held by the edit, or the element found by its recorded identity."""
    parent = action.parent
    if parent.getroottree().getroot() is root:
        return parent

    tag = local_name(parent)
    resolved = find_by_identity(root, tag, action.parent_identity) if tag else None
    if resolved is None:
        raise EditApplicationError(
            f"parent {action.parent_identity!r} not found", title, index
        )
    return resolved


def _rollback(applied: List[_UndoEntry]) -> None:
    for action, parent, element, position in reversed(applied):
        if isinstance(action, Create):
            parent.remove(element)
        else:
            parent.insert(position, element)


class DocumentEditor:
    """
    In-memory document provider and action sink.

    Holds one document, applies batches to it and keeps the titles of
    applied batches in order.

    Attributes:
        root: Root element of the document
        applied: Batches applied so far
    """

    def __init__(self, root: Any):
        self.root = root
        self.applied: List[EditBatch] = []

    def document(self) -> Any:
        """Return the current document root."""
        return self.root

    def __call__(self, batch: EditBatch) -> None:
        apply_edit_batch(batch, self.root)
        self.applied.append(batch)
