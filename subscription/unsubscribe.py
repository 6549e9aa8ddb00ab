"""
Unsubscribe an IED from the selected GOOSE data set.

Builds the Delete edits that remove every ExtRef of an IED linking an
FCDA of the data set, in any Inputs below an LN0 or LN. Inputs elements
that would be left without children are deleted in the same batch,
after all ExtRef deletes.
"""

import copy
import logging
from typing import Any, Dict, List, Optional

from config.scl_schema import ATTR_IED_NAME, ATTR_NAME, TAG_INPUTS
from config.settings import DEFAULT_CONFIG, SubscriptionConfig
from core import Delete, EditBatch, FcdaReference, closest, extref_matches, find_by_identity, identity
from utils.scl_utils import (
    document_root,
    element_children,
    get_extrefs,
    get_fcdas,
    get_ied_name,
    get_inputs,
)

logger = logging.getLogger(__name__)


def unsubscribe(
        ied: Any,
        gse_control: Optional[Any],
        dataset: Optional[Any],
        config: SubscriptionConfig = DEFAULT_CONFIG
) -> EditBatch:
    """
    Compute the edits that remove all links of an IED to a data set.

    Args:
        ied: IED element to unsubscribe
        gse_control: Selected GSEControl
        dataset: DataSet of the control
        config: Settings (batch title)

    Returns:
        EditBatch titled config.disconnect_title; empty if no ExtRef
        of the IED links the data set
    """
    batch = EditBatch(title=config.disconnect_title)

    publisher = get_ied_name(gse_control)
    if not publisher:
        return batch

    references = [FcdaReference.from_element(fcda) for fcda in get_fcdas(dataset)]
    actions: List[Delete] = []

    for inputs in get_inputs(ied):
        extrefs = get_extrefs(inputs)
        scheduled = set()
        for reference in references:
            for extref in extrefs:
                if id(extref) in scheduled:
                    continue
                if extref_matches(extref, reference, publisher):
                    scheduled.add(id(extref))
                    actions.append(Delete(parent=extref.getparent(), element=extref))

    batch.extend(extend_delete_actions(actions))

    logger.info(
        f"Unsubscribing {ied.get(ATTR_NAME)} from {publisher}: "
        f"{len(actions)} ExtRefs, {len(batch) - len(actions)} Inputs"
    )
    return batch


def extend_delete_actions(extref_deletes: List[Delete]) -> List[Delete]:
    """
    Add Delete edits for Inputs left empty by a list of ExtRef deletes.

    Deletes are grouped by the identity of their Inputs. Each Inputs is
    copied once, the deleted ExtRefs are removed from the copy, and if
    the copy has no children left the live Inputs is found again by its
    identity and deleted from its logical node.

    Args:
        extref_deletes: Delete edits for ExtRef elements

    Returns:
        The ExtRef deletes followed by Inputs deletes; an empty list if
        there are no ExtRef deletes
    """
    if not extref_deletes:
        return []

    extended: List[Delete] = list(extref_deletes)
    copies: Dict[str, Any] = {}

    for action in extref_deletes:
        inputs = closest(action.parent, TAG_INPUTS)
        if inputs is None:
            continue

        key = identity(inputs)
        if key not in copies:
            copies[key] = copy.deepcopy(inputs)

        ied_name = action.element.get(ATTR_IED_NAME)
        reference = FcdaReference.from_element(action.element)
        linked = next(
            (extref for extref in get_extrefs(copies[key])
             if extref_matches(extref, reference, ied_name)),
            None,
        )
        if linked is not None:
            linked.getparent().remove(linked)

    root = document_root(extref_deletes[0].parent)
    for key, inputs_copy in copies.items():
        if element_children(inputs_copy):
            continue

        inputs = find_by_identity(root, TAG_INPUTS, key)
        if inputs is not None and inputs.getparent() is not None:
            extended.append(Delete(parent=inputs.getparent(), element=inputs))

    return extended
