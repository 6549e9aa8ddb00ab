"""
Subscribe an IED to the selected GOOSE data set.

Builds the Create edits that link every FCDA of the data set to an
IED. Links are added to the first Inputs below an LN0 of the IED. When
the IED has no such Inputs yet, a new one is built with all its ExtRefs
already inside and inserted under the first LN0 as a single edit, so an
empty Inputs never appears in the document.

FCDAs that already have a matching ExtRef in that Inputs are skipped,
which makes subscribing a subscribed IED a no-op.
"""

import logging
from typing import Any, List, Optional

from config.scl_schema import ATTR_IED_NAME, ATTR_NAME, ATTR_SERVICE_TYPE, TAG_EXTREF, TAG_INPUTS
from config.settings import DEFAULT_CONFIG, SubscriptionConfig
from core import Create, EditBatch, FcdaReference, extref_matches
from utils.scl_utils import (
    create_element,
    get_extrefs,
    get_fcdas,
    get_ied_name,
    get_ln0,
    get_ln0_inputs,
)

logger = logging.getLogger(__name__)


def subscribe(
        ied: Any,
        gse_control: Optional[Any],
        dataset: Optional[Any],
        config: SubscriptionConfig = DEFAULT_CONFIG
) -> EditBatch:
    """
    Compute the edits that fully link an IED to a data set.

    Args:
        ied: IED element to subscribe
        gse_control: Selected GSEControl
        dataset: DataSet of the control
        config: Settings (batch title, serviceType)

    Returns:
        EditBatch titled config.connect_title; empty if the IED has no
        LN0, no publisher is selected, or everything is linked already
    """
    batch = EditBatch(title=config.connect_title)

    ln0 = get_ln0(ied)
    if ln0 is None:
        logger.warning(f"IED {ied.get(ATTR_NAME)} has no LN0, nothing to subscribe")
        return batch

    publisher = get_ied_name(gse_control)
    if not publisher:
        return batch

    inputs = get_ln0_inputs(ied)
    inputs_exists = inputs is not None
    if not inputs_exists:
        inputs = create_element(ied, TAG_INPUTS)

    existing = get_extrefs(inputs)
    added: List[FcdaReference] = []

    for fcda in get_fcdas(dataset):
        reference = FcdaReference.from_element(fcda)
        if reference in added:
            continue
        if any(extref_matches(extref, reference, publisher) for extref in existing):
            continue

        extref = create_extref(ied, publisher, reference, config.service_type)
        added.append(reference)

        if inputs_exists:
            batch.append(Create(parent=inputs, element=extref))
        else:
            inputs.append(extref)

    if not inputs_exists and added:
        batch.append(Create(parent=ln0, element=inputs))

    logger.info(f"Subscribing {ied.get(ATTR_NAME)} to {publisher}: {len(added)} new ExtRefs")
    return batch


def create_extref(
        ied: Any,
        publisher: str,
        reference: FcdaReference,
        service_type: str
) -> Any:
    """
    Build a detached ExtRef linking one FCDA of a publisher.

    All six reference attributes are written, "" where the FCDA has none.

    Args:
        ied: Any element of the target document (for the namespace)
        publisher: Name of the publishing IED
        reference: Reference of the FCDA
        service_type: serviceType attribute value

    Returns:
        New ExtRef element
    """
    attributes = {ATTR_IED_NAME: publisher, ATTR_SERVICE_TYPE: service_type}
    attributes.update(reference.to_attributes())
    return create_element(ied, TAG_EXTREF, attributes)
