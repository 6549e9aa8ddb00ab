"""
SCL document utility functions.

This module provides the read-only navigation helpers used by the
classifier and the edit builders, plus element construction for new
Inputs and ExtRef elements. All lookups compare local names, so SCL
files with the standard namespace and bare test documents behave alike.

Functions:
    parse_scl: Parse an SCL file or string into an lxml tree
    document_root: Root element of the document holding an element
    get_ieds: Top-level IED elements in document order
    get_ied_name: Name of the IED owning an element
    get_inputs: Inputs elements below any LN0 or LN of an IED
    get_ln0: First LN0 of an IED
    get_ln0_inputs: First Inputs below any LN0 of an IED
    get_fcdas: FCDA elements of a data set
    get_extrefs: ExtRef elements below an Inputs element
    get_gse_controls: All GSEControl elements of a document
    get_dataset: DataSet referenced by a control block
    element_children: Element children, without comments
    create_element: New detached element in the document namespace
"""

import logging
from typing import Any, Dict, List, Optional, Union

from lxml import etree

from config.scl_schema import (
    ATTR_DAT_SET,
    ATTR_NAME,
    LOGICAL_NODE_TAGS,
    TAG_DATASET,
    TAG_EXTREF,
    TAG_FCDA,
    TAG_GSE_CONTROL,
    TAG_IED,
    TAG_INPUTS,
    TAG_LN0,
)
from core.identity import closest, iter_tag, local_name

logger = logging.getLogger(__name__)


def parse_scl(source: Union[str, bytes]) -> Any:
    """
    Parse an SCL document.

    Comments and whitespace are preserved so that a document handed on
    to another tool keeps its layout.

    Args:
        source: File path, or the XML content as bytes

    Returns:
        Root element of the parsed document
    """
    parser = etree.XMLParser(remove_blank_text=False, remove_comments=False)
    if isinstance(source, bytes):
        return etree.fromstring(source, parser)
    return etree.parse(source, parser).getroot()


def document_root(element: Any) -> Any:
    """Root element of the tree an element belongs to."""
    return element.getroottree().getroot()


def get_ieds(root: Any) -> List[Any]:
    """
    Get all top-level IEDs of a document.

    Only direct children of the root count, matching ':root > IED'.

    Args:
        root: Document root element

    Returns:
        IED elements in document order
    """
    return [child for child in element_children(root) if local_name(child) == TAG_IED]


def get_ied_name(element: Optional[Any]) -> Optional[str]:
    """Name of the IED owning an element, None if there is none."""
    if element is None:
        return None
    ied = closest(element, TAG_IED)
    if ied is None:
        return None
    return ied.get(ATTR_NAME)


def get_inputs(ied: Any) -> List[Any]:
    """
    Get all Inputs elements below any logical node of an IED.

    Args:
        ied: IED element

    Returns:
        Inputs elements whose parent is an LN0 or LN, in document order
    """
    inputs = []
    for element in iter_tag(ied, TAG_INPUTS):
        parent = element.getparent()
        if parent is not None and local_name(parent) in LOGICAL_NODE_TAGS:
            inputs.append(element)
    return inputs


def get_ln0(ied: Any) -> Optional[Any]:
    """First LN0 of an IED in document order, None if it has none."""
    return next(iter_tag(ied, TAG_LN0), None)


def get_ln0_inputs(ied: Any) -> Optional[Any]:
    """First Inputs whose parent is an LN0, None if there is none."""
    for element in get_inputs(ied):
        if local_name(element.getparent()) == TAG_LN0:
            return element
    return None


def get_fcdas(dataset: Optional[Any]) -> List[Any]:
    """FCDA elements of a data set; an absent data set has none."""
    if dataset is None:
        return []
    return list(iter_tag(dataset, TAG_FCDA))


def get_extrefs(inputs: Any) -> List[Any]:
    """ExtRef elements below an Inputs element, in document order."""
    return list(iter_tag(inputs, TAG_EXTREF))


def get_gse_controls(root: Any) -> List[Any]:
    """All GSEControl elements of a document, in document order."""
    return list(iter_tag(root, TAG_GSE_CONTROL))


def get_dataset(control: Any) -> Optional[Any]:
    """
    Resolve the DataSet referenced by a control block.

    The DataSet is looked up by its name among the siblings of the
    control, i.e. within the same logical node.

    Args:
        control: GSEControl (or other control block) element

    Returns:
        DataSet element, or None if datSet is missing or unresolved
    """
    name = control.get(ATTR_DAT_SET)
    parent = control.getparent()
    if not name or parent is None:
        return None

    for sibling in element_children(parent):
        if local_name(sibling) == TAG_DATASET and sibling.get(ATTR_NAME) == name:
            return sibling

    logger.warning(f"DataSet {name!r} of control {control.get(ATTR_NAME)!r} not found")
    return None


def element_children(element: Any) -> List[Any]:
    """Element children only; comments and processing instructions are skipped."""
    return [child for child in element if isinstance(child.tag, str)]


def create_element(root: Any, tag: str, attributes: Optional[Dict[str, str]] = None) -> Any:
    """
    Create a detached element in the namespace of a document.

    Args:
        root: Any element of the target document
        tag: Local name of the new element
        attributes: Attributes to set, in order

    Returns:
        New element, not attached to any parent
    """
    namespace = etree.QName(document_root(root)).namespace
    if namespace:
        element = etree.Element(f"{{{namespace}}}{tag}", nsmap={None: namespace})
    else:
        element = etree.Element(tag)

    for name, value in (attributes or {}).items():
        element.set(name, value)

    return element
