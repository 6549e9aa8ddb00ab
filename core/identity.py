"""
Structural identity of SCL elements.

An identity is a string built from names and reference attributes only,
never from object identity or position in memory. Two calls on the same
element of an unchanged document return the same string, and the string
can be resolved back to the element with find_by_identity(). This lets an
edit computed against one view of the document name its targets after
other edits have changed the tree.

Examples:
    IED       -> "IED2"
    LDevice   -> "IED2>LD1"
    LN0       -> "IED2>LD1>LLN0"
    LN        -> "IED2>LD1>P1 XCBR 1"
    Inputs    -> "IED2>LD1>LLN0>Inputs"
    ExtRef    -> "IED2>LD1>LLN0>Inputs>IED1 LD1/LLN0.Do1"
"""

from typing import Any, Iterator, Optional

from lxml import etree

from config.scl_schema import (
    ATTR_IED_NAME,
    ATTR_NAME,
    TAG_EXTREF,
    TAG_IED,
    TAG_INPUTS,
    TAG_LDEVICE,
    TAG_LN,
    TAG_LN0,
)
from core.errors import IdentityResolutionError


def local_name(element: Any) -> Optional[str]:
    """Tag of an element without its namespace, None for comments and PIs."""
    if not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname


def closest(element: Any, tag: str) -> Optional[Any]:
    """Nearest ancestor-or-self with the given local name."""
    current = element
    while current is not None:
        if local_name(current) == tag:
            return current
        current = current.getparent()
    return None


def iter_tag(root: Any, tag: str) -> Iterator[Any]:
    """Iterate all descendants-or-self of root with the given local name."""
    for element in root.iter(etree.Element):
        if local_name(element) == tag:
            yield element


def identity(element: Any) -> str:
    """
    Build the structural identity of an element.

    Total over any element: tags without a dedicated rule fall back to
    their parent's identity plus tag and position among same-tag siblings.

    Args:
        element: lxml element

    Returns:
        Identity string
    """
    tag = local_name(element)

    if tag == TAG_IED:
        return element.get(ATTR_NAME, "")

    if tag == TAG_LDEVICE:
        return f"{_ancestor_identity(element, TAG_IED)}>{element.get('inst', '')}"

    if tag in (TAG_LN0, TAG_LN):
        name = " ".join(
            part for part in (
                element.get("prefix", ""),
                element.get("lnClass", ""),
                element.get("inst", ""),
            ) if part
        )
        return f"{_ancestor_identity(element, TAG_LDEVICE)}>{name}"

    if tag == TAG_INPUTS:
        return f"{_parent_identity(element)}>{TAG_INPUTS}"

    if tag == TAG_EXTREF:
        ln = " ".join(
            part for part in (
                element.get("prefix", ""),
                element.get("lnClass", ""),
                element.get("lnInst", ""),
            ) if part
        )
        data = ".".join(
            part for part in (element.get("doName", ""), element.get("daName", "")) if part
        )
        reference = f"{element.get('ldInst', '')}/{ln}"
        if data:
            reference = f"{reference}.{data}"
        return f"{_parent_identity(element)}>{element.get(ATTR_IED_NAME, '')} {reference}"

    parent = element.getparent()
    if parent is None:
        return tag or ""
    siblings = [child for child in parent if local_name(child) == tag]
    return f"{identity(parent)}>{tag}[{siblings.index(element)}]"


def find_by_identity(root: Any, tag: str, key: str, strict: bool = False) -> Optional[Any]:
    """
    Locate the first element with the given tag and identity.

    Args:
        root: Element (or tree root) to search below
        tag: Local name of the element to find
        key: Identity string produced by identity()
        strict: If True, raise instead of returning None

    Returns:
        Matching element, or None when nothing matches and strict is False

    Raises:
        IdentityResolutionError: If strict is True and nothing matches
    """
    for element in iter_tag(root, tag):
        if identity(element) == key:
            return element

    if strict:
        raise IdentityResolutionError(tag, key)
    return None


def _ancestor_identity(element: Any, tag: str) -> str:
    ancestor = closest(element.getparent(), tag) if element.getparent() is not None else None
    return identity(ancestor) if ancestor is not None else ""


def _parent_identity(element: Any) -> str:
    parent = element.getparent()
    return identity(parent) if parent is not None else ""
