"""
FCDA reference keys.

This module contains the FcdaReference dataclass which holds the six
reference attributes shared by FCDA and ExtRef elements, and the
matching rules used to decide whether an ExtRef links a given FCDA.

Matching is a field-by-field comparison, not a selector query:
- absent on both sides: the field matches
- present on one side only: no match
- present on both sides: the values must be equal

An attribute with an empty value counts as absent. New ExtRefs are
written with "" for every attribute their FCDA does not carry, and
they must keep matching that FCDA afterwards.
"""

from dataclasses import astuple, dataclass
from typing import Any, Dict, Optional, Tuple

from config.scl_schema import ATTR_IED_NAME, FCDA_REFERENCES


@dataclass(frozen=True)
class FcdaReference:
    """
    Reference to one data attribute, as carried by FCDA and ExtRef.

    Field order follows FCDA_REFERENCES and is the order of the key.

    Attributes:
        ld_inst: Logical device instance (ldInst)
        ln_class: Logical node class (lnClass)
        ln_inst: Logical node instance (lnInst)
        prefix: Logical node prefix (prefix)
        do_name: Data object name (doName)
        da_name: Data attribute name (daName)

    Example:
        >>> ref = FcdaReference(ld_inst="LD1", ln_class="LLN0", do_name="Do1")
        >>> ref.to_selector()
        '[ldInst="LD1"][lnClass="LLN0"][doName="Do1"]'
    """
    ld_inst: Optional[str] = None
    ln_class: Optional[str] = None
    ln_inst: Optional[str] = None
    prefix: Optional[str] = None
    do_name: Optional[str] = None
    da_name: Optional[str] = None

    @classmethod
    def from_element(cls, element: Any) -> 'FcdaReference':
        """
        Read the reference attributes of an FCDA or ExtRef element.

        Missing and empty attributes both become None.
        """
        return cls(*(element.get(name) or None for name in FCDA_REFERENCES))

    @property
    def key(self) -> Tuple[Optional[str], ...]:
        """Ordered tuple of attribute values, None where absent."""
        return astuple(self)

    def matches(self, other: 'FcdaReference') -> bool:
        """True if every field is absent on both sides or equal on both."""
        return self.key == other.key

    def to_attributes(self) -> Dict[str, str]:
        """SCL attribute mapping with "" for absent fields, in key order."""
        return {
            name: value or ""
            for name, value in zip(FCDA_REFERENCES, self.key)
        }

    def to_selector(self) -> str:
        """
        Render the reference as a compound selector for log messages.

        Absent fields render as nothing, so two references with
        different absent fields can render the same way. Never match on
        this string; use matches() instead.
        """
        return "".join(
            f'[{name}="{value}"]'
            for name, value in zip(FCDA_REFERENCES, self.key)
            if value
        )

    def __str__(self) -> str:
        return self.to_selector() or "[]"


def reference_key(element: Any) -> Tuple[Optional[str], ...]:
    """Canonical matching key of an FCDA or ExtRef element."""
    return FcdaReference.from_element(element).key


def extref_matches(extref: Any, reference: FcdaReference, ied_name: Optional[str]) -> bool:
    """
    Check whether an ExtRef links the given FCDA reference of a publisher.

    Args:
        extref: ExtRef element
        reference: Reference of the published FCDA
        ied_name: Name of the publishing IED

    Returns:
        True if iedName equals the publisher and all reference fields match
    """
    if not ied_name or extref.get(ATTR_IED_NAME) != ied_name:
        return False
    return FcdaReference.from_element(extref).matches(reference)
