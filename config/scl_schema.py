"""
SCL structure constants.

This module contains the tag names and attribute names used to navigate
an SCL document when matching GOOSE subscriptions. Tags are compared by
local name, so the namespace below is only needed when new elements are
created in a document that has no root namespace.

These constants are used by:
- core/fcda_reference.py: To build reference keys from FCDA/ExtRef elements
- utils/scl_utils.py: To walk IEDs, logical nodes and Inputs
- subscription/*: To create new Inputs and ExtRef elements
"""

from typing import Tuple


# =============================================================================
# Namespaces
# =============================================================================

SCL_NAMESPACE = "http://www.iec.ch/61850/2003/SCL"


# =============================================================================
# Element Tags
# =============================================================================

TAG_IED = "IED"
TAG_LDEVICE = "LDevice"
TAG_LN0 = "LN0"
TAG_LN = "LN"
TAG_INPUTS = "Inputs"
TAG_EXTREF = "ExtRef"
TAG_GSE_CONTROL = "GSEControl"
TAG_DATASET = "DataSet"
TAG_FCDA = "FCDA"

# Logical node tags that may own an Inputs element
LOGICAL_NODE_TAGS: Tuple[str, ...] = (TAG_LN0, TAG_LN)


# =============================================================================
# Reference Attributes
# =============================================================================

# Attributes shared by FCDA and ExtRef, in the order they form a reference key.
# The order is fixed; changing it changes every identity and log message.
FCDA_REFERENCES: Tuple[str, ...] = (
    "ldInst",
    "lnClass",
    "lnInst",
    "prefix",
    "doName",
    "daName",
)

ATTR_IED_NAME = "iedName"
ATTR_SERVICE_TYPE = "serviceType"
ATTR_NAME = "name"
ATTR_DAT_SET = "datSet"
