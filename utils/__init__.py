"""
Utilities package for GOOSE subscription reconciliation.

This package contains the SCL navigation helpers shared by the
classifier and the edit builders, and a reference action sink that
applies edit batches to an in-memory document.

Modules:
    scl_utils: Read-only SCL navigation and element construction
    edit_utils: Applying edit batches to an lxml document

Usage:
    from utils import scl_utils, edit_utils

    root = scl_utils.parse_scl("station.scd")
    for ied in scl_utils.get_ieds(root):
        inputs = scl_utils.get_inputs(ied)
"""

from utils.scl_utils import (
    parse_scl,
    document_root,
    get_ieds,
    get_ied_name,
    get_inputs,
    get_ln0,
    get_ln0_inputs,
    get_fcdas,
    get_extrefs,
    get_gse_controls,
    get_dataset,
    element_children,
    create_element,
)

from utils.edit_utils import (
    apply_edit_batch,
    DocumentEditor,
)

__all__ = [
    # SCL navigation
    "parse_scl",
    "document_root",
    "get_ieds",
    "get_ied_name",
    "get_inputs",
    "get_ln0",
    "get_ln0_inputs",
    "get_fcdas",
    "get_extrefs",
    "get_gse_controls",
    "get_dataset",
    "element_children",
    "create_element",
    # Edit application
    "apply_edit_batch",
    "DocumentEditor",
]
