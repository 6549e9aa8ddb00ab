"""
Selection validation for GOOSE subscription reconciliation.

This module checks a publisher selection before IEDs are classified
against it. Problems are collected, never raised: the classifier
degrades gracefully on missing structure, and validation only tells the
caller what the classification will be based on.

Checks:
- The control block belongs to a named IED
- The publisher IED name is unique in the document
- The control references a DataSet, and the DataSet is present
- The DataSet holds at least one FCDA
- Every FCDA carries ldInst

Usage:
    from config.validation import validate_selection

    result = validate_selection(root, gse_control, dataset)
    if not result.is_valid:
        for error in result.errors:
            handle_error(error)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

logger = logging.getLogger(__name__)


# =============================================================================
# Validation Result
# =============================================================================

@dataclass
class ValidationResult:
    """
    Results of selection validation.

    Attributes:
        errors: Problems that make the selection unusable
        warnings: Problems that change how IEDs will be classified
        info: Dictionary of facts gathered while validating
        checks_performed: Set of validation check names that were run
    """
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    info: Dict[str, Any] = field(default_factory=dict)
    checks_performed: Set[str] = field(default_factory=set)

    @property
    def is_valid(self) -> bool:
        """True if no errors (warnings are acceptable)."""
        return len(self.errors) == 0

    def is_valid_strict(self) -> bool:
        """True if no errors and no warnings."""
        return len(self.errors) == 0 and len(self.warnings) == 0

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def add_info(self, key: str, value: Any) -> None:
        self.info[key] = value

    def mark_check(self, check_name: str) -> None:
        self.checks_performed.add(check_name)

    def summary(self, verbose: bool = False) -> str:
        """
        Get a summary of validation results.

        Args:
            verbose: If True, include all info details

        Returns:
            Formatted summary string
        """
        lines = []

        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for error in self.errors:
                lines.append(f"  ✗ {error}")

        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for warning in self.warnings:
                lines.append(f"  ⚠ {warning}")

        if not self.errors and not self.warnings:
            lines.append("✓ Selection validated successfully")

        if verbose and self.info:
            lines.append("")
            lines.append("DETAILS:")
            for key, value in sorted(self.info.items()):
                lines.append(f"  {key}: {value}")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "is_valid": self.is_valid,
            "errors": self.errors,
            "warnings": self.warnings,
            "info": self.info,
            "checks_performed": sorted(self.checks_performed),
        }


# =============================================================================
# Main Validation Functions
# =============================================================================

def validate_selection(
        root: Any,
        gse_control: Optional[Any],
        dataset: Optional[Any]
) -> ValidationResult:
    """
    Validate a publisher selection against a document.

    Args:
        root: Document root element
        gse_control: Selected GSEControl (None means nothing selected)
        dataset: DataSet of the control, None if absent

    Returns:
        ValidationResult with any errors/warnings found

    Example:
        >>> result = validate_selection(root, gse_control, dataset)
        >>> if result.warnings:
        ...     print(result.summary())
    """
    # Imported here so config stays importable without the utils package
    from utils.scl_utils import get_fcdas, get_ied_name, get_ieds

    result = ValidationResult()

    result.mark_check("publisher")
    if gse_control is None:
        result.add_info("selection", "none")
        return result

    publisher = get_ied_name(gse_control)
    if not publisher:
        result.add_error(
            f"Control {gse_control.get('name')!r} does not belong to a named IED"
        )
    else:
        result.add_info("publisher", publisher)
        duplicates = [ied for ied in get_ieds(root) if ied.get("name") == publisher]
        if len(duplicates) > 1:
            result.add_warning(
                f"IED name {publisher!r} is used by {len(duplicates)} IEDs; "
                f"all of them are excluded from classification"
            )

    result.mark_check("dataset")
    if dataset is None:
        if gse_control.get("datSet"):
            result.add_warning(
                f"DataSet {gse_control.get('datSet')!r} not found; "
                f"every IED will be classified as subscribed"
            )
        else:
            result.add_warning("Control has no datSet; every IED will be classified as subscribed")
        return result

    result.mark_check("fcdas")
    fcdas = get_fcdas(dataset)
    result.add_info("fcdas", len(fcdas))
    if not fcdas:
        result.add_warning(
            f"DataSet {dataset.get('name')!r} is empty; "
            f"every IED will be classified as subscribed"
        )

    for index, fcda in enumerate(fcdas):
        if not fcda.get("ldInst"):
            result.add_warning(f"FCDA {index} of DataSet {dataset.get('name')!r} has no ldInst")

    return result
