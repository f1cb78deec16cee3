"""
Integrity validation of bound variables.

This package classifies bound variable ids as healthy or broken against a live
variable store and summarizes the broken bindings for reporting.
"""

from varaudit.validation.integrity import (
    BrokenBindingRecord,
    BrokenReason,
    Classification,
    IntegrityReport,
    IntegrityValidator,
)
from varaudit.validation.summary import (
    BrokenSummary,
    NodeSummary,
    PropertySummary,
    plural_form,
)

__all__ = [
    "BrokenBindingRecord",
    "BrokenReason",
    "Classification",
    "IntegrityReport",
    "IntegrityValidator",
    "BrokenSummary",
    "NodeSummary",
    "PropertySummary",
    "plural_form",
]
