"""
Document scanning for variable references.

This package provides the per-node reference extractor and the tree walker that
accumulates references in usage mode (id set) or binding mode (records).
"""

from varaudit.scanning.extractor import extract_references
from varaudit.scanning.walker import (
    BindingRecord,
    collect_bindings,
    collect_used_ids,
    collect_used_ids_async,
    iter_references,
    walk,
)

__all__ = [
    "extract_references",
    "BindingRecord",
    "collect_bindings",
    "collect_used_ids",
    "collect_used_ids_async",
    "iter_references",
    "walk",
]
