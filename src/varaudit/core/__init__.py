"""
Core varaudit components.

This package provides the document and variable models shared by the scanning,
analysis and validation layers, together with common type definitions.
"""

from varaudit.core.nodes import DocumentNode, Paint, VariableReference
from varaudit.core.types import (
    FILL_COLOR_PROPERTY,
    STROKE_COLOR_PROPERTY,
    UsedIdSet,
    VariableId,
)
from varaudit.core.variables import (
    CollectionChoice,
    Color,
    Variable,
    VariableAlias,
    VariableCollection,
    VariableMode,
)

__all__ = [
    "DocumentNode",
    "Paint",
    "VariableReference",
    "Variable",
    "VariableAlias",
    "VariableCollection",
    "VariableMode",
    "CollectionChoice",
    "Color",
    "VariableId",
    "UsedIdSet",
    "FILL_COLOR_PROPERTY",
    "STROKE_COLOR_PROPERTY",
]
