"""
Core type definitions for the varaudit engine.

This module contains type aliases shared by the scanning, analysis and
validation layers.
"""

from typing import Any

VariableId = str

UsedIdSet = set[VariableId]

RawMessage = dict[str, Any]

# Property names under which paint color bindings are reported
FILL_COLOR_PROPERTY = "fills.color"
STROKE_COLOR_PROPERTY = "strokes.color"

VARIABLE_ALIAS = "VARIABLE_ALIAS"
