"""
Collection analysis: usage aggregation and structural ordering.
"""

from varaudit.analysis.sorting import (
    SortKey,
    get_sort_key,
    sort_variable_names,
    sort_variables,
)
from varaudit.analysis.usage import UsageReport, analyze_usage, apply_forced_used

__all__ = [
    "SortKey",
    "get_sort_key",
    "sort_variable_names",
    "sort_variables",
    "UsageReport",
    "analyze_usage",
    "apply_forced_used",
]
