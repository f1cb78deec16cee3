"""
varaudit - design variable usage and binding integrity analysis

varaudit scans a design document tree to find which variables of a collection
are unused and which bound variables are broken.
"""

from importlib.metadata import version

from varaudit.analysis import analyze_usage, get_sort_key, sort_variable_names
from varaudit.config import AuditConfig, SortTaxonomy
from varaudit.core import DocumentNode, Variable, VariableCollection
from varaudit.requests import AuditResult, AuditSession, parse_request
from varaudit.validation import IntegrityValidator

__version__ = version("varaudit")

__all__ = [
    "__version__",
    "AuditConfig",
    "AuditResult",
    "AuditSession",
    "DocumentNode",
    "IntegrityValidator",
    "SortTaxonomy",
    "Variable",
    "VariableCollection",
    "analyze_usage",
    "get_sort_key",
    "parse_request",
    "sort_variable_names",
]
