"""
varaudit exception classes.

This package provides all exception types used throughout varaudit for
consistent error handling and reporting.
"""

from varaudit.exceptions.core import (
    AuditConfigError,
    DocumentAccessError,
    EmptySelectionError,
    RequestValidationError,
    UnknownCollectionError,
    VarAuditError,
)

__all__ = [
    "VarAuditError",
    "AuditConfigError",
    "DocumentAccessError",
    "EmptySelectionError",
    "RequestValidationError",
    "UnknownCollectionError",
]
