"""
Exception classes for varaudit runs.

This module defines specific exception types for the run-level conditions that
can occur while scanning a document or validating its variable bindings.
Per-variable store faults are not exceptions at this level: the integrity
validator turns them into classifications.
"""


class VarAuditError(Exception):
    """Base exception for all varaudit errors."""

    pass


class EmptySelectionError(VarAuditError):
    """Raised when a binding check is requested with nothing selected."""

    def __init__(self, message: str = "Nothing selected"):
        """
        Initialize the exception.

        Params:
            message: User-facing description of the empty input
        """
        super().__init__(message)


class DocumentAccessError(VarAuditError):
    """Raised when the document tree cannot be read."""

    def __init__(self, source: str, reason: str):
        """
        Initialize the exception.

        Params:
            source: Which roots were requested (e.g. "selection", "page")
            reason: The underlying reason for the failure
        """
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot read document {source}: {reason}")


class UnknownCollectionError(VarAuditError):
    """Raised when a collection analysis targets a collection the store does not list."""

    def __init__(self, collection_id: str):
        """
        Initialize the exception.

        Params:
            collection_id: The id that did not match any collection
        """
        self.collection_id = collection_id
        super().__init__(f"Unknown variable collection '{collection_id}'")


class RequestValidationError(VarAuditError):
    """Raised when an incoming request message is malformed."""

    def __init__(self, reason: str):
        """
        Initialize the exception.

        Params:
            reason: Why the message was rejected
        """
        self.reason = reason
        super().__init__(f"Invalid request: {reason}")


class AuditConfigError(VarAuditError):
    """Raised when a configuration mapping contains an invalid entry."""

    def __init__(self, key: str, reason: str):
        """
        Initialize the exception.

        Params:
            key: The offending configuration key
            reason: Why the entry is invalid
        """
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid configuration '{key}': {reason}")
