"""
Host collaborators: contracts and in-memory snapshot implementations.
"""

from varaudit.host.protocols import DocumentProvider, ReportingSink, VariableStore
from varaudit.host.snapshot import (
    Snapshot,
    SnapshotDocument,
    SnapshotVariableStore,
    load_snapshot,
)

__all__ = [
    "DocumentProvider",
    "ReportingSink",
    "VariableStore",
    "Snapshot",
    "SnapshotDocument",
    "SnapshotVariableStore",
    "load_snapshot",
]
