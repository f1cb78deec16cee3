"""
Collaborator contracts consumed by the varaudit engine.

The host application (or a snapshot of it) supplies the document tree and the
live variable store; results are handed to a reporting sink. The engine never
writes to the document itself.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from varaudit.core.nodes import DocumentNode
from varaudit.core.variables import Variable, VariableCollection

if TYPE_CHECKING:
    from varaudit.requests import AuditResult


@runtime_checkable
class DocumentProvider(Protocol):
    """Access to the roots of the current document view."""

    def current_selection_roots(self) -> Sequence[DocumentNode]: ...

    def current_page_roots(self) -> Sequence[DocumentNode]: ...


@runtime_checkable
class VariableStore(Protocol):
    """
    Live variable and collection lookup.

    The resolve methods return None for ids that do not exist and may raise for
    lookups that fail outright.
    """

    async def list_all_variables(self) -> Sequence[Variable]: ...

    async def list_collections(self) -> Sequence[VariableCollection]: ...

    async def resolve_variable(self, variable_id: str) -> Variable | None: ...

    async def resolve_collection(
        self, collection_id: str
    ) -> VariableCollection | None: ...


@runtime_checkable
class ReportingSink(Protocol):
    """Receives every finished run result for rendering or persistence."""

    def publish(self, result: "AuditResult") -> None: ...
