"""
In-memory collaborators built from a host export.

`SnapshotDocument` and `SnapshotVariableStore` implement the document provider
and variable store contracts over pydantic models, so analysis and validation
can run against an exported JSON snapshot instead of a live host.

Snapshot format (camelCase keys as exported by the host are accepted):

    {
        "page": [<node>, ...],
        "selection": [<node id>, ...],
        "collections": [{"id": ..., "name": ...}, ...],
        "variables": [{"id": ..., "name": ..., "variableCollectionId": ...,
                       "valuesByMode": {...}}, ...]
    }
"""

from collections.abc import Iterable, Sequence
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from varaudit.core.nodes import DocumentNode
from varaudit.core.variables import Variable, VariableCollection
from varaudit.exceptions import DocumentAccessError
from varaudit.scanning.walker import walk


class SnapshotDocument:
    """Document provider over an in-memory page and selection."""

    def __init__(
        self,
        page: Sequence[DocumentNode],
        selection_ids: Iterable[str] = (),
    ):
        self.page = list(page)
        self._nodes_by_id = {
            node.id: node for root in self.page for node in walk(root)
        }
        self.selection_ids = list(selection_ids)

    def select(self, *node_ids: str) -> None:
        """Replace the current selection."""
        self.selection_ids = list(node_ids)

    def current_page_roots(self) -> list[DocumentNode]:
        return list(self.page)

    def current_selection_roots(self) -> list[DocumentNode]:
        roots = []
        for node_id in self.selection_ids:
            node = self._nodes_by_id.get(node_id)
            if node is None:
                raise DocumentAccessError(
                    "selection", f"node '{node_id}' is not on the page"
                )
            roots.append(node)
        return roots


class SnapshotVariableStore:
    """
    Variable store over in-memory variables and collections.

    Remote library variables can be registered alongside local ones; only
    non-remote variables are listed by `list_all_variables`, while every
    registered variable resolves by id.
    """

    def __init__(
        self,
        variables: Iterable[Variable] = (),
        collections: Iterable[VariableCollection] = (),
    ):
        self._variables = {variable.id: variable for variable in variables}
        self._collections = {collection.id: collection for collection in collections}

    def add_variable(self, variable: Variable) -> None:
        self._variables[variable.id] = variable

    def remove_variable(self, variable_id: str) -> None:
        self._variables.pop(variable_id, None)

    def add_collection(self, collection: VariableCollection) -> None:
        self._collections[collection.id] = collection

    def remove_collection(self, collection_id: str) -> None:
        self._collections.pop(collection_id, None)

    async def list_all_variables(self) -> list[Variable]:
        return [variable for variable in self._variables.values() if not variable.remote]

    async def list_collections(self) -> list[VariableCollection]:
        return [
            collection
            for collection in self._collections.values()
            if not collection.remote
        ]

    async def resolve_variable(self, variable_id: str) -> Variable | None:
        return self._variables.get(variable_id)

    async def resolve_collection(self, collection_id: str) -> VariableCollection | None:
        return self._collections.get(collection_id)


class Snapshot(BaseModel):
    """Validated host export."""

    page: list[DocumentNode] = Field(default_factory=list)
    selection: list[str] = Field(default_factory=list)
    collections: list[VariableCollection] = Field(default_factory=list)
    variables: list[Variable] = Field(default_factory=list)


def load_snapshot(
    data: dict[str, Any],
) -> tuple[SnapshotDocument, SnapshotVariableStore]:
    """
    Build snapshot collaborators from an exported mapping.

    Params:
        data: Decoded JSON export

    Returns:
        Tuple of (document provider, variable store)

    Raises:
        DocumentAccessError: If the export does not match the snapshot format
    """
    try:
        snapshot = Snapshot.model_validate(data)
    except ValidationError as e:
        raise DocumentAccessError("snapshot", str(e)) from e

    document = SnapshotDocument(snapshot.page, snapshot.selection)
    store = SnapshotVariableStore(snapshot.variables, snapshot.collections)
    return document, store
