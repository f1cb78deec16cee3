"""
Request surface and run orchestration.

Two kinds of request are served, each producing exactly one `AuditResult`:

- "analyze-collection": which variables of a collection are unused on the
  current page, optionally with the whole collection in structural order
- "check-broken-variables": which bindings under the current selection point
  at broken variables

`AuditSession` wires the document provider, variable store and an optional
reporting sink together for a host; every run builds its own accumulators.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Annotated, Literal

from pydantic import AliasChoices, BaseModel, Field, TypeAdapter, ValidationError

from varaudit.analysis.usage import analyze_usage
from varaudit.config import AuditConfig
from varaudit.core.nodes import DocumentNode
from varaudit.core.types import RawMessage
from varaudit.core.variables import CollectionChoice
from varaudit.exceptions import (
    DocumentAccessError,
    EmptySelectionError,
    RequestValidationError,
    UnknownCollectionError,
    VarAuditError,
)
from varaudit.host.protocols import DocumentProvider, ReportingSink, VariableStore
from varaudit.scanning.walker import collect_bindings
from varaudit.validation.integrity import BrokenBindingRecord, IntegrityValidator
from varaudit.validation.summary import BrokenSummary

logger = logging.getLogger(__name__)

ALL_USED_MESSAGE = "✅ All variables are used"
NOTHING_SELECTED_MESSAGE = "⚠️ Nothing selected"


class AnalyzeCollectionRequest(BaseModel):
    """Find unused variables of one collection on the current page."""

    type: Literal["analyze-collection", "collectionSelected"] = "analyze-collection"
    collection_id: str = Field(
        validation_alias=AliasChoices("collection_id", "collectionId")
    )
    include_all: bool = Field(
        default=False,
        validation_alias=AliasChoices("include_all", "includeAll", "showAll"),
    )


class CheckBrokenVariablesRequest(BaseModel):
    """Check the bindings under the current selection for broken variables."""

    type: Literal["check-broken-variables", "checkBrokenVariables"] = (
        "check-broken-variables"
    )


AuditRequest = Annotated[
    AnalyzeCollectionRequest | CheckBrokenVariablesRequest,
    Field(discriminator="type"),
]

_request_adapter = TypeAdapter(AuditRequest)


def parse_request(
    message: RawMessage,
) -> AnalyzeCollectionRequest | CheckBrokenVariablesRequest:
    """
    Validate a raw request message.

    Params:
        message: Mapping with a `type` key and the request's fields

    Returns:
        The parsed request model

    Raises:
        RequestValidationError: If the message has an unknown type or bad fields
    """
    try:
        return _request_adapter.validate_python(message)
    except ValidationError as e:
        raise RequestValidationError(str(e)) from e


@dataclass
class AuditResult:
    """The single result structure produced by one run."""

    kind: str
    status: Literal["ok", "empty-selection"] = "ok"
    unused_list: list[str] = field(default_factory=list)
    all_sorted_list: list[str] | None = None
    broken_summary: BrokenSummary | None = None
    broken_bindings: list[BrokenBindingRecord] = field(default_factory=list)
    message: str = ""


def render_unused(names: Sequence[str]) -> str:
    if not names:
        return ALL_USED_MESSAGE
    return _bulleted("🟡 Unused variables:", names)


def render_all_sorted(names: Sequence[str]) -> str:
    return _bulleted("📦 All variables (structural order):", names)


def _bulleted(title: str, items: Sequence[str]) -> str:
    return title + "".join(f"\n• {item}" for item in items)


async def list_collection_choices(store: VariableStore) -> list[CollectionChoice]:
    """Return the local collections as picker entries."""
    collections = await store.list_collections()
    return [CollectionChoice.from_collection(collection) for collection in collections]


class AuditSession:
    """
    Serves analysis and validation requests against one host.

    Params:
        document: Document provider for the current page and selection
        store: Variable store for listing and resolving variables
        config: Run configuration shared by every run of this session
        sink: Optional reporting sink receiving every result
    """

    def __init__(
        self,
        document: DocumentProvider,
        store: VariableStore,
        config: AuditConfig | None = None,
        sink: ReportingSink | None = None,
    ):
        self.document = document
        self.store = store
        self.config = config or AuditConfig()
        self.sink = sink

    async def list_collection_choices(self) -> list[CollectionChoice]:
        return await list_collection_choices(self.store)

    async def handle(self, message: RawMessage) -> AuditResult:
        """
        Parse and serve one request message.

        The empty-selection condition is reported as a result with status
        `empty-selection`; other run failures propagate.

        Raises:
            RequestValidationError: If the message is malformed
            DocumentAccessError: If the document tree cannot be read
            UnknownCollectionError: If the requested collection does not exist
        """
        request = parse_request(message)
        if isinstance(request, AnalyzeCollectionRequest):
            return await self.analyze_collection(
                request.collection_id, request.include_all
            )

        try:
            return await self.check_broken_variables()
        except EmptySelectionError:
            return self._finish(
                AuditResult(
                    kind="check-broken-variables",
                    status="empty-selection",
                    message=NOTHING_SELECTED_MESSAGE,
                )
            )

    async def analyze_collection(
        self, collection_id: str, include_all: bool = False
    ) -> AuditResult:
        """
        Report the unused variables of a collection on the current page.

        Params:
            collection_id: Id of the local collection to analyze
            include_all: Also list the whole collection in structural order

        Returns:
            AuditResult with `unused_list` and, when requested, `all_sorted_list`
        """
        collections = await self.store.list_collections()
        if not any(collection.id == collection_id for collection in collections):
            raise UnknownCollectionError(collection_id)

        variables = await self.store.list_all_variables()
        for variable in variables:
            logger.debug("Local variable: %s (%s)", variable.name, variable.id)

        roots = self._read_roots("page")
        report = await analyze_usage(
            variables, collection_id, roots, include_all, self.config
        )

        result = AuditResult(
            kind="analyze-collection",
            unused_list=report.unused_names,
            all_sorted_list=report.all_sorted_names,
        )
        sections = []
        if result.all_sorted_list is not None:
            sections.append(render_all_sorted(result.all_sorted_list))
        sections.append(render_unused(result.unused_list))
        result.message = "\n\n".join(sections)
        return self._finish(result)

    async def check_broken_variables(self) -> AuditResult:
        """
        Report the broken variable bindings under the current selection.

        Returns:
            AuditResult with `broken_bindings` and `broken_summary`

        Raises:
            EmptySelectionError: If nothing is selected; no validation is run
        """
        roots = self._read_roots("selection")
        if not roots:
            raise EmptySelectionError()

        bindings = collect_bindings(roots)
        validator = IntegrityValidator(
            self.store, known_local_ids=await self._known_local_ids()
        )
        report = await validator.validate(bindings)

        summary = BrokenSummary.from_records(report.broken_bindings)
        return self._finish(
            AuditResult(
                kind="check-broken-variables",
                broken_summary=summary,
                broken_bindings=report.broken_bindings,
                message=summary.render(self.config.plural_forms),
            )
        )

    async def _known_local_ids(self) -> list[str] | None:
        # Without a listing only the local-deleted check is skipped
        try:
            variables = await self.store.list_all_variables()
        except Exception as e:
            logger.warning("Failed to list local variables: %s", e)
            return None
        return [variable.id for variable in variables]

    def _read_roots(self, source: Literal["page", "selection"]) -> list[DocumentNode]:
        try:
            if source == "page":
                return list(self.document.current_page_roots())
            return list(self.document.current_selection_roots())
        except VarAuditError:
            raise
        except Exception as e:
            raise DocumentAccessError(source, str(e)) from e

    def _finish(self, result: AuditResult) -> AuditResult:
        logger.info("Finished %s run with status %s", result.kind, result.status)
        if self.sink is not None:
            self.sink.publish(result)
        return result
