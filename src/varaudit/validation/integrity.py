"""
Integrity validation of variable bindings.

Every distinct variable id found by a binding scan is resolved against the live
variable store and classified as healthy or broken. Classification follows a
fixed precedence, first match wins:

1. the store does not know the id                      -> not-found
2. a local variable missing from the known-local ids   -> local-deleted
3. the owning collection is gone or cannot be resolved -> collection-deleted /
                                                          collection-unavailable
4. a remote variable without a library key             -> library-disabled
5. an alias in any mode that does not resolve          -> broken-alias
6. otherwise                                           -> healthy

Any other fault raised by the store while classifying an id becomes a
resolution-error for that id. Faults never escape a validation run.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from varaudit.core.variables import Variable, VariableAlias
from varaudit.host.protocols import VariableStore
from varaudit.scanning.walker import BindingRecord

logger = logging.getLogger(__name__)


class BrokenReason(Enum):
    """Why a variable binding is broken."""

    NOT_FOUND = "not-found"
    LOCAL_DELETED = "local-deleted"
    COLLECTION_DELETED = "collection-deleted"
    COLLECTION_UNAVAILABLE = "collection-unavailable"
    LIBRARY_DISABLED = "library-disabled"
    BROKEN_ALIAS = "broken-alias"
    RESOLUTION_ERROR = "resolution-error"


_REASON_TEMPLATES = {
    BrokenReason.NOT_FOUND: "variable not found",
    BrokenReason.LOCAL_DELETED: "local variable was deleted",
    BrokenReason.COLLECTION_DELETED: "collection '{detail}' was deleted",
    BrokenReason.COLLECTION_UNAVAILABLE: "collection is unavailable: {detail}",
    BrokenReason.LIBRARY_DISABLED: "library is disabled",
    BrokenReason.BROKEN_ALIAS: "alias points to missing variable '{detail}'",
    BrokenReason.RESOLUTION_ERROR: "resolution error: {detail}",
}


@dataclass(frozen=True)
class Classification:
    """Outcome of checking one variable id. `reason` is None for healthy ids."""

    variable_id: str
    reason: BrokenReason | None = None
    detail: str = ""

    @property
    def is_broken(self) -> bool:
        return self.reason is not None

    @property
    def reason_text(self) -> str:
        """Human-readable explanation of the classification."""
        if self.reason is None:
            return "healthy"
        return _REASON_TEMPLATES[self.reason].format(detail=self.detail)


@dataclass(frozen=True)
class BrokenBindingRecord:
    """A binding whose variable was classified as broken."""

    node_name: str
    node_id: str
    property_name: str
    variable_id: str
    reason: BrokenReason
    reason_text: str

    @classmethod
    def from_binding(
        cls, binding: BindingRecord, classification: Classification
    ) -> "BrokenBindingRecord":
        return cls(
            node_name=binding.node_name,
            node_id=binding.node_id,
            property_name=binding.property_name,
            variable_id=binding.variable_id,
            reason=classification.reason,
            reason_text=classification.reason_text,
        )


@dataclass
class IntegrityReport:
    """Result of one validation run."""

    broken_bindings: list[BrokenBindingRecord] = field(default_factory=list)
    classifications: dict[str, Classification] = field(default_factory=dict)

    @property
    def broken_ids(self) -> set[str]:
        return {
            variable_id
            for variable_id, classification in self.classifications.items()
            if classification.is_broken
        }

    @property
    def is_healthy(self) -> bool:
        return not self.broken_bindings


class IntegrityValidator:
    """
    Classifies bound variable ids against a variable store.

    Ids are checked one at a time; each await on the store completes before the
    next id is looked at, so the accumulators of a run have a single writer.

    Params:
        store: Variable store used to resolve variables and collections
        known_local_ids: Snapshot of the ids of all local variables; when given,
            a local variable missing from it is reported as deleted even if the
            store still resolves it
    """

    def __init__(
        self, store: VariableStore, known_local_ids: Iterable[str] | None = None
    ):
        self.store = store
        self.known_local_ids = (
            frozenset(known_local_ids) if known_local_ids is not None else None
        )

    async def validate(self, bindings: Sequence[BindingRecord]) -> IntegrityReport:
        """
        Classify every distinct bound id and collect the broken bindings.

        Params:
            bindings: Records from a binding-mode scan

        Returns:
            IntegrityReport with one broken record per broken binding, in scan
            order, and the classification of every distinct id
        """
        report = IntegrityReport()
        for binding in bindings:
            if binding.variable_id not in report.classifications:
                report.classifications[binding.variable_id] = await self.classify(
                    binding.variable_id
                )

        for binding in bindings:
            classification = report.classifications[binding.variable_id]
            if classification.is_broken:
                report.broken_bindings.append(
                    BrokenBindingRecord.from_binding(binding, classification)
                )

        logger.info(
            "Checked %d variables, %d broken",
            len(report.classifications),
            len(report.broken_ids),
        )
        return report

    async def classify(self, variable_id: str) -> Classification:
        """
        Classify a single variable id.

        Params:
            variable_id: Id of the bound variable

        Returns:
            Classification carrying the first matching broken reason, or none
        """
        try:
            return await self._classify(variable_id)
        except Exception as e:
            logger.warning("Failed to resolve variable %s: %s", variable_id, e)
            return Classification(variable_id, BrokenReason.RESOLUTION_ERROR, str(e))

    async def _classify(self, variable_id: str) -> Classification:
        variable = await self.store.resolve_variable(variable_id)
        if variable is None:
            return Classification(variable_id, BrokenReason.NOT_FOUND)

        if (
            not variable.remote
            and self.known_local_ids is not None
            and variable.id not in self.known_local_ids
        ):
            return Classification(variable_id, BrokenReason.LOCAL_DELETED)

        collection_id = variable.variable_collection_id
        try:
            collection = await self.store.resolve_collection(collection_id)
        except Exception as e:
            logger.warning("Failed to resolve collection %s: %s", collection_id, e)
            return Classification(
                variable_id, BrokenReason.COLLECTION_UNAVAILABLE, str(e)
            )
        if collection is None:
            return Classification(
                variable_id, BrokenReason.COLLECTION_DELETED, collection_id
            )

        if variable.remote and not variable.key:
            return Classification(variable_id, BrokenReason.LIBRARY_DISABLED)

        missing = await self._find_broken_alias(variable)
        if missing is not None:
            return Classification(variable_id, BrokenReason.BROKEN_ALIAS, missing)

        return Classification(variable_id)

    async def _find_broken_alias(self, variable: Variable) -> str | None:
        """Return the first alias target that does not resolve, across all modes."""
        for _mode_id, alias in variable.aliases():
            missing = await self._follow_alias(alias, frozenset({variable.id}))
            if missing is not None:
                return missing
        return None

    async def _follow_alias(
        self, alias: VariableAlias, chain: frozenset[str]
    ) -> str | None:
        # A chain that loops back never reaches a literal
        if alias.id in chain:
            return alias.id
        target = await self.store.resolve_variable(alias.id)
        if target is None:
            return alias.id
        for _mode_id, nested in target.aliases():
            missing = await self._follow_alias(nested, chain | {alias.id})
            if missing is not None:
                return missing
        return None
