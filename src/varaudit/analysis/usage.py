"""
Usage aggregation for a variable collection.

Combines the ids referenced under a set of roots with the forced-used naming
rule to split a collection's variables into used and unused.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from varaudit.analysis.sorting import sort_variables
from varaudit.config import AuditConfig
from varaudit.core.nodes import DocumentNode
from varaudit.core.types import UsedIdSet
from varaudit.core.variables import Variable
from varaudit.scanning.walker import collect_used_ids_async

logger = logging.getLogger(__name__)


@dataclass
class UsageReport:
    """Used/unused partition of one collection's variables."""

    collection_id: str
    used: list[Variable] = field(default_factory=list)
    unused: list[Variable] = field(default_factory=list)
    used_ids: UsedIdSet = field(default_factory=set)
    all_sorted: list[Variable] | None = None

    @property
    def unused_names(self) -> list[str]:
        return [variable.name for variable in self.unused]

    @property
    def all_sorted_names(self) -> list[str] | None:
        if self.all_sorted is None:
            return None
        return [variable.name for variable in self.all_sorted]


def apply_forced_used(
    collection_variables: Iterable[Variable],
    used_ids: UsedIdSet,
    markers: tuple[str, ...],
) -> list[str]:
    """
    Add the ids of variables whose names carry a forced-used marker.

    Font-family tokens are usually referenced indirectly through text styles, so
    a tree scan alone would report them as unused. The set is only grown.

    Params:
        collection_variables: Variables of the target collection
        used_ids: Id set to extend in place
        markers: Case-insensitive name substrings that force a variable used

    Returns:
        Ids of the variables that were forced
    """
    forced = [
        variable.id
        for variable in collection_variables
        if variable.is_forced_used(markers)
    ]
    used_ids.update(forced)
    return forced


async def analyze_usage(
    variables: Sequence[Variable],
    collection_id: str,
    roots: Iterable[DocumentNode],
    include_all: bool = False,
    config: AuditConfig | None = None,
) -> UsageReport:
    """
    Partition a collection's variables into used and unused.

    Params:
        variables: All local variables known to the store
        collection_id: Id of the collection to analyze
        roots: Root nodes to scan, e.g. the current page's children
        include_all: Also return the whole collection in structural order
        config: Run configuration, defaults to `AuditConfig()`

    Returns:
        UsageReport for the collection; variables keep their store order within
        `used` and `unused`
    """
    config = config or AuditConfig()

    used_ids = await collect_used_ids_async(
        roots, yield_between_roots=config.yield_between_roots
    )
    for used_id in sorted(used_ids):
        logger.debug("Used variable id: %s", used_id)

    collection_variables = [
        variable
        for variable in variables
        if variable.variable_collection_id == collection_id
    ]
    forced = apply_forced_used(
        collection_variables, used_ids, config.forced_used_markers
    )
    if forced:
        logger.debug("Forced %d variables to used by name marker", len(forced))

    report = UsageReport(collection_id=collection_id, used_ids=used_ids)
    for variable in collection_variables:
        if variable.id in used_ids:
            report.used.append(variable)
        else:
            report.unused.append(variable)

    if include_all:
        report.all_sorted = sort_variables(collection_variables, config.taxonomy)

    logger.info(
        "Collection %s: %d used, %d unused",
        collection_id,
        len(report.used),
        len(report.unused),
    )
    return report
