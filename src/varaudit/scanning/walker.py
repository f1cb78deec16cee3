"""
Depth-first tree walking over document nodes.

The walker applies the reference extractor to every node of one or more root
subtrees in pre-order and accumulates the results in one of two ways:

- usage mode keeps a deduplicated set of referenced variable ids
- binding mode keeps every discovery together with its source node and property

Each call builds fresh accumulators, so scans are independent and restartable.
"""

import asyncio
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from varaudit.core.nodes import DocumentNode, VariableReference
from varaudit.core.types import UsedIdSet
from varaudit.scanning.extractor import extract_references

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BindingRecord:
    """One variable reference discovered on a node during a binding scan."""

    node_id: str
    node_name: str
    property_name: str
    variable_id: str


def walk(root: DocumentNode) -> Iterator[DocumentNode]:
    """
    Yield a root and all its descendants in depth-first pre-order.

    Children are visited in their original order. An explicit stack is used so
    deep trees do not hit the recursion limit.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        if node.has_children():
            stack.extend(reversed(node.children))


def iter_references(
    roots: Iterable[DocumentNode],
) -> Iterator[tuple[DocumentNode, str, VariableReference]]:
    """Yield (node, property_name, reference) for every binding under the roots."""
    for root in roots:
        for node in walk(root):
            for property_name, reference in extract_references(node):
                yield node, property_name, reference


def collect_used_ids(roots: Iterable[DocumentNode]) -> UsedIdSet:
    """
    Collect the ids of all variables referenced under the given roots.

    Params:
        roots: Root nodes to scan, e.g. a page's direct children

    Returns:
        Set of referenced variable ids
    """
    used_ids: UsedIdSet = set()
    for root in roots:
        _merge_used_ids(root, used_ids)
    return used_ids


async def collect_used_ids_async(
    roots: Iterable[DocumentNode], yield_between_roots: bool = True
) -> UsedIdSet:
    """
    Collect referenced variable ids, yielding to the event loop between roots.

    Root *i* is fully scanned and merged before root *i+1* starts, so the result
    is identical to `collect_used_ids`. The yield only keeps the host loop
    responsive while large pages are scanned.

    Params:
        roots: Root nodes to scan
        yield_between_roots: Suspend once before scanning each root

    Returns:
        Set of referenced variable ids
    """
    used_ids: UsedIdSet = set()
    for root in roots:
        if yield_between_roots:
            await asyncio.sleep(0)
        _merge_used_ids(root, used_ids)
    logger.debug("Collected %d used variable ids", len(used_ids))
    return used_ids


def collect_bindings(roots: Iterable[DocumentNode]) -> list[BindingRecord]:
    """
    Collect every variable binding under the given roots with its source context.

    Repeated references to the same variable are all kept, one record per
    discovery, in traversal order.

    Params:
        roots: Root nodes to scan, e.g. the current selection

    Returns:
        List of binding records in discovery order
    """
    return [
        BindingRecord(
            node_id=node.id,
            node_name=node.name,
            property_name=property_name,
            variable_id=reference.id,
        )
        for node, property_name, reference in iter_references(roots)
    ]


def _merge_used_ids(root: DocumentNode, used_ids: UsedIdSet) -> None:
    for _node, _property, reference in iter_references([root]):
        used_ids.add(reference.id)
