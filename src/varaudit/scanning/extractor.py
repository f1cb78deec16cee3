"""
Reference extraction for a single document node.

The extractor looks at one node only and never recurses into children. It
reports every variable reference bound to the node's generic binding map and
to the color of each of its fills and strokes.
"""

from collections.abc import Iterator

from varaudit.core.nodes import DocumentNode, Paint, VariableReference
from varaudit.core.types import FILL_COLOR_PROPERTY, STROKE_COLOR_PROPERTY


def extract_references(node: DocumentNode) -> list[tuple[str, VariableReference]]:
    """
    Extract the variable references bound directly to a node.

    Generic bindings yield one reference per scalar value and one per element
    when the value is a list (typography properties bound per character range).
    Paint colors are reported under `fills.color` and `strokes.color`.
    References without an id are dropped.

    Params:
        node: The document node to inspect

    Returns:
        List of (property_name, reference) pairs in discovery order
    """
    found: list[tuple[str, VariableReference]] = []

    if node.has_bindings():
        for property_name, bound in node.bound_variables.items():
            for reference in _flatten(bound):
                found.append((property_name, reference))

    if node.has_fills():
        for reference in _paint_colors(node.fills):
            found.append((FILL_COLOR_PROPERTY, reference))

    if node.has_strokes():
        for reference in _paint_colors(node.strokes):
            found.append((STROKE_COLOR_PROPERTY, reference))

    return found


def _flatten(
    bound: VariableReference | list[VariableReference | None] | None,
) -> Iterator[VariableReference]:
    items = bound if isinstance(bound, list) else [bound]
    for item in items:
        if item is not None and item.has_id:
            yield item


def _paint_colors(paints: list[Paint]) -> Iterator[VariableReference]:
    for paint in paints:
        reference = paint.color_reference
        if reference is not None and reference.has_id:
            yield reference
