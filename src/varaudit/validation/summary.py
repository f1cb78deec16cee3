"""
Grouped summary of broken bindings.

Broken bindings are grouped by node name, then by property name, counting the
distinct broken variable ids under each property.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from varaudit.validation.integrity import BrokenBindingRecord

DEFAULT_PLURAL_FORMS = ("variable", "variables", "variables")


def plural_form(count: int, forms: tuple[str, str, str] = DEFAULT_PLURAL_FORMS) -> str:
    """
    Pick the noun form for a count.

    Three-way rule: exactly 1, 2 to 4, and everything else (0 and 5+). Locales
    that need a different rule supply forms that collapse accordingly.

    Params:
        count: Number being described
        forms: Forms for 1, for 2-4, and for 5+

    Returns:
        The matching form
    """
    if count == 1:
        return forms[0]
    if 2 <= count <= 4:
        return forms[1]
    return forms[2]


@dataclass
class PropertySummary:
    property_name: str
    variable_ids: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.variable_ids)


@dataclass
class NodeSummary:
    node_name: str
    properties: dict[str, PropertySummary] = field(default_factory=dict)


@dataclass
class BrokenSummary:
    """Broken bindings grouped by node name and property name, in discovery order."""

    nodes: dict[str, NodeSummary] = field(default_factory=dict)

    @classmethod
    def from_records(cls, records: Iterable[BrokenBindingRecord]) -> "BrokenSummary":
        summary = cls()
        for record in records:
            node = summary.nodes.setdefault(
                record.node_name, NodeSummary(record.node_name)
            )
            prop = node.properties.setdefault(
                record.property_name, PropertySummary(record.property_name)
            )
            if record.variable_id not in prop.variable_ids:
                prop.variable_ids.append(record.variable_id)
        return summary

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def counts(self) -> dict[str, dict[str, int]]:
        """Return {node_name: {property_name: distinct broken id count}}."""
        return {
            node_name: {name: prop.count for name, prop in node.properties.items()}
            for node_name, node in self.nodes.items()
        }

    def render(self, forms: tuple[str, str, str] = DEFAULT_PLURAL_FORMS) -> str:
        """
        Render the summary as text.

        An empty summary renders as a success message rather than nothing.
        """
        if self.is_empty:
            return "✅ No broken variables found"

        lines = ["🔴 Broken variables:"]
        for node in self.nodes.values():
            lines.append(node.node_name)
            for prop in node.properties.values():
                lines.append(
                    f"  • {prop.property_name}: {prop.count} broken {plural_form(prop.count, forms)}"
                )
        return "\n".join(lines)
