"""
Document node models for the varaudit engine.

This module contains the pydantic models describing a snapshot of the design
document tree: nodes, their paints and the variable references bound to them.
Field aliases accept the host's camelCase export format.
"""

from pydantic import BaseModel, ConfigDict, Field

from varaudit.core.types import VARIABLE_ALIAS


class VariableReference(BaseModel):
    """A pointer from a styling channel to a variable."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str | None = None
    type: str = VARIABLE_ALIAS

    @property
    def has_id(self) -> bool:
        return bool(self.id)


class Paint(BaseModel):
    """A fill or stroke descriptor with its own binding map."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = "SOLID"
    bound_variables: dict[str, VariableReference | None] = Field(
        default_factory=dict, alias="boundVariables"
    )

    @property
    def color_reference(self) -> VariableReference | None:
        """Return the reference bound to this paint's color, if any."""
        return self.bound_variables.get("color")


class DocumentNode(BaseModel):
    """
    A node of the design document tree.

    Every styling channel is optional; capability queries report which of them
    carry data so traversal code never has to inspect the raw shape.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    type: str = "FRAME"
    bound_variables: dict[
        str, VariableReference | list[VariableReference | None] | None
    ] = Field(default_factory=dict, alias="boundVariables")
    fills: list[Paint] = Field(default_factory=list)
    strokes: list[Paint] = Field(default_factory=list)
    children: list["DocumentNode"] = Field(default_factory=list)

    def has_bindings(self) -> bool:
        return bool(self.bound_variables)

    def has_fills(self) -> bool:
        return bool(self.fills)

    def has_strokes(self) -> bool:
        return bool(self.strokes)

    def has_children(self) -> bool:
        return bool(self.children)


DocumentNode.model_rebuild()
