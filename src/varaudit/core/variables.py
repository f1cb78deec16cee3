"""
Variable and collection models for the varaudit engine.

A variable maps each mode of its collection to a value. A value is either a
literal (number, boolean, string, color) or an alias pointing at another
variable by id.
"""

from collections.abc import Iterator
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from varaudit.core.types import VARIABLE_ALIAS


class VariableAlias(BaseModel):
    """A mode value that points at another variable instead of holding a literal."""

    model_config = ConfigDict(frozen=True)

    type: Literal["VARIABLE_ALIAS"] = VARIABLE_ALIAS
    id: str


class Color(BaseModel):
    """RGBA color literal with channels in the 0..1 range."""

    model_config = ConfigDict(frozen=True)

    r: float
    g: float
    b: float
    a: float = 1.0


VariableValue = VariableAlias | Color | bool | int | float | str


class Variable(BaseModel):
    """A named design token owned by a collection."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    variable_collection_id: str = Field(alias="variableCollectionId")
    values_by_mode: dict[str, VariableValue] = Field(
        default_factory=dict, alias="valuesByMode"
    )
    resolved_type: str = Field(default="COLOR", alias="resolvedType")
    remote: bool = False
    key: str | None = None

    def aliases(self) -> Iterator[tuple[str, VariableAlias]]:
        """
        Yield every alias-valued mode of this variable.

        Returns:
            Iterator of (mode_id, alias) pairs in mode order
        """
        for mode_id, value in self.values_by_mode.items():
            if isinstance(value, VariableAlias):
                yield mode_id, value

    def is_forced_used(self, markers: tuple[str, ...]) -> bool:
        """Check whether the name carries one of the forced-used markers (case-insensitive)."""
        lowered = self.name.lower()
        return any(marker.lower() in lowered for marker in markers)


class VariableMode(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mode_id: str = Field(alias="modeId")
    name: str = ""


class VariableCollection(BaseModel):
    """A named grouping of variables."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    modes: list[VariableMode] = Field(default_factory=list)
    remote: bool = False
    key: str | None = None


class CollectionChoice(BaseModel):
    """Simplified collection listing used to populate a collection picker."""

    id: str
    name: str

    @classmethod
    def from_collection(cls, collection: VariableCollection) -> "CollectionChoice":
        return cls(id=collection.id, name=collection.name)
