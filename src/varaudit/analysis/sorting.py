"""
Structural ordering of variable names.

Variable names are `/`-delimited paths such as `color/bg/hovered/small`. Rather
than sorting them alphabetically, names are grouped by visual category, then by
role (subcategory), size and interaction state, with the full name as the final
tie-break. The ordering tables live in `SortTaxonomy`.

Key components follow index-of semantics: a segment missing from its table
gets -1 and sorts before every listed entry. Two exceptions apply: a category
with no subcategory table (or no recognized category at all) gets 99 for the
subcategory, and names with no recognized category are placed after every
known category.
"""

import sys
import unicodedata
from collections.abc import Iterable, Sequence
from typing import NamedTuple

from varaudit.config import SortTaxonomy
from varaudit.core.variables import Variable

NOT_FOUND = -1
NO_SUBCATEGORY_TABLE = 99
UNKNOWN_CATEGORY_RANK = sys.maxsize

_DEFAULT_TAXONOMY = SortTaxonomy()


def _collation_key(name: str) -> tuple[str, str]:
    # Case-insensitive first, lowercase before uppercase on ties
    return unicodedata.normalize("NFKD", name).casefold(), name.swapcase()


class SortKey(NamedTuple):
    """Composite structural sort key for one variable name."""

    category: int
    subcategory: int
    size: int
    state: int
    name: str

    def rank(self) -> tuple:
        category = self.category if self.category >= 0 else UNKNOWN_CATEGORY_RANK
        return (
            category,
            self.subcategory,
            self.size,
            self.state,
            _collation_key(self.name),
        )

    def __lt__(self, other: "SortKey") -> bool:
        return self.rank() < other.rank()

    def __le__(self, other: "SortKey") -> bool:
        return self.rank() <= other.rank()

    def __gt__(self, other: "SortKey") -> bool:
        return self.rank() > other.rank()

    def __ge__(self, other: "SortKey") -> bool:
        return self.rank() >= other.rank()


def _index_of(table: Sequence[str], value: str) -> int:
    try:
        return table.index(value)
    except ValueError:
        return NOT_FOUND


def _first_listed(table: Sequence[str], parts: list[str]) -> str:
    """Return the first table entry (in table order) present among the parts."""
    return next((entry for entry in table if entry in parts), "")


def get_sort_key(name: str, taxonomy: SortTaxonomy | None = None) -> SortKey:
    """
    Build the structural sort key for a variable name.

    The category is the first path segment listed in the category order. The
    subcategory, size and state are the first entries of their tables that
    appear anywhere in the path.

    Params:
        name: Slash-delimited variable name
        taxonomy: Ordering tables, defaults to the built-in taxonomy

    Returns:
        SortKey for the name

    Examples:
        "color/bg/rest/small" -> SortKey(0, 0, 0, 0, "color/bg/rest/small")
        "shadow/elevated" -> SortKey(-1, 99, -1, -1, "shadow/elevated")
    """
    taxonomy = taxonomy or _DEFAULT_TAXONOMY
    parts = name.split("/")

    category = next((p for p in parts if p in taxonomy.category_order), "")
    table = taxonomy.subcategory_order.get(category)
    if table is None:
        subcategory_index = NO_SUBCATEGORY_TABLE
    else:
        subcategory_index = _index_of(table, _first_listed(table, parts))

    return SortKey(
        category=_index_of(taxonomy.category_order, category),
        subcategory=subcategory_index,
        size=_index_of(taxonomy.size_order, _first_listed(taxonomy.size_order, parts)),
        state=_index_of(
            taxonomy.state_order, _first_listed(taxonomy.state_order, parts)
        ),
        name=name,
    )


def sort_variable_names(
    names: Iterable[str], taxonomy: SortTaxonomy | None = None
) -> list[str]:
    """Return the names in structural order as a new list."""
    return sorted(names, key=lambda name: get_sort_key(name, taxonomy))


def sort_variables(
    variables: Iterable[Variable], taxonomy: SortTaxonomy | None = None
) -> list[Variable]:
    """Return the variables ordered structurally by name as a new list."""
    return sorted(variables, key=lambda variable: get_sort_key(variable.name, taxonomy))
