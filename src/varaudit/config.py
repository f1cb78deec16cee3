"""
Run configuration for varaudit.

`SortTaxonomy` holds the ordering tables used by the structural sort and
`AuditConfig` bundles everything a run needs. Both are plain values passed
into each run; nothing here is global.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any

import attrs
from attrs import frozen

from varaudit.exceptions import AuditConfigError

DEFAULT_CATEGORY_ORDER = (
    "color",
    "layout",
    "typography",
    "borders",
    "box-shadow",
    "opacity",
    "icon",
)

DEFAULT_SUBCATEGORY_ORDER: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "color": ("bg", "content", "icon", "text", "border", "trigger"),
        "layout": (
            "inner-box",
            "outer-box",
            "text-box",
            "content-box",
            "icon-box",
            "icon-wrapper",
            "left",
            "right",
            "top",
            "bottom",
            "horizontal",
            "vertical",
            "gap",
            "width",
            "height",
            "sizing",
            "max-height",
            "min-height",
            "max-width",
            "min-width",
        ),
        "typography": (
            "font-family",
            "font-size",
            "font-weight",
            "line-height",
            "letter-spacing",
        ),
        "borders": ("border-radius", "border-width"),
        "icon": ("set", "size"),
    }
)

DEFAULT_STATE_ORDER = (
    "rest",
    "hovered",
    "active",
    "selected",
    "read-only",
    "disabled",
    "focused",
)

DEFAULT_SIZE_ORDER = ("small", "medium", "large")


def _freeze_subcategories(
    table: Mapping[str, tuple[str, ...]],
) -> Mapping[str, tuple[str, ...]]:
    return MappingProxyType(
        {category: tuple(entries) for category, entries in table.items()}
    )


@frozen
class SortTaxonomy:
    """
    Ordering tables for the structural sort of variable names.

    The subcategory table is a read-only mapping, so a taxonomy can be shared
    between runs without one run altering another's ordering.
    """

    category_order: tuple[str, ...] = DEFAULT_CATEGORY_ORDER
    # Mapping proxies are unhashable
    subcategory_order: Mapping[str, tuple[str, ...]] = attrs.field(
        default=DEFAULT_SUBCATEGORY_ORDER,
        converter=_freeze_subcategories,
        hash=False,
    )
    state_order: tuple[str, ...] = DEFAULT_STATE_ORDER
    size_order: tuple[str, ...] = DEFAULT_SIZE_ORDER


@dataclass
class AuditConfig:
    """Configuration for a single analysis or validation run."""

    taxonomy: SortTaxonomy = field(default_factory=SortTaxonomy)
    forced_used_markers: tuple[str, ...] = ("font-family",)
    # Forms for counts of 1, 2-4 and 5+
    plural_forms: tuple[str, str, str] = ("variable", "variables", "variables")
    yield_between_roots: bool = True

    @classmethod
    def from_dict(cls, config: dict[str, Any] | None = None) -> "AuditConfig":
        """
        Build a configuration from a plain mapping, filling in defaults.

        Params:
            config: Mapping of option names to values; `taxonomy` may itself be
                a mapping of `SortTaxonomy` field names

        Returns:
            AuditConfig instance

        Raises:
            AuditConfigError: If a key is unknown or a value has the wrong shape
        """
        if config is None:
            config = {}

        known = {f.name for f in fields(cls)}
        options: dict[str, Any] = {}
        for key, value in config.items():
            if key not in known:
                raise AuditConfigError(key, "unknown option")
            options[key] = value

        if "taxonomy" in options:
            taxonomy = options["taxonomy"]
            if isinstance(taxonomy, Mapping):
                options["taxonomy"] = _taxonomy_from_dict(taxonomy)
            elif not isinstance(taxonomy, SortTaxonomy):
                raise AuditConfigError("taxonomy", "expected a mapping")

        for key in ("forced_used_markers", "plural_forms"):
            if key in options:
                options[key] = _string_tuple(key, options[key])

        if "plural_forms" in options and len(options["plural_forms"]) != 3:
            raise AuditConfigError("plural_forms", "expected exactly three forms")

        return cls(**options)


def _string_tuple(key: str, value: Any) -> tuple[str, ...]:
    # A bare string is a sequence of characters, not of names
    if not isinstance(value, (list, tuple)) or not all(
        isinstance(v, str) for v in value
    ):
        raise AuditConfigError(key, "expected a list of strings")
    return tuple(value)


def _taxonomy_from_dict(raw: Mapping[str, Any]) -> SortTaxonomy:
    options: dict[str, Any] = {}
    for key, value in raw.items():
        name = f"taxonomy.{key}"
        if key == "subcategory_order":
            if not isinstance(value, Mapping):
                raise AuditConfigError(name, "expected a mapping of category names")
            options[key] = {
                category: _string_tuple(f"{name}.{category}", entries)
                for category, entries in value.items()
            }
        elif key in ("category_order", "state_order", "size_order"):
            options[key] = _string_tuple(name, value)
        else:
            raise AuditConfigError(name, "unknown option")
    return SortTaxonomy(**options)
