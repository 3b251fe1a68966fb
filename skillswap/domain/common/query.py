"""Filter, sort, and pagination specifications for repository queries.

These types express query intent in domain terms, independent of
any persistence mechanism.  A ``FilterSpec`` is the predicate accepted
by the generic repository: a conjunction of per-field constraints over
entity attribute names.  Adapters translate it into SQL WHERE clauses
(``skillswap.infra.db.query``) or in-memory checks (test fakes).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class FilterMode(str, Enum):
    INCLUDE = "include"
    EXCLUDE = "exclude"


# ---------------------------------------------------------------------------
# Individual Filter Types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RangeFilter:
    """Inclusive range constraint on an orderable field (numbers, dates, times)."""

    field: str
    min_value: Any = None
    max_value: Any = None

    def is_empty(self) -> bool:
        return self.min_value is None and self.max_value is None


@dataclass(frozen=True)
class CategoricalFilter:
    """Include or exclude rows whose field equals one of ``values``."""

    field: str
    values: tuple[Any, ...]  # tuple for hashability
    mode: FilterMode = FilterMode.INCLUDE

    def is_empty(self) -> bool:
        return len(self.values) == 0


@dataclass(frozen=True)
class BooleanFilter:
    """Boolean flag constraint on a single field."""

    field: str
    value: bool

    def is_empty(self) -> bool:
        return False  # a boolean filter is never "empty"


@dataclass(frozen=True)
class TextSearchFilter:
    """Case-insensitive substring search on a text field."""

    field: str
    pattern: str

    def is_empty(self) -> bool:
        return not self.pattern


# ---------------------------------------------------------------------------
# Composite Specifications
# ---------------------------------------------------------------------------


@dataclass
class FilterSpec:
    """Holds all active filters.  Mutable for builder-pattern construction.

    Builder methods return ``self`` for fluent chaining.  Range and text
    builders silently skip empty values so callers don't need guard
    clauses; equality builders always add a constraint.
    """

    range_filters: list[RangeFilter] = field(default_factory=list)
    categorical_filters: list[CategoricalFilter] = field(default_factory=list)
    boolean_filters: list[BooleanFilter] = field(default_factory=list)
    text_searches: list[TextSearchFilter] = field(default_factory=list)

    @classmethod
    def where(cls, **equals: Any) -> FilterSpec:
        """Shorthand for a conjunction of equality constraints.

        ``FilterSpec.where(name="Music", is_active=True)``
        """
        spec = cls()
        for field_name, value in equals.items():
            if isinstance(value, bool):
                spec.add_boolean(field_name, value)
            else:
                spec.add_equals(field_name, value)
        return spec

    # -- Builder helpers ---------------------------------------------------

    def add_range(
        self,
        field_name: str,
        min_value: Any = None,
        max_value: Any = None,
    ) -> FilterSpec:
        if min_value is not None or max_value is not None:
            self.range_filters.append(
                RangeFilter(field=field_name, min_value=min_value, max_value=max_value)
            )
        return self

    def add_categorical(
        self,
        field_name: str,
        values: tuple[Any, ...] | list[Any],
        mode: FilterMode = FilterMode.INCLUDE,
    ) -> FilterSpec:
        vals = tuple(values) if isinstance(values, list) else values
        if vals:
            self.categorical_filters.append(
                CategoricalFilter(field=field_name, values=vals, mode=mode)
            )
        return self

    def add_equals(self, field_name: str, value: Any) -> FilterSpec:
        self.categorical_filters.append(
            CategoricalFilter(field=field_name, values=(value,))
        )
        return self

    def add_not_equals(self, field_name: str, value: Any) -> FilterSpec:
        self.categorical_filters.append(
            CategoricalFilter(field=field_name, values=(value,), mode=FilterMode.EXCLUDE)
        )
        return self

    def add_boolean(self, field_name: str, value: bool) -> FilterSpec:
        self.boolean_filters.append(BooleanFilter(field=field_name, value=value))
        return self

    def add_text_search(self, field_name: str, pattern: str) -> FilterSpec:
        if pattern:
            self.text_searches.append(
                TextSearchFilter(field=field_name, pattern=pattern)
            )
        return self

    def field_names(self) -> set[str]:
        """Every field referenced by any filter."""
        names: set[str] = set()
        for group in (
            self.range_filters,
            self.categorical_filters,
            self.boolean_filters,
            self.text_searches,
        ):
            names.update(f.field for f in group)
        return names


@dataclass(frozen=True)
class SortSpec:
    """Sort directive for query results."""

    field: str = "id"
    order: SortOrder = SortOrder.ASC


@dataclass
class PageSpec:
    """1-based pagination parameters with validation."""

    page: int = 1
    per_page: int = 50

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"Page number must be greater than 0, got {self.page}")
        if self.per_page < 1:
            raise ValueError(f"Page size must be greater than 0, got {self.per_page}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "SortOrder",
    "FilterMode",
    "RangeFilter",
    "CategoricalFilter",
    "BooleanFilter",
    "TextSearchFilter",
    "FilterSpec",
    "SortSpec",
    "PageSpec",
]
