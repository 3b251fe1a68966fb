"""SQLAlchemy translation of domain query specs.

Translates a domain ``FilterSpec`` into WHERE conditions and an
``order_by`` field name into an ORDER BY column for any mapped table.
Field names resolve against the table's columns; an unknown name is an
invalid argument and raises ``ValueError`` before a statement is built,
so a typo never silently widens a delete or a page.
"""

from __future__ import annotations

from sqlalchemy import ColumnElement, Table, func

from skillswap.domain.common.query import (
    BooleanFilter,
    CategoricalFilter,
    FilterMode,
    FilterSpec,
    RangeFilter,
    SortOrder,
    SortSpec,
    TextSearchFilter,
)

# ── Column resolution ───────────────────────────────────────────────────


def resolve_column(table: Table, field_name: str):
    """Return ``table.c[field_name]`` or raise ValueError."""
    col = table.c.get(field_name)
    if col is None:
        raise ValueError(f"Unknown field {field_name!r} for {table.name}")
    return col


# ── Public API ──────────────────────────────────────────────────────────


def build_conditions(table: Table, filters: FilterSpec | None) -> list[ColumnElement[bool]]:
    """Every FilterSpec constraint as a list of AND-ed SQL conditions."""
    if filters is None:
        return []
    conditions: list[ColumnElement[bool]] = []
    for rf in filters.range_filters:
        conditions.extend(_range_conditions(table, rf))
    for cf in filters.categorical_filters:
        conditions.append(_categorical_condition(table, cf))
    for bf in filters.boolean_filters:
        conditions.append(_boolean_condition(table, bf))
    for ts in filters.text_searches:
        conditions.append(_text_search_condition(table, ts))
    return conditions


def build_order_by(table: Table, sort: SortSpec) -> list[ColumnElement]:
    """ORDER BY for ``sort`` with the primary key as a tiebreaker."""
    col = resolve_column(table, sort.field)
    ordered = col.asc() if sort.order == SortOrder.ASC else col.desc()
    pk = list(table.primary_key.columns)
    if any(c is col for c in pk):
        return [ordered]
    return [ordered, *(c.asc() for c in pk)]


# ── Private helpers ─────────────────────────────────────────────────────


def _range_conditions(table: Table, rf: RangeFilter) -> list[ColumnElement[bool]]:
    col = resolve_column(table, rf.field)
    conditions = []
    if rf.min_value is not None:
        conditions.append(col >= rf.min_value)
    if rf.max_value is not None:
        conditions.append(col <= rf.max_value)
    return conditions


def _categorical_condition(table: Table, cf: CategoricalFilter) -> ColumnElement[bool]:
    col = resolve_column(table, cf.field)
    if len(cf.values) == 1:
        value = cf.values[0]
        if value is None:
            return col.is_not(None) if cf.mode == FilterMode.EXCLUDE else col.is_(None)
        return col != value if cf.mode == FilterMode.EXCLUDE else col == value
    if cf.mode == FilterMode.EXCLUDE:
        return col.not_in(cf.values)
    return col.in_(cf.values)


def _boolean_condition(table: Table, bf: BooleanFilter) -> ColumnElement[bool]:
    col = resolve_column(table, bf.field)
    return col.is_(True) if bf.value else col.is_(False)


def _text_search_condition(table: Table, ts: TextSearchFilter) -> ColumnElement[bool]:
    """Case-insensitive substring match, portable across SQLite and Postgres."""
    col = resolve_column(table, ts.field)
    return func.lower(col).contains(ts.pattern.lower(), autoescape=True)


__all__ = ["resolve_column", "build_conditions", "build_order_by"]
