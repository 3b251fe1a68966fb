"""Tests for the Entity base, guards and query specifications."""

from __future__ import annotations

import uuid
from datetime import timedelta

import pytest

from skillswap.domain.common.entity import Entity, require_id, require_text
from skillswap.domain.common.errors import (
    CommitError,
    EntityNotFoundError,
    PersistenceError,
    RollbackError,
    SaveChangesError,
    TransactionError,
    ValidationError,
)
from skillswap.domain.common.query import (
    FilterMode,
    FilterSpec,
    PageSpec,
    SortOrder,
    SortSpec,
)
from skillswap.domain.common.repository import require_entities, require_entity


class TestEntity:
    def test_identity_and_timestamps(self):
        e = Entity()
        assert isinstance(e.id, uuid.UUID)
        assert e.created_at == e.updated_at

    def test_touch_never_moves_backwards(self):
        e = Entity()
        future = e.updated_at + timedelta(hours=1)
        e._updated_at = future
        e.touch()
        assert e.updated_at == future

    def test_distinct_ids(self):
        assert Entity().id != Entity().id


class TestGuards:
    def test_require_id(self):
        value = uuid.uuid4()
        assert require_id(value, "User ID") is value
        with pytest.raises(ValidationError, match="User ID cannot be empty"):
            require_id(uuid.UUID(int=0), "User ID")

    def test_require_text_strips(self):
        assert require_text("  x  ", "Name") == "x"
        with pytest.raises(ValidationError, match="Name cannot be null or empty"):
            require_text(" ", "Name")

    def test_require_entity(self):
        with pytest.raises(ValueError):
            require_entity(None)
        with pytest.raises(ValueError):
            require_entities(None)
        with pytest.raises(ValueError):
            require_entities([Entity(), None])


class TestErrors:
    def test_persistence_errors_keep_cause(self):
        cause = RuntimeError("disk full")
        for cls in (SaveChangesError, CommitError, RollbackError):
            err = cls(cause)
            assert isinstance(err, PersistenceError)
            assert err.cause is cause

    def test_messages(self):
        assert str(SaveChangesError()) == "Failed to save changes to the database."
        assert str(CommitError()) == "Failed to commit transaction."
        assert str(RollbackError()) == "Failed to rollback transaction."
        assert issubclass(CommitError, TransactionError)

    def test_not_found_message(self):
        err = EntityNotFoundError("SkillCategory", "abc")
        assert str(err) == "SkillCategory with ID abc not found."


class TestFilterSpec:
    def test_where_splits_booleans_from_equality(self):
        spec = FilterSpec.where(name="Music", is_active=True)
        assert [f.field for f in spec.categorical_filters] == ["name"]
        assert [f.field for f in spec.boolean_filters] == ["is_active"]
        assert spec.field_names() == {"name", "is_active"}

    def test_empty_range_and_text_are_skipped(self):
        spec = FilterSpec().add_range("proficiency_level").add_text_search("name", "")
        assert spec.range_filters == []
        assert spec.text_searches == []

    def test_not_equals(self):
        spec = FilterSpec().add_not_equals("slug", "other")
        assert spec.categorical_filters[0].mode is FilterMode.EXCLUDE


class TestPageSpec:
    def test_offset(self):
        page = PageSpec(page=3, per_page=10)
        assert (page.offset, page.limit) == (20, 10)

    @pytest.mark.parametrize("page, size", [(0, 10), (1, 0), (-1, 5)])
    def test_rejects_non_positive(self, page, size):
        with pytest.raises(ValueError, match="must be greater than 0"):
            PageSpec(page=page, per_page=size)

    def test_sort_defaults(self):
        assert SortSpec() == SortSpec(field="id", order=SortOrder.ASC)
