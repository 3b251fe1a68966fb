"""Base class for every persisted domain object.

Entities carry an immutable identity and two audit timestamps.  State is
exposed through read-only properties; subclasses mutate only through
named methods that finish by calling :meth:`Entity.touch`.

Attributes are stored under underscore-prefixed names so the persistence
layer can map columns onto them without exposing setters.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from .errors import ValidationError


def utc_now() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


class Entity:
    """Identity plus ``created_at`` / ``updated_at`` audit stamps."""

    def __init__(self) -> None:
        now = utc_now()
        self._id: uuid.UUID = uuid.uuid4()
        self._created_at: datetime = now
        self._updated_at: datetime = now

    @property
    def id(self) -> uuid.UUID:
        return self._id

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def touch(self) -> None:
        """Refresh ``updated_at``; never moves it backwards."""
        now = utc_now()
        if now > self._updated_at:
            self._updated_at = now

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self._id}>"


# ---------------------------------------------------------------------------
# Guards shared by entity constructors
# ---------------------------------------------------------------------------


def require_id(value: uuid.UUID | None, label: str) -> uuid.UUID:
    if value is None or value.int == 0:
        raise ValidationError(f"{label} cannot be empty")
    return value


def require_text(value: str | None, label: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{label} cannot be null or empty")
    return value.strip()
