"""Repository ports for the user aggregate."""

from __future__ import annotations

import abc
import uuid
from collections.abc import Sequence
from datetime import time

from ..common.repository import Repository
from .models import (
    DayOfWeek,
    User,
    UserAvailability,
    UserPreferences,
    UserSkill,
)


class UserRepository(Repository[User]):
    """Persist and retrieve user accounts."""

    @abc.abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        """Lookup is case-insensitive; the address is normalised first."""
        ...

    @abc.abstractmethod
    async def get_by_username(self, username: str) -> User | None:
        ...

    @abc.abstractmethod
    async def email_exists(self, email: str, exclude_id: uuid.UUID | None = None) -> bool:
        ...

    @abc.abstractmethod
    async def username_exists(
        self, username: str, exclude_id: uuid.UUID | None = None
    ) -> bool:
        ...

    @abc.abstractmethod
    async def get_users_by_skills(self, skill_ids: Sequence[uuid.UUID]) -> list[User]:
        """Users holding any of ``skill_ids``.  Empty input returns []."""
        ...

    @abc.abstractmethod
    async def get_with_skills(self, user_id: uuid.UUID) -> User | None:
        """User with ``user_skills`` (and each skill) eagerly loaded."""
        ...

    @abc.abstractmethod
    async def get_with_availability(self, user_id: uuid.UUID) -> User | None:
        ...


class UserSkillRepository(Repository[UserSkill]):
    """Persist and retrieve user-skill links."""

    @abc.abstractmethod
    async def get_by_user_id(self, user_id: uuid.UUID) -> list[UserSkill]:
        """Every skill link for the user, with the skill loaded."""
        ...

    @abc.abstractmethod
    async def get_by_skill_id(self, skill_id: uuid.UUID) -> list[UserSkill]:
        """Every user link for the skill, with the user loaded."""
        ...

    @abc.abstractmethod
    async def get_by_user_and_skill(
        self, user_id: uuid.UUID, skill_id: uuid.UUID
    ) -> UserSkill | None:
        ...

    @abc.abstractmethod
    async def get_by_proficiency_level(self, level: int) -> list[UserSkill]:
        ...

    @abc.abstractmethod
    async def get_teachable_skills(self, user_id: uuid.UUID) -> list[UserSkill]:
        ...

    @abc.abstractmethod
    async def get_learning_skills(self, user_id: uuid.UUID) -> list[UserSkill]:
        ...

    @abc.abstractmethod
    async def user_has_skill(self, user_id: uuid.UUID, skill_id: uuid.UUID) -> bool:
        ...


class UserAvailabilityRepository(Repository[UserAvailability]):
    """Persist and retrieve weekly availability slots."""

    @abc.abstractmethod
    async def get_by_user_id(self, user_id: uuid.UUID) -> list[UserAvailability]:
        """Slots ordered by day of week, then start time."""
        ...

    @abc.abstractmethod
    async def get_by_user_and_day(
        self, user_id: uuid.UUID, day_of_week: DayOfWeek
    ) -> list[UserAvailability]:
        ...

    @abc.abstractmethod
    async def get_users_available_at(
        self, day_of_week: DayOfWeek, at: time
    ) -> list[UserAvailability]:
        """Active slots on ``day_of_week`` with ``start_time <= at <= end_time``."""
        ...


class UserPreferencesRepository(Repository[UserPreferences]):
    """Persist and retrieve per-user preferences."""

    @abc.abstractmethod
    async def get_by_user_id(self, user_id: uuid.UUID) -> UserPreferences | None:
        ...


__all__ = [
    "UserRepository",
    "UserSkillRepository",
    "UserAvailabilityRepository",
    "UserPreferencesRepository",
]
