"""Unit of Work and Transaction ports.

A unit of work owns one persistence session for one logical operation
(one HTTP request, one seed run).  Use cases reach every repository
through it and make staged changes durable with ``save_changes()``.

Usage::

    async with uow:
        category = await uow.skill_categories.get_by_name("Music")
        category.deactivate()
        uow.skill_categories.update(category)
        await uow.save_changes()

Leaving the ``async with`` block closes the unit of work; staged but
unsaved changes are discarded and any open transaction is rolled back.
"""

from __future__ import annotations

import abc
from enum import Enum
from typing import TYPE_CHECKING, Self, TypeVar

from .entity import Entity

if TYPE_CHECKING:
    from ..access.ports import (
        RolePermissionRepository,
        RoleRepository,
        UserRoleRepository,
    )
    from ..skills.ports import SkillCategoryRepository, SkillRepository
    from ..users.ports import (
        UserAvailabilityRepository,
        UserPreferencesRepository,
        UserRepository,
        UserSkillRepository,
    )
    from .repository import Repository

T = TypeVar("T", bound=Entity)


class TransactionState(str, Enum):
    OPEN = "open"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class UnitOfWorkTransaction(abc.ABC):
    """Explicit transaction spanning several ``save_changes()`` calls.

    Exactly one of :meth:`commit` or :meth:`rollback` should be called.
    A rollback after a failed commit is tolerated.  Closing an
    unfinished transaction rolls it back; closing twice is a no-op.
    """

    @property
    @abc.abstractmethod
    def state(self) -> TransactionState:
        ...

    @property
    def is_active(self) -> bool:
        return self.state is TransactionState.OPEN

    @abc.abstractmethod
    async def commit(self) -> None:
        """Commit; on failure roll back internally and raise CommitError."""
        ...

    @abc.abstractmethod
    async def rollback(self) -> None:
        """Roll back; a failure raises RollbackError."""
        ...

    @abc.abstractmethod
    async def close(self) -> None:
        ...

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


class UnitOfWork(abc.ABC):
    """Transactional boundary that aggregates every repository."""

    users: UserRepository
    skills: SkillRepository
    skill_categories: SkillCategoryRepository
    user_skills: UserSkillRepository
    user_availability: UserAvailabilityRepository
    user_preferences: UserPreferencesRepository
    roles: RoleRepository
    user_roles: UserRoleRepository
    role_permissions: RolePermissionRepository

    @abc.abstractmethod
    def repository(self, entity_type: type[T]) -> Repository[T]:
        """Generic repository for ``entity_type``, cached per type."""
        ...

    @abc.abstractmethod
    async def save_changes(self) -> int:
        """Flush every staged change atomically.

        Returns the number of staged inserts, updates and deletes.
        Storage failures raise SaveChangesError with the cause chained.
        """
        ...

    @abc.abstractmethod
    async def begin_transaction(self) -> UnitOfWorkTransaction:
        ...

    @abc.abstractmethod
    async def close(self) -> None:
        """Release the session and drop cached repositories.  Idempotent."""
        ...

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
