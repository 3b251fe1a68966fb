"""SQLAlchemy Unit of Work.

One ``SqlUnitOfWork`` owns one ``AsyncSession`` for the lifetime of a
logical operation.  The session is opened lazily on first use; every
repository handed out shares it, so all staged changes are flushed
together by :meth:`SqlUnitOfWork.save_changes`.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from skillswap.domain.common.entity import Entity
from skillswap.domain.common.errors import SaveChangesError, TransactionError
from skillswap.domain.common.uow import UnitOfWork, UnitOfWorkTransaction
from skillswap.infra.db.repositories import (
    SqlRepository,
    SqlRolePermissionRepository,
    SqlRoleRepository,
    SqlSkillCategoryRepository,
    SqlSkillRepository,
    SqlUserAvailabilityRepository,
    SqlUserPreferencesRepository,
    SqlUserRepository,
    SqlUserRoleRepository,
    SqlUserSkillRepository,
)
from skillswap.infra.db.transaction import SqlUnitOfWorkTransaction

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Entity)


class SqlUnitOfWork(UnitOfWork):
    """Unit of work backed by an ``async_sessionmaker``."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None
        self._repositories: dict[Any, Any] = {}
        self._transaction: SqlUnitOfWorkTransaction | None = None

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            self._session = self._session_factory()
        return self._session

    # -- Repositories ------------------------------------------------------

    @property
    def users(self) -> SqlUserRepository:
        return self._specific("users", SqlUserRepository)

    @property
    def skills(self) -> SqlSkillRepository:
        return self._specific("skills", SqlSkillRepository)

    @property
    def skill_categories(self) -> SqlSkillCategoryRepository:
        return self._specific("skill_categories", SqlSkillCategoryRepository)

    @property
    def user_skills(self) -> SqlUserSkillRepository:
        return self._specific("user_skills", SqlUserSkillRepository)

    @property
    def user_availability(self) -> SqlUserAvailabilityRepository:
        return self._specific("user_availability", SqlUserAvailabilityRepository)

    @property
    def user_preferences(self) -> SqlUserPreferencesRepository:
        return self._specific("user_preferences", SqlUserPreferencesRepository)

    @property
    def roles(self) -> SqlRoleRepository:
        return self._specific("roles", SqlRoleRepository)

    @property
    def user_roles(self) -> SqlUserRoleRepository:
        return self._specific("user_roles", SqlUserRoleRepository)

    @property
    def role_permissions(self) -> SqlRolePermissionRepository:
        return self._specific("role_permissions", SqlRolePermissionRepository)

    def repository(self, entity_type: type[T]) -> SqlRepository[T]:
        if entity_type is None:
            raise ValueError("entity_type must not be None")
        repo = self._repositories.get(entity_type)
        if repo is None:
            repo = SqlRepository(self.session, entity_type)
            self._repositories[entity_type] = repo
        return repo

    def _specific(self, key: str, repo_cls: type[SqlRepository]) -> Any:
        repo = self._repositories.get(key)
        if repo is None:
            repo = repo_cls(self.session)
            self._repositories[key] = repo
        return repo

    # -- Persistence -------------------------------------------------------

    @property
    def in_transaction(self) -> bool:
        return self._transaction is not None and self._transaction.is_active

    async def save_changes(self) -> int:
        session = self.session
        staged = (
            len(session.new)
            + sum(1 for obj in session.dirty if session.is_modified(obj))
            + len(session.deleted)
        )
        try:
            if self.in_transaction:
                await session.flush()
            else:
                await session.commit()
        except SQLAlchemyError as exc:
            logger.error("Failed to save %d staged change(s): %s", staged, exc)
            if not self.in_transaction:
                try:
                    await session.rollback()
                except Exception:
                    logger.exception("Rollback after failed save also failed")
            raise SaveChangesError(exc) from exc
        logger.debug("Saved %d change(s)", staged)
        return staged

    async def begin_transaction(self) -> UnitOfWorkTransaction:
        if self.in_transaction:
            raise TransactionError("A transaction is already in progress.")
        session = self.session
        if not session.in_transaction():
            await session.begin()
        self._transaction = SqlUnitOfWorkTransaction(session, on_finish=self._transaction_finished)
        return self._transaction

    def _transaction_finished(self, tx: SqlUnitOfWorkTransaction) -> None:
        if self._transaction is tx:
            self._transaction = None

    async def close(self) -> None:
        if self._transaction is not None:
            await self._transaction.close()
            self._transaction = None
        session, self._session = self._session, None
        self._repositories.clear()
        if session is None:
            return
        try:
            await session.close()
        except Exception:
            logger.warning("Error while closing database session", exc_info=True)
