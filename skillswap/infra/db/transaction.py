"""Explicit transaction over the unit of work's AsyncSession."""

from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.domain.common.errors import CommitError, RollbackError, TransactionError
from skillswap.domain.common.uow import TransactionState, UnitOfWorkTransaction

logger = logging.getLogger(__name__)


class SqlUnitOfWorkTransaction(UnitOfWorkTransaction):
    """Commit or roll back the session's current transaction exactly once.

    The session transaction must already be begun by the caller
    (``SqlUnitOfWork.begin_transaction``).  ``on_finish`` is invoked once
    the transaction reaches a terminal state, whatever the outcome.
    """

    def __init__(
        self,
        session: AsyncSession,
        on_finish: Callable[[SqlUnitOfWorkTransaction], None] | None = None,
    ) -> None:
        self._session = session
        self._on_finish = on_finish
        self._state = TransactionState.OPEN
        self._closed = False

    @property
    def state(self) -> TransactionState:
        return self._state

    async def commit(self) -> None:
        if self._state is not TransactionState.OPEN:
            raise TransactionError(f"Cannot commit a transaction that is {self._state.value}.")
        try:
            await self._session.commit()
        except Exception as exc:
            logger.error("Transaction commit failed: %s", exc)
            try:
                await self._session.rollback()
            except Exception:
                logger.exception("Rollback after failed commit also failed")
            self._finish(TransactionState.ROLLED_BACK)
            raise CommitError(exc) from exc
        self._finish(TransactionState.COMMITTED)

    async def rollback(self) -> None:
        if self._state is TransactionState.ROLLED_BACK:
            return
        if self._state is TransactionState.COMMITTED:
            raise TransactionError("Cannot roll back a committed transaction.")
        try:
            await self._session.rollback()
        except Exception as exc:
            logger.error("Transaction rollback failed: %s", exc)
            self._finish(TransactionState.ROLLED_BACK)
            raise RollbackError(exc) from exc
        self._finish(TransactionState.ROLLED_BACK)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._state is TransactionState.OPEN:
            try:
                await self.rollback()
            except RollbackError:
                logger.warning("Rollback while closing an unfinished transaction failed")

    def _finish(self, state: TransactionState) -> None:
        self._state = state
        if self._on_finish is not None:
            self._on_finish(self)
            self._on_finish = None
