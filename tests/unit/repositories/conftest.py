"""Shared fixtures for repository and unit-of-work integration tests.

Every test gets its own SQLite file under ``tmp_path`` (aiosqlite driver,
foreign keys enforced), so each unit of work opens a real, separate
connection and isolation between sessions is observable.
"""

from __future__ import annotations

from contextlib import contextmanager

import pytest
import pytest_asyncio
from sqlalchemy import event

from skillswap.database import create_engine_for, create_session_factory, init_db
from skillswap.infra.db.uow import SqlUnitOfWork


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Function-scoped file-backed SQLite engine with every table created."""
    eng = create_engine_for(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def make_uow(session_factory):
    """Factory for fresh units of work against the same database."""
    created: list[SqlUnitOfWork] = []

    def _make() -> SqlUnitOfWork:
        uow = SqlUnitOfWork(session_factory)
        created.append(uow)
        return uow

    return _make


@pytest_asyncio.fixture
async def uow(make_uow):
    unit = make_uow()
    yield unit
    await unit.close()


@contextmanager
def count_queries(engine):
    """Context manager that counts SQL statements executed.

    Usage::

        with count_queries(engine) as counter:
            await repo.get_paged(1, 10)
        assert counter["count"] == 1
    """
    counter = {"count": 0}

    def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        counter["count"] += 1

    event.listen(engine.sync_engine, "before_cursor_execute", _before_cursor_execute)
    try:
        yield counter
    finally:
        event.remove(engine.sync_engine, "before_cursor_execute", _before_cursor_execute)
