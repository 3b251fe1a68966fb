"""
Database engine and session factory using SQLAlchemy's asyncio extension.
"""
import logging
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .config import settings
from .infra.db.tables import metadata

logger = logging.getLogger(__name__)


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite ignores FOREIGN KEY clauses unless the pragma is set per connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_engine_for(url: str, echo: bool = False) -> AsyncEngine:
    """Build an async engine; SQLite URLs also get the foreign-key pragma."""
    is_sqlite = url.startswith("sqlite")
    engine = create_async_engine(
        url,
        echo=echo,
        pool_pre_ping=not is_sqlite,
    )
    if is_sqlite:
        enable_sqlite_foreign_keys(engine)
    return engine


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory shared by every unit of work.

    ``expire_on_commit=False`` keeps entities readable after commit without
    a lazy refresh (which an async session cannot perform), and
    ``autoflush=False`` keeps staged changes in memory until
    ``save_changes()``.
    """
    return async_sessionmaker(bind=bind, expire_on_commit=False, autoflush=False)


# Application-wide engine and session factory
engine = create_engine_for(settings.database_url, echo=settings.database_echo)
SessionLocal = create_session_factory(engine)


def _ensure_sqlite_directory(url: str) -> None:
    database = make_url(url).database
    if database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)


async def init_db(bind: AsyncEngine | None = None) -> None:
    """
    Initialize database by creating all tables.
    Should be called on application startup.
    """
    bind = bind or engine
    if bind.dialect.name == "sqlite":
        _ensure_sqlite_directory(bind.url.render_as_string(hide_password=False))
    async with bind.begin() as conn:
        await conn.run_sync(metadata.create_all)
    logger.info("Database tables ensured on %s", bind.url.render_as_string(hide_password=True))
