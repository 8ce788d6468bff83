"""
PartCat Backend — Database Session Management
===============================================

What:  Async SQLAlchemy engine, session factory, persistence gateway and the
       FastAPI dependencies that hand them to route handlers.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine over aiosqlite, provides a session per request
       and wraps it in a PersistenceGateway that records execute statements on.
Who:   Records use the gateway; routes receive it via Depends(get_gateway).
When:  Engine is created at module import; sessions are created per-request.

Statement semantics:
    Every write goes through PersistenceGateway.execute(), which commits
    immediately. One statement is one transaction, so a record's save() or
    delete() is visible to the next request as soon as it returns.
"""

import logging
from typing import Any, AsyncGenerator, Dict, List, Optional

from fastapi import Depends
from sqlalchemy import event, text
from sqlalchemy.engine import CursorResult
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.sql.expression import Executable

from partcat.config import settings
from partcat.exceptions import PersistenceError

logger = logging.getLogger(__name__)


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(
    settings.database_url,
    pool_pre_ping=settings.db_pool_pre_ping,
    # Echo SQL statements only in DEBUG mode
    echo=settings.log_level == "DEBUG",
)


def enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """Connect hook: SQLite ignores ON DELETE SET NULL unless this is on."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


if engine.dialect.name == "sqlite":
    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)


# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: the gateway commits after every write, and reads
# that follow in the same request must not trigger a refresh
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all table definitions.

    Registers every table with a single metadata object, which
    init_models() uses to provision the schema.
    """
    pass


# ── Persistence Gateway ───────────────────────────────────────────────────
class PersistenceGateway:
    """
    Shared handle used by records to execute parameterized statements.

    Records never touch the session directly. The gateway is injected into
    each record at construction and is not owned by it.

    Error Handling:
        SQLAlchemyError from any statement rolls the session back and is
        re-raised as PersistenceError. The statement and driver message are
        kept in the exception context, which is logged but never returned.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def fetch_one(self, statement: Executable) -> Optional[Dict[str, Any]]:
        """Run a SELECT and return the first row as a dict, or None."""
        result = await self._run(statement)
        row = result.mappings().first()
        return dict(row) if row is not None else None

    async def fetch_all(self, statement: Executable) -> List[Dict[str, Any]]:
        """Run a SELECT and return every row as a dict."""
        result = await self._run(statement)
        return [dict(row) for row in result.mappings().all()]

    async def execute(self, statement: Executable) -> CursorResult:
        """
        Run a single INSERT/UPDATE/DELETE and commit it.

        Returns the cursor result so callers can read rowcount or
        inserted_primary_key.
        """
        result = await self._run(statement)
        try:
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error("Commit failed: %s", str(e))
            raise PersistenceError(context={"error": str(e)}) from e
        return result

    async def ping(self) -> bool:
        """Lightweight connectivity check used by the health route."""
        await self._run(text("SELECT 1"))
        return True

    async def _run(self, statement: Executable):
        try:
            return await self._session.execute(statement)
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error("Statement failed: %s", str(e))
            raise PersistenceError(
                context={"error": str(e), "error_type": type(e).__name__},
            ) from e


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits anything still pending
        4. On error: rolls back
        5. Always: closes the session (returns connection to pool)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def get_gateway(
    session: AsyncSession = Depends(get_db_session),
) -> PersistenceGateway:
    """
    FastAPI dependency wrapping the request session in a PersistenceGateway.

    FastAPI caches dependencies per request, so the authentication guard and
    the route handler share the same gateway and session.
    """
    return PersistenceGateway(session)


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def init_models() -> None:
    """
    What:  Creates any missing tables.
    When:  Called during application startup (lifespan).
    How:   Imports the table definitions so they register with Base.metadata,
           then runs create_all. Existing tables are left untouched.
    """
    from partcat.models import tables  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
