"""
Q&A Service — Storage Client
==============================

What:  Async SQLAlchemy engine, session factory, schema setup and the
       FastAPI session dependency, wrapped in an explicitly constructed
       `Database` object.
Why:   Centralizes all database connection logic in one place. The object is
       built once by the application factory and stored on `app.state`, so
       handlers receive it through dependency injection instead of reaching
       for a module-level handle.
How:   `connect()` verifies connectivity and creates the `questions` and
       `answers` tables; `get_db_session` yields a per-request session that
       commits on success and rolls back on error.
Who:   Constructed in main.py; used by routes via
       Depends(get_db_session, scope="function").
When:  Engine is created with the app; sessions are created per request.

Connection Pooling:
    PostgreSQL URLs get a sized pool (db_pool_size + db_max_overflow) with
    pre-ping. SQLite URLs (tests, local experiments) use SQLAlchemy's default
    pool and enable `PRAGMA foreign_keys` on every connection, otherwise the
    answers → questions ON DELETE CASCADE rule is silently ignored.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy import BigInteger, Integer, event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import Settings
from app.exceptions import DatabaseError

logger = logging.getLogger(__name__)

# 64-bit ids on PostgreSQL (BIGINT). SQLite only autoincrements a column
# declared exactly INTEGER PRIMARY KEY, which is already 64-bit there.
BigIntId = BigInteger().with_variant(Integer, "sqlite")


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class so that `Base.metadata` knows every
    table when `Database.connect()` creates the schema.
    """
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owns the engine and session factory for one database.

    Attributes:
        url:      SQLAlchemy async URL this client connects to
        engine:   AsyncEngine managing the connection pool
        sessions: async_sessionmaker producing AsyncSession instances
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 10,
        max_overflow: int = 10,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.url = url
        is_sqlite = url.startswith("sqlite")

        engine_kwargs: Dict[str, Any] = {"echo": echo}
        if not is_sqlite:
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=pool_pre_ping,
                pool_recycle=3600,
            )

        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)

        if is_sqlite:
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        # expire_on_commit=False: response models are built from ORM objects
        # after the request's transaction has committed
        self.sessions = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    async def connect(self) -> None:
        """
        Verify connectivity and ensure the schema exists.

        What:  Opens a connection, then runs CREATE TABLE IF NOT EXISTS for
               every model registered on Base (questions, answers, the
               answers.question_id index and its cascading foreign key).
        When:  Once, during application startup.

        Raises:
            Whatever the driver raises when the database is unreachable or the
            DDL fails. The lifespan handler treats this as fatal.
        """
        # Import models so they register with Base.metadata
        from app.models import Answer, Question  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ready (%s)", self.engine.url.render_as_string(hide_password=True))

    async def ping(self) -> bool:
        """Run SELECT 1; False if the database is unreachable."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a transactional session scope.

        How it works:
            1. Creates a new session from the factory
            2. Yields it to the caller
            3. On error in the caller: rolls back and re-raises
            4. On success: commits; a failed COMMIT is rolled back and raised
               as DatabaseError so the request answers 500
            5. Always: closes the session (returns connection to pool)
        """
        async with self.sessions() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

            try:
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Commit failed: %s", str(e), exc_info=True)
                raise DatabaseError(context={"operation": "commit"}) from e

    async def dispose(self) -> None:
        """Close all pooled connections (application shutdown)."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    The `Database` is looked up on `request.app.state`, where the application
    factory placed it. Routes declare it with scope="function" so the commit
    runs when the endpoint returns, before the response is sent: a client that
    received 201 can read the row back, and a failed COMMIT becomes a 500.

    Example usage in a route:
        @router.get("/questions")
        async def list_questions(
            db: AsyncSession = Depends(get_db_session, scope="function"),
        ):
            ...
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
