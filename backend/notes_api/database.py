"""
Notes API — Database Lifecycle and Session Management
========================================================

What:  Async SQLAlchemy engine, session factory and declarative base.
How:   A `Database` object owns one engine (connection pool) and one session
       factory. The application lifespan creates it at startup, stores it on
       `app.state.database`, and disposes it at shutdown. The note store
       receives it by reference; nothing reads it from a module global.
Who:   Created by main.lifespan and by the test fixtures.

Connection Pooling:
    Server databases (PostgreSQL) get a sized QueuePool with pre-ping.
    SQLite (used by the test suite) keeps SQLAlchemy's default pool, since
    pool sizing arguments do not apply to it.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from notes_api.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass


class Database:
    """
    Process-wide database handle.

    Lifecycle:
        1. Database(url, ...):  configuration only, no I/O
        2. await create_all():  ensures the tables exist
        3. session():           per-operation sessions while serving
        4. await dispose():     closes every pooled connection

    Attributes:
        url:     The async SQLAlchemy URL this handle connects to
        engine:  The AsyncEngine (connection pool)
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 10,
        max_overflow: int = 5,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.url = url
        engine_kwargs = {"echo": echo}
        if not make_url(url).get_backend_name().startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=pool_pre_ping,
                pool_recycle=3600,
            )
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        # expire_on_commit=False keeps loaded attributes readable after commit
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_all(self) -> None:
        """
        What:  Creates any missing tables registered on Base.metadata.
        When:  Once at startup, and by test fixtures for a fresh database.
        """
        # Registers the notes table with Base.metadata
        from notes_api.models import note  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ready")

    async def drop_all(self) -> None:
        """Drops every table registered on Base.metadata (test teardown)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provides a session scoped to one store operation.

        How it works:
            1. Creates a new session from the factory
            2. Yields it to the caller
            3. On success: commits the transaction
            4. On error: rolls back and re-raises
            5. Always: closes the session (returns connection to pool)
        """
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def ping(self) -> bool:
        """Runs SELECT 1; returns False when the database is unreachable."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False
        return True

    async def dispose(self) -> None:
        """
        What:  Gracefully closes all connections in the pool.
        When:  Called during application shutdown (lifespan handler).
        """
        await self.engine.dispose()


def create_database(url: Optional[str] = None) -> Database:
    """
    Builds a Database from application settings.

    Args:
        url: Overrides the environment's database URL (used by tests)
    """
    return Database(
        url or settings.active_database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        echo=settings.log_level == "DEBUG",
    )
