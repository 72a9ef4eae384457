"""
TravelMap Backend - Database Pool & Session Management
=======================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   `Database` owns one async engine (asyncpg driver) and its bounded
       connection pool. It is built once in the application lifespan, stored
       on `app.state.database`, handed to routes through `get_db_session`,
       and disposed at shutdown.
Who:   Route handlers receive sessions via FastAPI's dependency injection.

Connection Pooling Strategy:
    pool_size:        Persistent connections for normal load
    max_overflow:     Temporary connections for traffic spikes
    pool_timeout:     Seconds a request may wait for a free connection
    pool_pre_ping:    Validates connections before use (catches stale connections)
    command_timeout:  asyncpg per-statement limit
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for migrations.
    """
    pass


class Database:
    """
    Process-scoped owner of the connection pool.

    Usage:
        database = Database.from_settings(settings)
        async with database.session() as session:
            await session.execute(...)
        await database.dispose()
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 10,
        max_overflow: int = 5,
        pool_timeout: float = 30.0,
        pool_pre_ping: bool = True,
        command_timeout: float = 60.0,
        ssl: bool = False,
        echo: bool = False,
    ):
        connect_args: Dict[str, Any] = {"command_timeout": command_timeout}
        if ssl:
            # sslmode=require: encrypt, but do not verify the certificate chain
            connect_args["ssl"] = "require"

        self.engine: AsyncEngine = create_async_engine(
            url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            pool_pre_ping=pool_pre_ping,
            pool_recycle=1800,
            connect_args=connect_args,
            echo=echo,
        )
        self.session_factory = async_sessionmaker(
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
            pool_timeout=settings.db_pool_timeout,
            pool_pre_ping=settings.db_pool_pre_ping,
            command_timeout=settings.db_command_timeout,
            ssl=settings.database_ssl,
            echo=settings.log_level == "DEBUG",
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Scoped acquisition of a session (and, lazily, a pooled connection).

        How it works:
            1. Creates a new session from the factory
            2. Yields it to the caller, which executes and commits its statement
            3. On error: rolls back, then re-raises
            4. Always: closes the session, returning the connection to the pool
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def ping(self) -> None:
        """Runs SELECT 1 on a fresh pooled connection."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def wait_until_ready(self, attempts: int = 5, wait_multiplier: float = 1.0) -> None:
        """
        Ping the database with exponential backoff until it answers.

        Raises the last connection error once `attempts` pings have failed.
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(multiplier=wait_multiplier, max=30),
            retry=retry_if_exception_type((OSError, SQLAlchemyError)),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                await self.ping()
        logger.info("Database is reachable")

    async def dispose(self) -> None:
        """Closes every pooled connection."""
        await self.engine.dispose()
        logger.info("Database pool disposed")


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    The pool comes from `request.app.state.database` (set by the lifespan).
    Services commit their own single statement; this dependency guarantees
    rollback on error and that the connection is returned afterwards.

    Example usage in a route:
        @router.get("/members")
        async def list_members(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
