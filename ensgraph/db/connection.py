"""Async SQLAlchemy engine management with session scoping and health checks."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ensgraph.config import Settings
from ensgraph.utils.logging import get_logger

logger = get_logger(__name__)


def _set_sqlite_pragma(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the async engine and session factory for the connection store.

    Provides connection pooling, health checks, and graceful shutdown.
    Designed for use with FastAPI lifespan events.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    async def connect(self) -> None:
        url = self._settings.DATABASE_URL
        connect_args: dict = {}
        if url.startswith("sqlite"):
            # Writers wait on the file lock instead of failing fast.
            connect_args["timeout"] = 30

        self._engine = create_async_engine(
            url,
            echo=self._settings.DATABASE_ECHO,
            connect_args=connect_args,
        )
        if self._engine.dialect.name == "sqlite":
            event.listen(self._engine.sync_engine, "connect", _set_sqlite_pragma)

        self._sessionmaker = async_sessionmaker(
            self._engine,
            expire_on_commit=False,
            autoflush=False,
        )
        await self.health_check()
        logger.info("database_connected", dialect=self._engine.dialect.name)

    async def close(self) -> None:
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._sessionmaker = None
            logger.info("database_disconnected")

    async def health_check(self) -> bool:
        async with self.engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            return result.scalar() == 1

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database engine not initialized; call connect() first")
        return self._engine

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if self._sessionmaker is None:
            raise RuntimeError("Database engine not initialized; call connect() first")
        async with self._sessionmaker() as session:
            yield session
