"""Relational schema initialization for the nodes and edges tables."""

from __future__ import annotations

from ensgraph.db.connection import Database
from ensgraph.db.models import Base
from ensgraph.utils.logging import get_logger

logger = get_logger(__name__)


async def init_schema(db: Database) -> None:
    """Create all tables, unique constraints and indexes if they are missing."""
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("database_schema_initialized", tables=sorted(Base.metadata.tables))


async def drop_schema(db: Database) -> None:
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    logger.warning("database_schema_dropped")
