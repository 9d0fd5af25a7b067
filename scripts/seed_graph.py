"""Seed the connection store with a few well-known ENS names."""

from __future__ import annotations

import asyncio

from ensgraph.config import get_settings
from ensgraph.db.connection import Database
from ensgraph.db.schema import init_schema
from ensgraph.services.graph_service import GraphService
from ensgraph.utils.logging import setup_logging

SEED_CONNECTIONS = [
    ("vitalik.eth", "balajis.eth"),
    ("vitalik.eth", "nick.eth"),
    ("nick.eth", "vitalik.eth"),
    ("brantly.eth", "nick.eth"),
]


async def main() -> None:
    setup_logging(log_level="INFO", log_format="console")
    db = Database(get_settings())
    await db.connect()
    try:
        await init_schema(db)
        service = GraphService(db)
        for source, target in SEED_CONNECTIONS:
            await service.upsert_connection(source, target)
        nodes, edges = await service.counts()
        print(f"Seeded graph: {nodes} nodes, {edges} edges")
    finally:
        await db.close()


if __name__ == "__main__":
    asyncio.run(main())
