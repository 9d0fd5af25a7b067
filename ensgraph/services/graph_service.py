"""Connection store: ENS name nodes and directed, deduplicated edges."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError

from ensgraph.db.connection import Database
from ensgraph.db.models import Edge, Node
from ensgraph.db.queries import (
    ALL_EDGES,
    ALL_NODES,
    COUNT_EDGES,
    COUNT_NODES,
    insert_edge_ignore,
    insert_node_ignore,
    select_edge_by_pair,
    select_node_by_name,
)
from ensgraph.utils.exceptions import InvalidRequest, StoreError
from ensgraph.utils.logging import get_logger

logger = get_logger(__name__)


def normalize_ens_key(name: str | None) -> str:
    """Storage key for an ENS name: trimmed and lower-cased."""
    return (name or "").strip().lower()


@dataclass(frozen=True)
class ConnectionResult:
    source_node: Node
    target_node: Node
    edge: Edge
    created: bool


class GraphService:
    """Graph reads and the connection upsert protocol.

    Each find-or-create runs in its own short transaction; the unique
    constraints on ``nodes.ens_name`` and ``edges(source, target)`` are what
    keep concurrent callers from creating duplicates.
    """

    def __init__(self, db: Database) -> None:
        self._db = db

    async def list_graph(self) -> tuple[list[Node], list[Edge]]:
        try:
            async with self._db.session() as session:
                nodes = list((await session.scalars(ALL_NODES)).all())
                edges = list((await session.scalars(ALL_EDGES)).all())
        except SQLAlchemyError as exc:
            logger.error("graph_list_failed", error=str(exc))
            raise StoreError("Failed to fetch graph data") from exc
        return nodes, edges

    async def get_node(self, ens_name: str) -> Node | None:
        key = normalize_ens_key(ens_name)
        if not key:
            return None
        try:
            async with self._db.session() as session:
                return (await session.scalars(select_node_by_name(key))).one_or_none()
        except SQLAlchemyError as exc:
            logger.error("node_lookup_failed", ens_name=key, error=str(exc))
            raise StoreError("Failed to look up node") from exc

    async def counts(self) -> tuple[int, int]:
        try:
            async with self._db.session() as session:
                nodes = (await session.execute(COUNT_NODES)).scalar_one()
                edges = (await session.execute(COUNT_EDGES)).scalar_one()
        except SQLAlchemyError as exc:
            raise StoreError("Failed to count graph rows") from exc
        return nodes, edges

    async def upsert_connection(
        self, source_name: str | None, target_name: str | None
    ) -> ConnectionResult:
        source_key = normalize_ens_key(source_name)
        target_key = normalize_ens_key(target_name)

        if not source_key or not target_key:
            raise InvalidRequest("sourceEns and targetEns are required")
        if source_key == target_key:
            raise InvalidRequest("Cannot create edge to self")

        try:
            source_node = await self._find_or_create_node(source_key)
            target_node = await self._find_or_create_node(target_key)
            edge, created = await self._find_or_create_edge(source_node.id, target_node.id)
        except SQLAlchemyError as exc:
            logger.error(
                "connection_upsert_failed",
                source=source_key,
                target=target_key,
                error=str(exc),
            )
            raise StoreError("Failed to create connection") from exc

        logger.info(
            "edge_created" if created else "edge_exists",
            edge_id=edge.id,
            source=source_key,
            target=target_key,
        )
        return ConnectionResult(
            source_node=source_node,
            target_node=target_node,
            edge=edge,
            created=created,
        )

    async def _find_or_create_node(self, ens_name: str) -> Node:
        async with self._db.session() as session:
            result = await session.execute(
                insert_node_ignore(self._db.dialect_name, ens_name)
            )
            created = result.rowcount == 1
            await session.commit()
            node = (await session.scalars(select_node_by_name(ens_name))).one()

        if created:
            logger.info("node_created", node_id=node.id, ens_name=ens_name)
        return node

    async def _find_or_create_edge(
        self, source_node_id: int, target_node_id: int
    ) -> tuple[Edge, bool]:
        async with self._db.session() as session:
            result = await session.execute(
                insert_edge_ignore(self._db.dialect_name, source_node_id, target_node_id)
            )
            created = result.rowcount == 1
            await session.commit()
            edge = (
                await session.scalars(select_edge_by_pair(source_node_id, target_node_id))
            ).one()
        return edge, created
