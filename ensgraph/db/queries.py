"""Statement builders for the connection store.

Find-or-create is expressed as INSERT ... ON CONFLICT DO NOTHING followed by a
re-read on the unique key, so concurrent identical writers converge on one row.
"""

from __future__ import annotations

from sqlalchemy import Select, func, select
from sqlalchemy.dialects import postgresql, sqlite

from ensgraph.db.models import Edge, Node
from ensgraph.utils.exceptions import StoreError

_INSERT_BY_DIALECT = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def _insert_ignore(dialect_name: str, model, values: dict, index_elements: list[str]):
    try:
        insert = _INSERT_BY_DIALECT[dialect_name]
    except KeyError:
        raise StoreError(f"Unsupported database dialect for upserts: {dialect_name}") from None
    return insert(model).values(**values).on_conflict_do_nothing(index_elements=index_elements)


def insert_node_ignore(dialect_name: str, ens_name: str):
    return _insert_ignore(dialect_name, Node, {"ens_name": ens_name}, ["ens_name"])


def insert_edge_ignore(dialect_name: str, source_node_id: int, target_node_id: int):
    return _insert_ignore(
        dialect_name,
        Edge,
        {"source_node_id": source_node_id, "target_node_id": target_node_id},
        ["source_node_id", "target_node_id"],
    )


def select_node_by_name(ens_name: str) -> Select:
    return select(Node).where(Node.ens_name == ens_name)


def select_edge_by_pair(source_node_id: int, target_node_id: int) -> Select:
    return select(Edge).where(
        Edge.source_node_id == source_node_id,
        Edge.target_node_id == target_node_id,
    )


ALL_NODES = select(Node).order_by(Node.id)
ALL_EDGES = select(Edge).order_by(Edge.id)
COUNT_NODES = select(func.count()).select_from(Node)
COUNT_EDGES = select(func.count()).select_from(Edge)
