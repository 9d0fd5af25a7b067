"""Unit tests for the insert-ignore statement builders and table DDL."""

from __future__ import annotations

import pytest
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.schema import CreateTable

from ensgraph.db.models import Node
from ensgraph.db.queries import insert_edge_ignore, insert_node_ignore
from ensgraph.utils.exceptions import StoreError


def _sql(statement, dialect) -> str:
    return " ".join(str(statement.compile(dialect=dialect)).split())


@pytest.mark.parametrize("dialect_name, dialect", [
    ("sqlite", sqlite.dialect()),
    ("postgresql", postgresql.dialect()),
])
def test_node_insert_ignores_name_conflicts(dialect_name, dialect):
    sql = _sql(insert_node_ignore(dialect_name, "vitalik.eth"), dialect)
    assert sql.startswith("INSERT INTO nodes")
    assert "ON CONFLICT (ens_name) DO NOTHING" in sql


def test_postgres_edge_insert_ignores_pair_conflicts():
    sql = _sql(insert_edge_ignore("postgresql", 1, 2), postgresql.dialect())
    assert sql.startswith("INSERT INTO edges")
    assert "ON CONFLICT (source_node_id, target_node_id) DO NOTHING" in sql


@pytest.mark.parametrize("dialect_name", ["mysql", "mssql", ""])
def test_unsupported_dialect_raises_store_error(dialect_name):
    with pytest.raises(StoreError, match="Unsupported database dialect"):
        insert_node_ignore(dialect_name, "vitalik.eth")
    with pytest.raises(StoreError):
        insert_edge_ignore(dialect_name, 1, 2)


def test_ens_name_column_has_no_length_cap():
    ddl = str(CreateTable(Node.__table__).compile(dialect=postgresql.dialect()))
    assert "ens_name TEXT NOT NULL" in ddl
    assert "VARCHAR" not in ddl
