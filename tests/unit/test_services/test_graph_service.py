"""Unit tests for the connection store."""

from __future__ import annotations

import asyncio

import pytest

from ensgraph.db.schema import drop_schema
from ensgraph.services.graph_service import GraphService, normalize_ens_key
from ensgraph.utils.exceptions import InvalidRequest, StoreError


@pytest.mark.asyncio
async def test_list_graph_empty(graph_service):
    nodes, edges = await graph_service.list_graph()
    assert nodes == []
    assert edges == []


@pytest.mark.asyncio
async def test_upsert_creates_nodes_and_edge(graph_service):
    result = await graph_service.upsert_connection("vitalik.eth", "balajis.eth")

    assert result.created is True
    assert result.source_node.ens_name == "vitalik.eth"
    assert result.target_node.ens_name == "balajis.eth"
    assert result.edge.source_node_id == result.source_node.id
    assert result.edge.target_node_id == result.target_node.id
    assert result.source_node.metadata_json == "{}"


@pytest.mark.asyncio
async def test_upsert_twice_yields_one_edge(graph_service):
    first = await graph_service.upsert_connection("vitalik.eth", "balajis.eth")
    second = await graph_service.upsert_connection("vitalik.eth", "balajis.eth")

    assert second.created is False
    assert second.edge.id == first.edge.id
    assert second.source_node.id == first.source_node.id

    nodes, edges = await graph_service.list_graph()
    assert len(nodes) == 2
    assert [(e.source_node_id, e.target_node_id) for e in edges] == [
        (first.source_node.id, first.target_node.id)
    ]


@pytest.mark.asyncio
async def test_reverse_direction_is_a_distinct_edge(graph_service):
    forward = await graph_service.upsert_connection("a.eth", "b.eth")
    backward = await graph_service.upsert_connection("b.eth", "a.eth")

    assert forward.edge.id != backward.edge.id
    assert backward.created is True
    assert backward.edge.source_node_id == forward.edge.target_node_id
    assert backward.edge.target_node_id == forward.edge.source_node_id
    assert await graph_service.counts() == (2, 2)


@pytest.mark.asyncio
async def test_self_loop_rejected_without_writes(graph_service):
    with pytest.raises(InvalidRequest, match="self"):
        await graph_service.upsert_connection("a.eth", "a.eth")
    assert await graph_service.counts() == (0, 0)


@pytest.mark.asyncio
async def test_self_loop_detected_after_normalization(graph_service):
    with pytest.raises(InvalidRequest):
        await graph_service.upsert_connection("Nick.ETH", "  nick.eth ")
    assert await graph_service.counts() == (0, 0)


@pytest.mark.parametrize(
    ("source", "target"),
    [(None, "b.eth"), ("a.eth", None), ("", "b.eth"), ("a.eth", "   ")],
)
@pytest.mark.asyncio
async def test_missing_names_rejected(graph_service, source, target):
    with pytest.raises(InvalidRequest, match="required"):
        await graph_service.upsert_connection(source, target)
    assert await graph_service.counts() == (0, 0)


@pytest.mark.asyncio
async def test_names_are_case_normalized(graph_service):
    result = await graph_service.upsert_connection(" Vitalik.ETH ", "BALAJIS.eth")
    again = await graph_service.upsert_connection("vitalik.eth", "balajis.eth")

    assert result.source_node.ens_name == "vitalik.eth"
    assert again.edge.id == result.edge.id
    node = await graph_service.get_node("VITALIK.eth")
    assert node is not None
    assert node.id == result.source_node.id


@pytest.mark.asyncio
async def test_get_node_unknown(graph_service):
    assert await graph_service.get_node("nobody.eth") is None
    assert await graph_service.get_node("") is None


@pytest.mark.asyncio
async def test_shared_node_across_edges(graph_service):
    ab = await graph_service.upsert_connection("a.eth", "b.eth")
    ac = await graph_service.upsert_connection("a.eth", "c.eth")

    assert ab.source_node.id == ac.source_node.id
    assert await graph_service.counts() == (3, 2)


@pytest.mark.asyncio
async def test_concurrent_identical_upserts_converge(database):
    # Separate service instances, as separate requests would have.
    results = await asyncio.gather(
        *(GraphService(database).upsert_connection("a.eth", "b.eth") for _ in range(10))
    )

    assert len({r.edge.id for r in results}) == 1
    assert len({r.source_node.id for r in results}) == 1
    assert len({r.target_node.id for r in results}) == 1
    assert sum(r.created for r in results) == 1
    assert await GraphService(database).counts() == (2, 1)


@pytest.mark.asyncio
async def test_concurrent_mixed_upserts(database):
    pairs = [("a.eth", "b.eth"), ("b.eth", "a.eth"), ("a.eth", "c.eth")] * 4
    await asyncio.gather(*(GraphService(database).upsert_connection(s, t) for s, t in pairs))

    nodes, edges = await GraphService(database).list_graph()
    assert sorted(n.ens_name for n in nodes) == ["a.eth", "b.eth", "c.eth"]
    assert len(edges) == 3


@pytest.mark.asyncio
async def test_storage_failure_raises_store_error(database, graph_service):
    await drop_schema(database)

    with pytest.raises(StoreError):
        await graph_service.list_graph()
    with pytest.raises(StoreError, match="Failed to create connection"):
        await graph_service.upsert_connection("a.eth", "b.eth")


def test_normalize_ens_key():
    assert normalize_ens_key("  Foo.ETH ") == "foo.eth"
    assert normalize_ens_key(None) == ""


@pytest.mark.asyncio
async def test_long_names_are_stored_whole(graph_service):
    long_name = "a" * 300 + ".eth"
    result = await graph_service.upsert_connection(long_name, "nick.eth")

    assert result.source_node.ens_name == long_name
    assert (await graph_service.get_node(long_name)).id == result.source_node.id
