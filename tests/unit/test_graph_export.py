"""Unit tests for graph response shaping, GraphML and image export."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from ensgraph.api.graph_image import render_graph_image, to_digraph
from ensgraph.api.v1.graph import to_graph_response, to_graphml
from ensgraph.api.v1.schemas.graph import GraphResponse
from ensgraph.db.models import Edge, Node

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def _sample_graph() -> GraphResponse:
    nodes = [
        Node(id=1, ens_name="vitalik.eth", metadata_json='{"color": "cyan"}'),
        Node(id=2, ens_name="balajis.eth", metadata_json="not json"),
        Node(id=3, ens_name="nick.eth", metadata_json="[1, 2]"),
    ]
    edges = [
        Edge(id=10, source_node_id=1, target_node_id=2),
        Edge(id=11, source_node_id=2, target_node_id=1),
        Edge(id=12, source_node_id=3, target_node_id=1),
    ]
    return to_graph_response(nodes, edges)


def test_graph_response_shape():
    graph = _sample_graph()
    payload = graph.model_dump(by_alias=True)

    assert payload["nodes"][0] == {"id": 1, "ensName": "vitalik.eth", "metadata": {"color": "cyan"}}
    assert payload["links"][0] == {"id": 10, "source": 1, "target": 2}


def test_unparseable_or_non_object_metadata_becomes_empty():
    graph = _sample_graph()
    assert graph.nodes[1].metadata == {}
    assert graph.nodes[2].metadata == {}


def test_digraph_keeps_direction():
    G = to_digraph(_sample_graph())
    assert G.has_edge(1, 2) and G.has_edge(2, 1)
    assert not G.has_edge(1, 3)
    assert G.nodes[3]["ens_name"] == "nick.eth"


def test_graphml_contains_nodes_and_edges():
    xml = to_graphml(_sample_graph())
    assert "<graphml" in xml
    assert "vitalik.eth" in xml
    assert 'edgedefault="directed"' in xml
    assert xml.count("<edge ") == 3


def test_render_graph_image_png():
    assert render_graph_image(_sample_graph(), format="png").startswith(PNG_MAGIC)


def test_render_empty_graph_placeholder():
    assert render_graph_image(GraphResponse(), format="png").startswith(PNG_MAGIC)


def test_render_graph_image_in_parallel_threads():
    graph = _sample_graph()
    with ThreadPoolExecutor(max_workers=4) as pool:
        formats = ["png"] * 4 + ["jpeg"] * 2
        images = list(pool.map(lambda fmt: render_graph_image(graph, format=fmt), formats))

    assert all(img.startswith(PNG_MAGIC) for img in images[:4])
    assert all(img.startswith(b"\xff\xd8") for img in images[4:])
