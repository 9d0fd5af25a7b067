"""Graph API endpoints: list, connect, and export the ENS connection graph."""

from __future__ import annotations

import json
from typing import Literal

import networkx as nx
from fastapi import APIRouter, Depends
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from ensgraph.api.dependencies import get_graph_service
from ensgraph.api.graph_image import render_graph_image, to_digraph
from ensgraph.api.v1.schemas.graph import (
    ConnectionRequest,
    ConnectionResponse,
    GraphLink,
    GraphNode,
    GraphResponse,
    NodeRef,
)
from ensgraph.db.models import Edge, Node
from ensgraph.services.graph_service import GraphService
from ensgraph.utils.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/graph", tags=["graph"])


def _parse_metadata(node: Node) -> dict:
    try:
        value = json.loads(node.metadata_json or "{}")
    except json.JSONDecodeError:
        logger.warning("node_metadata_unparseable", node_id=node.id)
        return {}
    return value if isinstance(value, dict) else {}


def to_graph_response(nodes: list[Node], edges: list[Edge]) -> GraphResponse:
    """Shape stored rows for force-graph renderers: nodes plus id-referencing links."""
    return GraphResponse(
        nodes=[
            GraphNode(id=n.id, ens_name=n.ens_name, metadata=_parse_metadata(n))
            for n in nodes
        ],
        links=[
            GraphLink(id=e.id, source=e.source_node_id, target=e.target_node_id)
            for e in edges
        ],
    )


@router.get("", response_model=GraphResponse)
async def get_graph(
    service: GraphService = Depends(get_graph_service),
) -> GraphResponse:
    """All nodes and links currently stored."""
    nodes, edges = await service.list_graph()
    return to_graph_response(nodes, edges)


@router.post("", response_model=ConnectionResponse)
async def create_connection(
    body: ConnectionRequest,
    service: GraphService = Depends(get_graph_service),
) -> ConnectionResponse:
    """Find-or-create both ENS name nodes and the directed edge between them."""
    result = await service.upsert_connection(body.source_ens, body.target_ens)
    return ConnectionResponse(
        source_node=NodeRef(id=result.source_node.id, ens_name=result.source_node.ens_name),
        target_node=NodeRef(id=result.target_node.id, ens_name=result.target_node.ens_name),
        edge=GraphLink(
            id=result.edge.id,
            source=result.edge.source_node_id,
            target=result.edge.target_node_id,
        ),
        created=result.created,
    )


@router.get("/export")
async def export_graph(
    format: Literal["json", "graphml", "png", "jpeg"] = "json",
    service: GraphService = Depends(get_graph_service),
) -> Response:
    """Export the graph as JSON, GraphML, or a rendered PNG/JPEG image."""
    graph = await get_graph(service)

    if format == "json":
        content = json.dumps(graph.model_dump(by_alias=True), indent=2)
        return Response(
            content=content,
            media_type="application/json",
            headers={"Content-Disposition": "attachment; filename=ens_graph.json"},
        )

    if format == "graphml":
        return Response(
            content=to_graphml(graph),
            media_type="application/xml",
            headers={"Content-Disposition": "attachment; filename=ens_graph.graphml"},
        )

    # Layout and rasterizing are CPU-bound; keep them off the event loop.
    image = await run_in_threadpool(render_graph_image, graph, format=format)
    return Response(content=image, media_type=f"image/{format}")


def to_graphml(graph: GraphResponse) -> str:
    """Serialize the graph as GraphML; node ids are the stored node ids."""
    return "\n".join(nx.generate_graphml(to_digraph(graph)))
