"""Render the ENS connection graph to PNG/JPEG image bytes."""

from __future__ import annotations

import io
from typing import Literal

import networkx as nx
from matplotlib.figure import Figure

from ensgraph.api.v1.schemas.graph import GraphResponse

_MAX_LABEL = 20


def to_digraph(graph: GraphResponse) -> nx.DiGraph:
    G = nx.DiGraph()
    for node in graph.nodes:
        G.add_node(node.id, ens_name=node.ens_name)
    for link in graph.links:
        G.add_edge(link.source, link.target, id=link.id)
    return G


def render_graph_image(
    graph: GraphResponse,
    format: Literal["png", "jpeg", "jpg"] = "png",
    dpi: int = 100,
    figsize: tuple[float, float] = (12, 8),
) -> bytes:
    """Render the graph with a force-directed layout using NetworkX + Matplotlib.

    Each call draws on its own Figure, never on pyplot's global state, so
    renders can run in worker threads.

    Args:
        graph: GraphResponse with nodes and links.
        format: Output format: "png", "jpeg", or "jpg".
        dpi: Dots per inch for the image.
        figsize: Figure size (width, height) in inches.

    Returns:
        Image bytes (PNG or JPEG).
    """
    if not graph.nodes:
        return _empty_image_bytes(format, dpi)

    G = to_digraph(graph)
    pos = nx.spring_layout(G, k=1.5, iterations=50, seed=42)

    labels = {}
    for node in graph.nodes:
        name = node.ens_name
        if len(name) > _MAX_LABEL:
            name = name[: _MAX_LABEL - 3] + "..."
        labels[node.id] = name

    # Hubs are drawn larger: size scales with total degree.
    sizes = [600 + 150 * G.degree(n) for n in G.nodes]

    fig = Figure(figsize=figsize, dpi=dpi)
    ax = fig.subplots()
    fig.patch.set_facecolor("#0b0f19")
    ax.set_facecolor("#0b0f19")

    nx.draw_networkx_nodes(G, pos, node_color="#22d3ee", node_size=sizes, alpha=0.9, ax=ax)
    nx.draw_networkx_edges(
        G,
        pos,
        edge_color="#64748b",
        arrows=True,
        arrowsize=14,
        connectionstyle="arc3,rad=0.1",
        ax=ax,
    )
    nx.draw_networkx_labels(G, pos, labels=labels, font_size=8, font_color="white", ax=ax)

    ax.axis("off")
    fig.tight_layout(pad=0.5)
    return _save(fig, format, dpi)


def _empty_image_bytes(format: Literal["png", "jpeg", "jpg"], dpi: int) -> bytes:
    """Return a small placeholder image when the graph has no nodes."""
    fig = Figure(figsize=(4, 2), dpi=dpi)
    ax = fig.subplots()
    fig.patch.set_facecolor("#0b0f19")
    ax.set_facecolor("#0b0f19")
    ax.text(0.5, 0.5, "No connections yet", ha="center", va="center", fontsize=12, color="white")
    ax.axis("off")
    return _save(fig, format, dpi)


def _save(fig: Figure, format: str, dpi: int) -> bytes:
    buf = io.BytesIO()
    save_fmt = "jpg" if format in ("jpeg", "jpg") else "png"
    fig.savefig(buf, format=save_fmt, bbox_inches="tight", facecolor=fig.get_facecolor(), dpi=dpi)
    buf.seek(0)
    return buf.read()
