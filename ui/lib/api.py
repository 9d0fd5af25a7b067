"""API client for the ensgraph backend."""

from __future__ import annotations

import os
from typing import Any

import requests


def get_base_url() -> str:
    """Backend API base URL (no trailing slash)."""
    return (os.environ.get("ENSGRAPH_API_URL") or "http://localhost:8000").rstrip("/")


class ApiError(Exception):
    """Backend answered with an error payload."""


def _raise_for_status(r: requests.Response) -> None:
    if r.ok:
        return
    try:
        detail = r.json().get("detail")
    except ValueError:
        detail = None
    raise ApiError(detail or f"HTTP {r.status_code}")


def get_profile(ens_name: str) -> dict[str, Any]:
    """GET /api/v1/profile/{name}: {ensName, address, avatar, twitter, github, email}."""
    url = f"{get_base_url()}/api/v1/profile/{ens_name}"
    r = requests.get(url, timeout=30)
    _raise_for_status(r)
    return r.json()


def get_graph() -> dict[str, Any]:
    """GET /api/v1/graph: {nodes: [{id, ensName, metadata}], links: [{id, source, target}]}."""
    r = requests.get(f"{get_base_url()}/api/v1/graph", timeout=30)
    _raise_for_status(r)
    return r.json()


def add_connection(source_ens: str, target_ens: str) -> dict[str, Any]:
    """POST /api/v1/graph: find-or-create both nodes and the edge between them."""
    payload = {
        "sourceEns": source_ens.strip().lower(),
        "targetEns": target_ens.strip().lower(),
    }
    r = requests.post(f"{get_base_url()}/api/v1/graph", json=payload, timeout=30)
    _raise_for_status(r)
    return r.json()


def get_graph_image(format: str = "png") -> bytes:
    """GET /api/v1/graph/export?format=png|jpeg: rendered graph image."""
    url = f"{get_base_url()}/api/v1/graph/export"
    r = requests.get(url, params={"format": format}, timeout=60)
    _raise_for_status(r)
    return r.content


def health() -> dict[str, Any]:
    """GET /api/v1/health."""
    r = requests.get(f"{get_base_url()}/api/v1/health", timeout=5)
    _raise_for_status(r)
    return r.json()


def ready() -> dict[str, Any]:
    """GET /api/v1/ready."""
    r = requests.get(f"{get_base_url()}/api/v1/ready", timeout=5)
    _raise_for_status(r)
    return r.json()
