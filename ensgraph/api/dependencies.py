"""Shared FastAPI dependency injection.

Process-wide resources are built in the app lifespan and kept on
``app.state``; routes receive them through these providers.
"""

from __future__ import annotations

from fastapi import Request

from ensgraph.db.connection import Database
from ensgraph.services.ens_service import ProfileResolver
from ensgraph.services.graph_service import GraphService


def get_database(request: Request) -> Database:
    db = getattr(request.app.state, "database", None)
    if db is None:
        raise RuntimeError("Database not initialized")
    return db


def get_graph_service(request: Request) -> GraphService:
    return GraphService(get_database(request))


def get_resolver(request: Request) -> ProfileResolver:
    resolver = getattr(request.app.state, "resolver", None)
    if resolver is None:
        raise RuntimeError("Profile resolver not initialized")
    return resolver
