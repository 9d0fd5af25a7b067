"""Health and readiness probe endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ensgraph.api.dependencies import get_database
from ensgraph.db.connection import Database
from ensgraph.services.graph_service import GraphService

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    return {"status": "healthy"}


@router.get("/ready")
async def ready(db: Database = Depends(get_database)) -> dict:
    try:
        ok = await db.health_check()
        nodes, edges = await GraphService(db).counts()
        return {
            "status": "ready" if ok else "degraded",
            "database": ok,
            "nodes": nodes,
            "edges": edges,
        }
    except Exception as exc:
        return {"status": "not_ready", "error": str(exc)}
