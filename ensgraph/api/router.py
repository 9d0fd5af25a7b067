"""Top-level API router aggregating all v1 sub-routers."""

from __future__ import annotations

from fastapi import APIRouter

from ensgraph.api.v1.graph import router as graph_router
from ensgraph.api.v1.health import router as health_router
from ensgraph.api.v1.profile import router as profile_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health_router)
api_router.include_router(profile_router)
api_router.include_router(graph_router)
