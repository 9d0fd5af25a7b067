"""FastAPI application factory with lifespan events."""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from urllib.parse import urlparse

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ensgraph.api.router import api_router
from ensgraph.config import get_settings
from ensgraph.db.connection import Database
from ensgraph.db.schema import init_schema
from ensgraph.services.ens_service import ProfileResolver, build_ens_client
from ensgraph.utils.exceptions import EnsGraphError
from ensgraph.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown resources."""
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT, settings.DATABASE_ECHO)

    database = Database(settings)
    await database.connect()
    await init_schema(database)
    app.state.database = database

    # One resolution client per process, handed to the resolver explicitly.
    app.state.resolver = ProfileResolver.from_settings(build_ens_client(settings), settings)

    logger.info("app_started", rpc_host=urlparse(settings.ETH_RPC_URL).hostname)
    yield

    await database.close()
    logger.info("app_stopped")


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT, settings.DATABASE_ECHO)

    application = FastAPI(
        title="ensgraph",
        description="ENS profile lookup and connection graph",
        version="0.1.0",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(api_router)

    @application.middleware("http")
    async def request_id_middleware(request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    @application.exception_handler(EnsGraphError)
    async def ensgraph_exception_handler(request: Request, exc: EnsGraphError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("request_failed", error=exc.message, path=request.url.path)
        else:
            logger.info("request_rejected", error=exc.message, path=request.url.path)
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message, "type": type(exc).__name__},
        )

    @application.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_exception", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error", "type": type(exc).__name__},
        )

    return application


app = create_app()
