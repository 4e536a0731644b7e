"""FastAPI application entrypoint and router wiring for the backend."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import APIRouter, FastAPI, status
from fastapi.responses import PlainTextResponse

from validation_playbooks.api.playbooks import router as playbooks_router
from validation_playbooks.api.templates import router as templates_router
from validation_playbooks.core.config import settings
from validation_playbooks.core.cors import ApiCorsMiddleware
from validation_playbooks.core.error_handling import install_error_handling
from validation_playbooks.core.logging import configure_logging, get_logger
from validation_playbooks.core.spa import SinglePageApp
from validation_playbooks.core.storage_backend import StorageBackend
from validation_playbooks.schemas.health import HealthStatusResponse

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

configure_logging()
logger = get_logger(__name__)
OPENAPI_TAGS = [
    {
        "name": "health",
        "description": "Service liveness/readiness probes used by infrastructure checks.",
    },
    {
        "name": "playbooks",
        "description": "Create, read, update, and delete stored validation playbooks.",
    },
    {
        "name": "templates",
        "description": "Read-only built-in playbook templates shipped with the service.",
    },
]
API_NOT_FOUND_MESSAGE = "API endpoint not found"


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Initialize storage before serving requests."""
    logger.info(
        "app.lifecycle.starting environment=%s storage_backend=%s",
        settings.environment,
        settings.storage_backend.value,
    )
    if settings.storage_backend == StorageBackend.DATABASE:
        from validation_playbooks.db.session import init_db

        await init_db()
    logger.info("app.lifecycle.started")
    try:
        yield
    finally:
        logger.info("app.lifecycle.stopped")


app = FastAPI(
    title="Validation Playbooks API",
    version="0.1.0",
    lifespan=lifespan,
    openapi_tags=OPENAPI_TAGS,
)
app.add_middleware(ApiCorsMiddleware, allow_origin=settings.cors_allow_origin)
install_error_handling(app)


@app.get(
    "/health",
    tags=["health"],
    response_model=HealthStatusResponse,
    summary="Health Check",
    description="Lightweight liveness probe endpoint.",
)
def health() -> HealthStatusResponse:
    """Lightweight liveness probe endpoint."""
    return HealthStatusResponse(ok=True)


@app.get(
    "/healthz",
    tags=["health"],
    response_model=HealthStatusResponse,
    summary="Health Alias Check",
    description="Alias liveness probe endpoint for platform compatibility.",
)
def healthz() -> HealthStatusResponse:
    """Alias liveness probe endpoint for platform compatibility."""
    return HealthStatusResponse(ok=True)


@app.get(
    "/readyz",
    tags=["health"],
    response_model=HealthStatusResponse,
    summary="Readiness Check",
    description="Readiness probe endpoint for service orchestration checks.",
)
def readyz() -> HealthStatusResponse:
    """Readiness probe endpoint for service orchestration checks."""
    return HealthStatusResponse(ok=True)


api = APIRouter(prefix="/api")
api.include_router(playbooks_router)
api.include_router(templates_router)
app.include_router(api)


@app.api_route(
    "/api/{unmatched:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"],
    include_in_schema=False,
)
def api_not_found(unmatched: str) -> PlainTextResponse:
    """Unknown API routes answer 404 instead of falling through to the frontend."""
    _ = unmatched
    return PlainTextResponse(API_NOT_FOUND_MESSAGE, status_code=status.HTTP_404_NOT_FOUND)


# Registered last: everything that is not an API route belongs to the frontend.
app.mount("/", SinglePageApp(directory=settings.static_dir), name="frontend")
logger.debug("app.routes.registered count=%s", len(app.routes))
