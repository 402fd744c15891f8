"""FastAPI API routes for bandje.

Service dependencies are resolved from ``app.state`` via FastAPI's
``Depends`` using the ``Annotated`` pattern.

# ─── API ROUTE MAP ─────────────────────────────────────────────────────
#
# Endpoint                   Method  Description
# ─────────────────────────────────────────────────────────────────────
# /api/random-bands?count=N  GET     1-5 random performances (default 1)
# /api/all-bands             GET     Every performance, as a download
# /api/health                GET     Health check + dataset size
#
# DEPENDENCY INJECTION PATTERN:
# Each route declares its services as type-annotated params.  FastAPI
# resolves them via Depends() helpers that read from app.state (populated
# at startup in main.py's lifespan).
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Query, Request, Response

from bandje import __version__
from bandje.api.schemas import ErrorResponse, HealthResponse
from bandje.models.lineup import PerformanceRecord
from bandje.services.export_service import ExportService
from bandje.services.performance_store import PerformanceStore
from bandje.services.sampling_service import SamplingService
from bandje.utils.errors import EmptyResultError, StoreNotInitializedError
from bandje.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api")


# ---------------------------------------------------------------------------
# Dependency helpers
# ---------------------------------------------------------------------------


def _get_store(request: Request) -> PerformanceStore:
    store = getattr(request.app.state, "performance_store", None)
    if store is None:
        raise StoreNotInitializedError()
    return store


def _get_sampling_service(request: Request) -> SamplingService:
    service = getattr(request.app.state, "sampling_service", None)
    if service is None:
        raise StoreNotInitializedError()
    return service


def _get_export_service(request: Request) -> ExportService:
    service = getattr(request.app.state, "export_service", None)
    if service is None:
        raise StoreNotInitializedError()
    return service


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get(
    "/random-bands",
    response_model=list[PerformanceRecord],
    responses={404: {"model": ErrorResponse}},
)
async def random_bands(
    sampling_service: Annotated[SamplingService, Depends(_get_sampling_service)],
    count: Annotated[int | None, Query(description="Number of performances; clamped to the configured range")] = None,
) -> list[PerformanceRecord]:
    """Return a random selection of performances without repeats."""
    selection = sampling_service.sample(count)
    if not selection:
        raise EmptyResultError()
    return selection


@router.get(
    "/all-bands",
    response_class=Response,
    responses={200: {"content": {"application/json": {}}}},
)
async def all_bands(
    export_service: Annotated[ExportService, Depends(_get_export_service)],
) -> Response:
    """Return every performance as a downloadable JSON attachment."""
    return Response(
        content=export_service.export_json(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{export_service.filename}"'},
    )


@router.get("/health", response_model=HealthResponse)
async def health(
    store: Annotated[PerformanceStore, Depends(_get_store)],
) -> HealthResponse:
    """Health check with the size of the loaded dataset."""
    return HealthResponse(
        status="ok",
        version=__version__,
        performances=len(store),
        festivals=store.festivals(),
    )
