"""bandje FastAPI application entry point.

Loads configuration from ``.env`` and ``config/config.yaml``, configures
structured logging, builds the performance store during the lifespan
startup phase (before any request is accepted), and wires the sampling and
export services onto ``app.state`` for the routes.

A missing or malformed dataset aborts startup: the lifespan logs the error
and re-raises, and uvicorn exits without serving.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.responses import FileResponse

from bandje import __version__
from bandje.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from bandje.api.routes import router as api_router
from bandje.config.loader import load_config
from bandje.config.settings import Settings
from bandje.services.export_service import ExportService
from bandje.services.performance_store import PerformanceStore, initialize_store
from bandje.services.sampling_service import SamplingService
from bandje.utils.errors import StartupLoadError
from bandje.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_FRONTEND_DIR = Path(__file__).resolve().parent / "frontend"
_DEFAULT_CONFIG_PATH = "config/config.yaml"

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Component assembly
# ---------------------------------------------------------------------------


def _build_all(config: dict[str, Any], store: PerformanceStore | None = None) -> dict[str, Any]:
    """Load the store (unless one is given) and build the services around it.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    if store is None:
        store = initialize_store(config["dataset"]["path"])

    sampling = config.get("sampling", {})
    sampling_service = SamplingService(
        store,
        min_count=sampling.get("min_count", 1),
        max_count=sampling.get("max_count", 5),
    )
    export_service = ExportService(store)

    return {
        "performance_store": store,
        "sampling_service": sampling_service,
        "export_service": export_service,
    }


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(
    app_settings: Settings | None = None,
    *,
    store: PerformanceStore | None = None,
    config_path: str = _DEFAULT_CONFIG_PATH,
) -> FastAPI:
    """Build and configure the FastAPI application.

    Parameters
    ----------
    app_settings:
        Settings to use; the module-level ``settings`` when omitted.
    store:
        Pre-built store.  When omitted, the lifespan initializes the
        process-wide store from the configured dataset path.
    config_path:
        YAML defaults file merged under the settings.
    """
    s = app_settings or settings
    config = load_config(config_path, settings=s)

    @asynccontextmanager
    async def _lifespan(application: FastAPI):  # noqa: ANN202
        """Build the store and services on startup; nothing to release on shutdown."""
        try:
            components = _build_all(config, store=store)
        except StartupLoadError as exc:
            _logger.error(
                "dataset_load_failed",
                error_type=type(exc).__name__,
                message=exc.message,
                source=exc.source_name,
            )
            raise

        for key, value in components.items():
            setattr(application.state, key, value)

        _logger.info(
            "app_startup",
            version=__version__,
            environment=s.app_env,
            performances=len(components["performance_store"]),
            sample_range=[
                components["sampling_service"].min_count,
                components["sampling_service"].max_count,
            ],
        )

        yield

        _logger.info("app_shutdown")

    application = FastAPI(
        title="bandje API",
        version=__version__,
        description=(
            "Random festival performances (artist, festival, year) drawn from a "
            "read-only lineup dataset, plus a full-dataset download."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=config.get("cors", {}).get("allowed_origins"))

    # -- API routes --
    application.include_router(api_router)

    # -- Frontend --
    if (_FRONTEND_DIR / "index.html").exists():

        @application.get("/", include_in_schema=False)
        async def serve_index() -> FileResponse:
            return FileResponse(str(_FRONTEND_DIR / "index.html"))

    return application


app = create_app()


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Run the API server with uvicorn."""
    config = load_config(_DEFAULT_CONFIG_PATH, settings=settings)
    _logger.info(
        "server_starting",
        host=config["app"]["host"],
        port=config["app"]["port"],
        dataset=config["dataset"]["path"],
    )
    uvicorn.run(
        "bandje.main:app",
        host=config["app"]["host"],
        port=config["app"]["port"],
        reload=(settings.app_env == "development"),
        log_config=None,
    )


if __name__ == "__main__":
    main()
