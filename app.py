"""
app.py: FastAPI application factory for the portal API.

This is the ASGI application object imported by uvicorn. It builds the one
backend client both proxy services share and registers the routers.

Usage (via launcher):
    python main.py

Usage (direct uvicorn):
    uvicorn app:app --port 3000 --reload
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from energy_portal.controllers.page_controller import router as page_router
from energy_portal.controllers.proxy_controller import router as proxy_router
from energy_portal.services.backend_client import BackendClient
from energy_portal.services.dataset_service import DatasetProxyService
from energy_portal.services.prediction_service import PredictionProxyService
from energy_portal.utils.config import Settings, get_settings
from energy_portal.utils.logger import get_logger


logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    backend_client: Optional[BackendClient] = None,
) -> FastAPI:
    """
    Build and wire the FastAPI application.

    The backend URL is resolved once from settings and injected into both
    proxy services through a shared BackendClient on app.state.
    """
    settings = settings or get_settings()

    # --- Backend client (single resolved base URL) ---
    client = backend_client or BackendClient(settings=settings)

    # --- Services ---
    prediction_service = PredictionProxyService(client=client, settings=settings)
    dataset_service = DatasetProxyService(client=client, settings=settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Startup: proxying %s/* to backend %s", settings.api_prefix, client.base_url)
        yield
        logger.info("Shutdown complete")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # --- Routers ---
    app.include_router(proxy_router, prefix=settings.api_prefix)
    app.include_router(page_router)

    # --- Inject services into app.state for dependency resolution ---
    app.state.settings = settings
    app.state.backend_client = client
    app.state.prediction_service = prediction_service
    app.state.dataset_service = dataset_service

    return app


# Module-level app object for uvicorn
app = create_app()
