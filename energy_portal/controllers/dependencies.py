"""Shared FastAPI dependency providers for controller layer."""

from __future__ import annotations

from fastapi import Request

from energy_portal.services.backend_client import BackendClient
from energy_portal.services.dataset_service import DatasetProxyService
from energy_portal.services.prediction_service import PredictionProxyService
from energy_portal.utils.config import Settings, get_settings


def get_app_settings(request: Request) -> Settings:
    """Settings the app was built with, or the environment defaults."""
    return getattr(request.app.state, "settings", None) or get_settings()


def _backend_client(request: Request) -> BackendClient:
    client = getattr(request.app.state, "backend_client", None)
    if client is None:
        client = BackendClient(settings=get_app_settings(request))
        request.app.state.backend_client = client
    return client


def get_prediction_service(request: Request) -> PredictionProxyService:
    service = getattr(request.app.state, "prediction_service", None)
    if service is None:
        service = PredictionProxyService(
            client=_backend_client(request), settings=get_app_settings(request)
        )
        request.app.state.prediction_service = service
    return service


def get_dataset_service(request: Request) -> DatasetProxyService:
    service = getattr(request.app.state, "dataset_service", None)
    if service is None:
        service = DatasetProxyService(
            client=_backend_client(request), settings=get_app_settings(request)
        )
        request.app.state.dataset_service = service
    return service
