"""User-facing page routes; the views themselves are served by the dashboard."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from energy_portal.controllers.dependencies import get_app_settings
from energy_portal.utils.config import Settings


router = APIRouter(tags=["pages"])


@router.get("/", include_in_schema=False)
async def predictor_page(settings: Settings = Depends(get_app_settings)) -> RedirectResponse:
    return RedirectResponse(url=f"{settings.dashboard_url}/")


@router.get("/dataset", include_in_schema=False)
async def dataset_page(settings: Settings = Depends(get_app_settings)) -> RedirectResponse:
    return RedirectResponse(url=f"{settings.dashboard_url}/dataset")
