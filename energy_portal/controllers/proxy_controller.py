"""HTTP controller layer for the dataset and prediction proxy endpoints."""

from __future__ import annotations

import json
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from pydantic import BaseModel

from energy_portal.controllers.dependencies import get_dataset_service, get_prediction_service
from energy_portal.services.backend_client import BackendUnavailableError
from energy_portal.services.dataset_service import DatasetProxyService
from energy_portal.services.prediction_service import (
    PredictionProxyService,
    PredictionValidationError,
)
from energy_portal.utils.logger import get_logger


logger = get_logger(__name__)
router = APIRouter(tags=["proxy"])

DATASET_FAILURE_MESSAGE = "Failed to fetch dataset from backend"
PREDICTION_FAILURE_MESSAGE = "Failed to get prediction from backend"


class FactorsResponse(BaseModel):
    building_type: float
    square_footage: float
    number_of_occupants: float
    appliances_used: float


class PredictionResponse(BaseModel):
    """Normalized prediction; every field is always populated."""

    energy_consumption: float
    unit: str
    factors: FactorsResponse


@router.get("/dataset", status_code=status.HTTP_200_OK)
async def dataset(
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    dataset_service: DatasetProxyService = Depends(get_dataset_service),
) -> Any:
    try:
        return await dataset_service.fetch_page(page=page, limit=limit)
    except BackendUnavailableError as exc:
        logger.error("Dataset fetch error: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=DATASET_FAILURE_MESSAGE,
        ) from exc
    except Exception as exc:
        logger.exception("Unexpected dataset proxy failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=DATASET_FAILURE_MESSAGE,
        ) from exc


@router.post("/predict", response_model=PredictionResponse, status_code=status.HTTP_200_OK)
async def predict(
    request: Request,
    prediction_service: PredictionProxyService = Depends(get_prediction_service),
) -> PredictionResponse:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.error("Prediction request body is not valid JSON")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=PREDICTION_FAILURE_MESSAGE,
        ) from exc

    try:
        result = await prediction_service.predict(body)
        return PredictionResponse(**result.to_dict())
    except PredictionValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except BackendUnavailableError as exc:
        logger.error("Prediction error: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=PREDICTION_FAILURE_MESSAGE,
        ) from exc
    except Exception as exc:
        logger.exception("Unexpected prediction proxy failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=PREDICTION_FAILURE_MESSAGE,
        ) from exc
