"""Dashboard-side calls to the portal proxy API."""

from __future__ import annotations

from typing import Optional

import requests

from energy_portal.domain.models import DatasetPage, PredictionInput, PredictionResult
from energy_portal.domain.view_state import DatasetViewState
from energy_portal.utils.config import get_settings
from energy_portal.utils.logger import get_logger


logger = get_logger(__name__)

PREDICTION_ERROR_MESSAGE = "Failed to get prediction"
DATASET_ERROR_MESSAGE = "Failed to fetch dataset"


class PortalApiError(Exception):
    """Raised when a proxy call fails or returns an unusable body."""


def _api_url(path: str, base_url: Optional[str]) -> str:
    settings = get_settings()
    root = (base_url or settings.portal_api_url).rstrip("/")
    return f"{root}{settings.api_prefix}{path}"


def fetch_prediction(
    prediction_input: PredictionInput,
    base_url: Optional[str] = None,
    timeout: float = 10,
) -> PredictionResult:
    """Calls the proxy prediction endpoint."""
    try:
        response = requests.post(
            _api_url("/predict", base_url),
            json=prediction_input.to_payload(),
            timeout=timeout,
        )
        response.raise_for_status()
        payload = response.json()
    except (requests.exceptions.RequestException, ValueError) as exc:
        logger.error("Prediction call failed: %s", exc)
        raise PortalApiError(PREDICTION_ERROR_MESSAGE) from exc

    if not isinstance(payload, dict):
        raise PortalApiError(PREDICTION_ERROR_MESSAGE)
    logger.debug("Frontend received prediction data: %s", payload)
    return PredictionResult.from_payload(payload)


def fetch_dataset(
    page: int,
    limit: int,
    base_url: Optional[str] = None,
    timeout: float = 10,
) -> DatasetPage:
    """Calls the proxy dataset endpoint for one page."""
    try:
        response = requests.get(
            _api_url("/dataset", base_url),
            params={"page": page, "limit": limit},
            timeout=timeout,
        )
        response.raise_for_status()
        payload = response.json()
    except (requests.exceptions.RequestException, ValueError) as exc:
        logger.error("Dataset call failed: %s", exc)
        raise PortalApiError(DATASET_ERROR_MESSAGE) from exc

    if not isinstance(payload, dict):
        raise PortalApiError(DATASET_ERROR_MESSAGE)
    try:
        return DatasetPage.from_payload(payload)
    except (TypeError, ValueError) as exc:
        logger.error("Dataset payload rejected: %s", exc)
        raise PortalApiError(DATASET_ERROR_MESSAGE) from exc


def load_dataset_page(state: DatasetViewState, base_url: Optional[str] = None) -> bool:
    """
    Fetch the state's current page and settle the request.

    The ticket opened by begin_fetch is always resolved, so a failure of any
    kind leaves the view in the error state rather than loading forever.
    Returns True when the page was applied.
    """
    ticket = state.begin_fetch()
    try:
        dataset_page = fetch_dataset(page=ticket.page, limit=ticket.limit, base_url=base_url)
    except PortalApiError as exc:
        state.apply_failure(ticket.token, str(exc))
        return False
    except Exception:
        logger.exception("Unexpected dataset load failure")
        state.apply_failure(ticket.token, DATASET_ERROR_MESSAGE)
        return False
    return state.apply_page(ticket.token, dataset_page)
