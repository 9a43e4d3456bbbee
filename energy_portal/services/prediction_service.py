"""Forwards prediction requests to the backend and normalizes the reply."""

from __future__ import annotations

import json
from typing import Any, Optional

from energy_portal.domain.models import INPUT_FIELDS, PredictionResult
from energy_portal.services.backend_client import BackendClient, BackendParseError, ProxyError
from energy_portal.utils.config import Settings, get_settings
from energy_portal.utils.logger import get_logger


logger = get_logger(__name__)

MISSING_FIELDS_MESSAGE = "Missing required fields"


class PredictionValidationError(ProxyError):
    """Raised when a required prediction field is absent."""


def extract_prediction_fields(body: Any) -> dict[str, Any]:
    """Return exactly the four input fields, or raise if any is missing.

    ``building_type`` must be truthy; the numeric fields only need to be
    present and non-null, so ``0`` is accepted.
    """
    if not isinstance(body, dict):
        raise PredictionValidationError(MISSING_FIELDS_MESSAGE)
    if not body.get("building_type"):
        raise PredictionValidationError(MISSING_FIELDS_MESSAGE)
    for name in INPUT_FIELDS[1:]:
        if body.get(name) is None:
            raise PredictionValidationError(MISSING_FIELDS_MESSAGE)
    return {name: body[name] for name in INPUT_FIELDS}


class PredictionProxyService:
    def __init__(
        self,
        client: Optional[BackendClient] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._client = client or BackendClient(settings=self._settings)

    async def predict(self, body: Any) -> PredictionResult:
        payload = extract_prediction_fields(body)
        data = await self._client.post_json("/predict", payload)
        if not isinstance(data, dict):
            raise BackendParseError("Backend prediction response is not a JSON object")
        logger.debug("Raw backend response: %s", json.dumps(data, indent=2))

        result = PredictionResult.from_payload(data)
        logger.info(
            "Received prediction from backend: %s %s",
            result.energy_consumption,
            result.unit,
        )
        return result
