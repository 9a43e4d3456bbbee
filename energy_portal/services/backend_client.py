"""HTTP client for the external prediction/dataset backend."""

from __future__ import annotations

from typing import Any, Optional

import httpx

from energy_portal.utils.config import Settings, get_settings
from energy_portal.utils.logger import get_logger


logger = get_logger(__name__)


class ProxyError(Exception):
    """Base exception for proxy workflow failures."""


class BackendUnavailableError(ProxyError):
    """Raised on network failure or a non-2xx backend response."""


class BackendParseError(BackendUnavailableError):
    """Raised when the backend body is not the JSON object we expect."""


class BackendClient:
    """Issues one request per call against the configured backend base URL.

    ``transport`` lets callers substitute an ``httpx`` transport, for example
    ``httpx.MockTransport`` in tests.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._settings.backend_url

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self._settings.backend_timeout_seconds,
            headers={"Content-Type": "application/json"},
            transport=self._transport,
        )

    async def get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post_json(self, path: str, payload: dict[str, Any]) -> Any:
        return await self._request("POST", path, json=payload)

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        endpoint = f"{self.base_url}{path}"
        logger.info("Sending %s request to backend: %s", method, endpoint)
        try:
            async with self._client() as client:
                response = await client.request(method, path, **kwargs)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise BackendUnavailableError(
                f"Backend returned status {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise BackendUnavailableError(f"Backend request failed: {exc}") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise BackendParseError("Backend returned malformed JSON") from exc
