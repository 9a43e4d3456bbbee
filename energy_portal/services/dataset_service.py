"""Relays paginated dataset listings from the backend."""

from __future__ import annotations

from typing import Any, Optional

from energy_portal.domain.pagination import parse_query_int
from energy_portal.services.backend_client import BackendClient
from energy_portal.utils.config import Settings, get_settings
from energy_portal.utils.logger import get_logger


logger = get_logger(__name__)


class DatasetProxyService:
    def __init__(
        self,
        client: Optional[BackendClient] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._client = client or BackendClient(settings=self._settings)

    def resolve_query(self, page: Optional[str], limit: Optional[str]) -> tuple[int, int]:
        return (
            parse_query_int(page, self._settings.dataset_default_page),
            parse_query_int(limit, self._settings.dataset_default_limit),
        )

    async def fetch_page(self, page: Optional[str], limit: Optional[str]) -> Any:
        """Return the backend body unchanged; range checks are the backend's job."""
        resolved_page, resolved_limit = self.resolve_query(page, limit)
        data = await self._client.get_json(
            "/dataset",
            params={"page": resolved_page, "limit": resolved_limit},
        )
        if isinstance(data, dict):
            rows = data.get("data") or []
            logger.info(
                "Fetched dataset page %s (limit %s): %d rows of %s",
                resolved_page,
                resolved_limit,
                len(rows),
                data.get("total"),
            )
            if rows:
                logger.debug("First data item: %s", rows[0])
        return data
