"""Render state for the predictor and dataset views.

Each outbound request is issued a sequence token. Only the response that
carries the most recent token may change the state, so a slow earlier
response can never overwrite a newer one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from energy_portal.domain.models import BUILDING_TYPES, METRIC_LABELS, DatasetPage, DatasetRow, PredictionResult
from energy_portal.domain.pagination import LIMIT_CHOICES, clamp_page


ALL_TYPES = "all"


class RequestStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class ViewStateError(Exception):
    """Raised when a view control receives an unsupported value."""


@dataclass
class PredictorViewState:
    status: RequestStatus = RequestStatus.IDLE
    result: Optional[PredictionResult] = None
    error: Optional[str] = None
    _latest_token: int = 0

    @property
    def loading(self) -> bool:
        return self.status is RequestStatus.LOADING

    def submit(self) -> int:
        self._latest_token += 1
        self.status = RequestStatus.LOADING
        self.error = None
        self.result = None
        return self._latest_token

    def resolve_success(self, token: int, result: PredictionResult) -> bool:
        if token != self._latest_token:
            return False
        self.status = RequestStatus.SUCCESS
        self.result = result
        self.error = None
        return True

    def resolve_failure(self, token: int, message: str) -> bool:
        if token != self._latest_token:
            return False
        self.status = RequestStatus.ERROR
        self.result = None
        self.error = message
        return True


@dataclass(frozen=True)
class FetchTicket:
    token: int
    page: int
    limit: int


@dataclass
class DatasetViewState:
    page: int = 1
    limit: int = 100
    total_pages: int = 1
    metric: str = "energy_consumption"
    filter_type: str = ALL_TYPES
    rows: list[DatasetRow] = field(default_factory=list)
    status: RequestStatus = RequestStatus.IDLE
    error: Optional[str] = None
    _latest_token: int = 0
    _fetched_key: Optional[tuple[int, int]] = None

    @property
    def loading(self) -> bool:
        return self.status is RequestStatus.LOADING

    @property
    def needs_fetch(self) -> bool:
        """True on first render and after any page or limit change."""
        return self._fetched_key != (self.page, self.limit)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def set_limit(self, limit: int) -> None:
        if limit not in LIMIT_CHOICES:
            raise ViewStateError(f"limit must be one of {LIMIT_CHOICES}")
        if limit == self.limit:
            return
        self.limit = limit
        self.page = 1

    def set_metric(self, metric: str) -> None:
        if metric not in METRIC_LABELS:
            raise ViewStateError(f"Unknown metric: {metric}")
        self.metric = metric

    def set_filter(self, filter_type: str) -> None:
        if filter_type != ALL_TYPES and filter_type not in BUILDING_TYPES:
            raise ViewStateError(f"Unknown building type: {filter_type}")
        self.filter_type = filter_type

    def previous_page(self) -> None:
        self.page = max(1, self.page - 1)

    def next_page(self) -> None:
        self.page = min(self.total_pages, self.page + 1)

    def begin_fetch(self) -> FetchTicket:
        self._latest_token += 1
        self.status = RequestStatus.LOADING
        self.error = None
        self._fetched_key = (self.page, self.limit)
        return FetchTicket(token=self._latest_token, page=self.page, limit=self.limit)

    def apply_page(self, token: int, dataset_page: DatasetPage) -> bool:
        if token != self._latest_token:
            return False
        self.rows = list(dataset_page.rows)
        self.total_pages = max(1, dataset_page.pages)
        clamped = clamp_page(self.page, self.total_pages)
        if clamped != self.page:
            self.page = clamped
        self.status = RequestStatus.SUCCESS
        return True

    def apply_failure(self, token: int, message: str) -> bool:
        if token != self._latest_token:
            return False
        self.rows = []
        self.error = message
        self.status = RequestStatus.ERROR
        return True

    def filtered_rows(self) -> list[DatasetRow]:
        """Rows of the loaded page only; pagination counts are unaffected."""
        if self.filter_type == ALL_TYPES:
            return list(self.rows)
        return [row for row in self.rows if row.building_type == self.filter_type]

    def caption(self) -> str:
        text = f"Showing {len(self.filtered_rows())} data points"
        if self.filter_type != ALL_TYPES:
            text += f" for {self.filter_type} buildings"
        return text

    def page_label(self) -> str:
        return f"Page {self.page} of {self.total_pages}"
