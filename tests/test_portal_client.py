from __future__ import annotations

import pytest
import requests

from energy_portal.domain.models import PredictionInput
from energy_portal.services import portal_client
from energy_portal.domain.view_state import DatasetViewState
from energy_portal.services.portal_client import (
    PortalApiError,
    fetch_dataset,
    fetch_prediction,
    load_dataset_page,
)


class FakeResponse:
    def __init__(self, status_code: int, payload=None, raise_on_json: bool = False) -> None:
        self.status_code = status_code
        self._payload = payload
        self._raise_on_json = raise_on_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._raise_on_json:
            raise ValueError("not json")
        return self._payload


def test_fetch_prediction_posts_form_and_parses_result(monkeypatch):
    calls = {}

    def fake_post(url, json, timeout):
        calls.update(url=url, json=json, timeout=timeout)
        return FakeResponse(
            200,
            {
                "energy_consumption": 400,
                "unit": "kWh",
                "factors": {
                    "building_type": 10,
                    "square_footage": 200,
                    "number_of_occupants": 90,
                    "appliances_used": 100,
                },
            },
        )

    monkeypatch.setattr(portal_client.requests, "post", fake_post)

    result = fetch_prediction(
        PredictionInput("Residential", 250, 4, 20),
        base_url="http://portal.test",
    )

    assert calls["url"] == "http://portal.test/api/predict"
    assert calls["json"] == {
        "building_type": "Residential",
        "square_footage": 250,
        "number_of_occupants": 4,
        "appliances_used": 20,
    }
    assert result.format_monthly() == "100.00 kWh"
    assert result.factors.square_footage == 200


def test_fetch_prediction_error_status_raises(monkeypatch):
    monkeypatch.setattr(
        portal_client.requests,
        "post",
        lambda url, json, timeout: FakeResponse(400, {"detail": "Missing required fields"}),
    )
    with pytest.raises(PortalApiError, match="Failed to get prediction"):
        fetch_prediction(PredictionInput("Residential", 1, 1, 1), base_url="http://portal.test")


def test_fetch_prediction_network_failure_raises(monkeypatch):
    def fake_post(url, json, timeout):
        raise requests.exceptions.ConnectionError("refused")

    monkeypatch.setattr(portal_client.requests, "post", fake_post)
    with pytest.raises(PortalApiError):
        fetch_prediction(PredictionInput("Commercial", 1, 1, 1), base_url="http://portal.test")


def test_fetch_dataset_passes_page_and_limit(monkeypatch):
    calls = {}

    def fake_get(url, params, timeout):
        calls.update(url=url, params=params)
        return FakeResponse(
            200,
            {
                "data": [
                    {
                        "building_type": "Commercial",
                        "square_footage": 900,
                        "number_of_occupants": 12,
                        "appliances_used": 30,
                        "energy_consumption": 2100,
                    }
                ],
                "total": 127,
                "page": 2,
                "limit": 50,
                "pages": 3,
            },
        )

    monkeypatch.setattr(portal_client.requests, "get", fake_get)

    page = fetch_dataset(page=2, limit=50, base_url="http://portal.test/")

    assert calls["url"] == "http://portal.test/api/dataset"
    assert calls["params"] == {"page": 2, "limit": 50}
    assert page.pages == 3
    assert page.rows[0].building_type == "Commercial"


def test_fetch_dataset_malformed_json_raises(monkeypatch):
    monkeypatch.setattr(
        portal_client.requests,
        "get",
        lambda url, params, timeout: FakeResponse(200, raise_on_json=True),
    )
    with pytest.raises(PortalApiError, match="Failed to fetch dataset"):
        fetch_dataset(page=1, limit=50, base_url="http://portal.test")


def test_fetch_dataset_error_status_raises(monkeypatch):
    monkeypatch.setattr(
        portal_client.requests,
        "get",
        lambda url, params, timeout: FakeResponse(500, {"detail": "Failed to fetch dataset from backend"}),
    )
    with pytest.raises(PortalApiError):
        fetch_dataset(page=1, limit=50, base_url="http://portal.test")


@pytest.mark.parametrize(
    "data",
    [["oops"], [None], {"building_type": "Commercial"}, "rows"],
)
def test_fetch_dataset_rejects_rows_that_are_not_objects(monkeypatch, data):
    monkeypatch.setattr(
        portal_client.requests,
        "get",
        lambda url, params, timeout: FakeResponse(
            200, {"data": data, "total": 1, "page": 1, "limit": 50, "pages": 1}
        ),
    )
    with pytest.raises(PortalApiError, match="Failed to fetch dataset"):
        fetch_dataset(page=1, limit=50, base_url="http://portal.test")


# --- load_dataset_page ---

def test_load_dataset_page_applies_the_fetched_page(monkeypatch):
    monkeypatch.setattr(
        portal_client.requests,
        "get",
        lambda url, params, timeout: FakeResponse(
            200,
            {
                "data": [{"building_type": "Industrial", "energy_consumption": 900}],
                "total": 1,
                "page": 1,
                "limit": 100,
                "pages": 1,
            },
        ),
    )
    state = DatasetViewState()

    assert load_dataset_page(state, base_url="http://portal.test") is True
    assert not state.loading
    assert state.error is None
    assert state.rows[0].building_type == "Industrial"


def test_load_dataset_page_malformed_rows_end_in_error_state(monkeypatch):
    monkeypatch.setattr(
        portal_client.requests,
        "get",
        lambda url, params, timeout: FakeResponse(200, {"data": ["oops"], "pages": 1}),
    )
    state = DatasetViewState()

    assert load_dataset_page(state, base_url="http://portal.test") is False
    assert not state.loading
    assert state.error == "Failed to fetch dataset"
    assert state.rows == []


def test_load_dataset_page_unexpected_failure_still_settles_the_request(monkeypatch):
    def broken_fetch(page, limit, base_url=None):
        raise AttributeError("'str' object has no attribute 'get'")

    monkeypatch.setattr(portal_client, "fetch_dataset", broken_fetch)
    state = DatasetViewState()

    assert load_dataset_page(state) is False
    assert not state.loading
    assert state.error == "Failed to fetch dataset"
    assert not state.needs_fetch
