"""Tests for predictor and dataset view state transitions."""

from __future__ import annotations

import pytest

from energy_portal.domain.models import DatasetPage, DatasetRow, PredictionResult
from energy_portal.domain.view_state import (
    ALL_TYPES,
    DatasetViewState,
    PredictorViewState,
    RequestStatus,
    ViewStateError,
)


def make_row(building_type: str, energy: float = 1.0) -> DatasetRow:
    return DatasetRow(
        building_type=building_type,
        square_footage=100,
        number_of_occupants=2,
        appliances_used=5,
        energy_consumption=energy,
    )


def make_page(rows: list[DatasetRow], total: int = 127, limit: int = 50, page: int = 1) -> DatasetPage:
    return DatasetPage.from_payload(
        {
            "data": [row.__dict__ for row in rows],
            "total": total,
            "page": page,
            "limit": limit,
        }
    )


# --- Predictor ---

def test_predictor_starts_idle() -> None:
    state = PredictorViewState()
    assert state.status is RequestStatus.IDLE
    assert state.result is None


def test_predictor_submit_then_success() -> None:
    state = PredictorViewState()
    token = state.submit()
    assert state.loading

    assert state.resolve_success(token, PredictionResult(energy_consumption=400))
    assert state.status is RequestStatus.SUCCESS
    assert state.result.format_monthly() == "100.00 kWh"


def test_predictor_failure_clears_prior_result() -> None:
    state = PredictorViewState()
    state.resolve_success(state.submit(), PredictionResult(energy_consumption=10))

    token = state.submit()
    state.resolve_failure(token, "Failed to get prediction")

    assert state.status is RequestStatus.ERROR
    assert state.result is None
    assert state.error == "Failed to get prediction"


def test_predictor_resubmit_from_error_clears_error() -> None:
    state = PredictorViewState()
    state.resolve_failure(state.submit(), "boom")

    state.submit()

    assert state.status is RequestStatus.LOADING
    assert state.error is None


def test_predictor_stale_response_is_discarded() -> None:
    state = PredictorViewState()
    first = state.submit()
    second = state.submit()

    assert state.resolve_success(second, PredictionResult(energy_consumption=800))
    # the earlier request finishes last but must not overwrite the newer result
    assert not state.resolve_success(first, PredictionResult(energy_consumption=4))
    assert not state.resolve_failure(first, "late failure")

    assert state.result.energy_consumption == 800
    assert state.status is RequestStatus.SUCCESS


def test_predictor_stale_response_does_not_end_loading() -> None:
    state = PredictorViewState()
    first = state.submit()
    state.submit()

    state.resolve_success(first, PredictionResult(energy_consumption=1))

    assert state.loading
    assert state.result is None


# --- Dataset ---

def test_dataset_needs_fetch_on_first_render() -> None:
    state = DatasetViewState()
    assert state.needs_fetch
    ticket = state.begin_fetch()
    assert (ticket.page, ticket.limit) == (1, 100)
    assert not state.needs_fetch


def test_dataset_apply_page_updates_rows_and_page_count() -> None:
    state = DatasetViewState(limit=50)
    ticket = state.begin_fetch()

    state.apply_page(ticket.token, make_page([make_row("Residential")], total=127, limit=50))

    assert state.total_pages == 3
    assert state.page_label() == "Page 1 of 3"
    assert len(state.rows) == 1
    assert state.status is RequestStatus.SUCCESS


def test_dataset_limit_change_resets_page_before_next_fetch() -> None:
    state = DatasetViewState(limit=50)
    state.apply_page(state.begin_fetch().token, make_page([], total=127, limit=50))
    state.next_page()
    state.next_page()
    assert state.page == 3
    state.begin_fetch()

    state.set_limit(200)

    assert state.page == 1
    assert state.needs_fetch
    ticket = state.begin_fetch()
    assert (ticket.page, ticket.limit) == (1, 200)


def test_dataset_same_limit_keeps_page() -> None:
    state = DatasetViewState(page=2, limit=100, total_pages=4)
    state.set_limit(100)
    assert state.page == 2


def test_dataset_rejects_unknown_limit() -> None:
    with pytest.raises(ViewStateError):
        DatasetViewState().set_limit(75)


def test_dataset_page_navigation_is_clamped() -> None:
    state = DatasetViewState(total_pages=3)
    state.previous_page()
    assert state.page == 1
    assert not state.has_previous

    for _ in range(5):
        state.next_page()
    assert state.page == 3
    assert not state.has_next


def test_dataset_page_is_clamped_to_fresh_page_count() -> None:
    state = DatasetViewState(page=5, limit=50, total_pages=5)
    ticket = state.begin_fetch()

    state.apply_page(ticket.token, make_page([], total=127, limit=50, page=5))

    assert state.page == 3
    assert state.needs_fetch


def test_dataset_page_change_triggers_fetch() -> None:
    state = DatasetViewState(total_pages=3)
    state.begin_fetch()
    state.next_page()
    assert state.needs_fetch


def test_dataset_failure_sets_error_and_empties_rows() -> None:
    state = DatasetViewState()
    state.apply_page(state.begin_fetch().token, make_page([make_row("Commercial")]))

    state.apply_failure(state.begin_fetch().token, "Failed to fetch dataset")

    assert state.rows == []
    assert state.error == "Failed to fetch dataset"
    assert state.status is RequestStatus.ERROR


def test_dataset_stale_page_is_ignored() -> None:
    state = DatasetViewState(total_pages=3)
    old = state.begin_fetch()
    state.next_page()
    new = state.begin_fetch()

    assert state.apply_page(new.token, make_page([make_row("Industrial")]))
    assert not state.apply_page(old.token, make_page([make_row("Residential"), make_row("Residential")]))

    assert [row.building_type for row in state.rows] == ["Industrial"]


def test_dataset_filter_narrows_loaded_page_only() -> None:
    state = DatasetViewState(limit=50)
    rows = [make_row("Residential"), make_row("Commercial"), make_row("Residential")]
    state.apply_page(state.begin_fetch().token, make_page(rows, total=127, limit=50))

    state.set_filter("Residential")

    assert len(state.filtered_rows()) == 2
    assert state.total_pages == 3
    assert state.caption() == "Showing 2 data points for Residential buildings"
    assert not state.needs_fetch


def test_dataset_filter_all_returns_every_row() -> None:
    state = DatasetViewState(rows=[make_row("Residential"), make_row("Industrial")])
    state.set_filter(ALL_TYPES)
    assert state.caption() == "Showing 2 data points"


def test_dataset_rejects_unknown_filter_and_metric() -> None:
    state = DatasetViewState()
    with pytest.raises(ViewStateError):
        state.set_filter("Agricultural")
    with pytest.raises(ViewStateError):
        state.set_metric("building_type")
