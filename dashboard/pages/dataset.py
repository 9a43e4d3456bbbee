"""Streamlit dataset explorer: paginated rows, type filter and SVG line chart."""

from __future__ import annotations

import streamlit as st

from energy_portal.domain.aggregation import summarize_metric
from energy_portal.domain.chart import build_line_chart, legend_entries, render_svg
from energy_portal.domain.models import BUILDING_TYPES, METRIC_LABELS
from energy_portal.domain.pagination import LIMIT_CHOICES
from energy_portal.domain.view_state import ALL_TYPES, DatasetViewState
from energy_portal.services.portal_client import load_dataset_page


st.set_page_config(
    page_title="Training Dataset Visualization",
    page_icon="📈",
    layout="wide",
)

METRIC_OPTIONS = {
    "energy_consumption": "Energy Consumption",
    "square_footage": "Square Footage",
    "number_of_occupants": "Number of Occupants",
    "appliances_used": "Appliances Used",
}
FILTER_OPTIONS = {ALL_TYPES: "All Types", **{name: name for name in BUILDING_TYPES}}


def _state() -> DatasetViewState:
    if "dataset_state" not in st.session_state:
        st.session_state["dataset_state"] = DatasetViewState()
    return st.session_state["dataset_state"]


# ==========================================
# Control callbacks (run before the rerun)
# ==========================================
def _on_limit_change() -> None:
    _state().set_limit(st.session_state["dataset_limit"])


def _on_metric_change() -> None:
    _state().set_metric(st.session_state["dataset_metric"])


def _on_filter_change() -> None:
    _state().set_filter(st.session_state["dataset_filter"])


# ==========================================
# UI Sections
# ==========================================
def render_controls(state: DatasetViewState) -> None:
    with st.container(border=True):
        metric_col, filter_col, limit_col = st.columns(3)
        metric_col.selectbox(
            "Metric to Display:",
            list(METRIC_OPTIONS),
            index=list(METRIC_OPTIONS).index(state.metric),
            format_func=METRIC_OPTIONS.get,
            key="dataset_metric",
            on_change=_on_metric_change,
        )
        filter_col.selectbox(
            "Building Type Filter:",
            list(FILTER_OPTIONS),
            index=list(FILTER_OPTIONS).index(state.filter_type),
            format_func=FILTER_OPTIONS.get,
            key="dataset_filter",
            on_change=_on_filter_change,
        )
        limit_col.selectbox(
            "Data Points:",
            LIMIT_CHOICES,
            index=LIMIT_CHOICES.index(state.limit),
            key="dataset_limit",
            on_change=_on_limit_change,
        )

        page_col, prev_col, next_col = st.columns([6, 1, 1])
        page_col.write(state.page_label())
        prev_col.button(
            "Previous",
            disabled=not state.has_previous,
            on_click=state.previous_page,
            use_container_width=True,
        )
        next_col.button(
            "Next",
            disabled=not state.has_next,
            on_click=state.next_page,
            use_container_width=True,
        )


def render_legend() -> None:
    items = "".join(
        f'<span style="display:inline-flex;align-items:center;gap:6px;margin:0 12px;">'
        f'<span style="width:14px;height:14px;border-radius:50%;background:{color};'
        f'display:inline-block;"></span>{name}</span>'
        for name, color in legend_entries()
    )
    st.markdown(f'<div style="text-align:center;">{items}</div>', unsafe_allow_html=True)


def render_chart(state: DatasetViewState) -> None:
    rows = state.filtered_rows()
    chart = build_line_chart(rows, state.metric)
    if chart is None:
        st.caption(state.caption())
        return

    with st.container(border=True):
        st.subheader(METRIC_LABELS[state.metric])
        st.caption(state.caption())
        st.markdown(
            f'<div style="overflow-x:auto;">{render_svg(chart)}</div>',
            unsafe_allow_html=True,
        )
        render_legend()

    st.markdown("#### Summary by Building Type")
    st.dataframe(summarize_metric(rows, state.metric), use_container_width=True, hide_index=True)


def main() -> None:
    state = _state()
    if state.needs_fetch:
        with st.spinner("Loading dataset..."):
            load_dataset_page(state)
        if state.needs_fetch:
            # page was clamped to the fresh page count
            st.rerun()

    header, nav = st.columns([4, 1])
    header.title("Training Dataset Visualization")
    nav.page_link("app.py", label="Back to Predictor", icon="⚡")

    render_controls(state)

    if state.error:
        st.error(state.error)

    if state.loading:
        st.info("Loading dataset...")
    elif not state.rows:
        st.info("No data available")
    else:
        render_chart(state)


if __name__ == "__main__":
    main()
