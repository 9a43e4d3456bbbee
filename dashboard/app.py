"""Streamlit predictor page: building inputs in, monthly energy estimate out."""

from __future__ import annotations

import plotly.graph_objects as go
import streamlit as st

from energy_portal.domain.models import BUILDING_TYPES, PredictionInput, PredictionResult
from energy_portal.domain.view_state import PredictorViewState
from energy_portal.services.portal_client import PortalApiError, fetch_prediction
from energy_portal.utils.config import get_settings


settings = get_settings()

st.set_page_config(
    page_title="Energy Consumption Predictor",
    page_icon="⚡",
    layout="wide",
)


def _state() -> PredictorViewState:
    if "predictor_state" not in st.session_state:
        st.session_state["predictor_state"] = PredictorViewState()
    return st.session_state["predictor_state"]


def run_prediction(state: PredictorViewState, prediction_input: PredictionInput) -> None:
    token = state.submit()
    try:
        result = fetch_prediction(prediction_input)
    except PortalApiError as exc:
        state.resolve_failure(token, str(exc))
        return
    state.resolve_success(token, result)


def factor_figure(result: PredictionResult) -> go.Figure:
    names, values = zip(*result.factors.ordered_series())
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=list(names),
            y=list(values),
            mode="lines+markers",
            name="Contribution (kWh)",
            line=dict(color="#3b82f6", width=2),
        )
    )
    fig.update_layout(height=300, showlegend=True, margin=dict(l=20, r=20, t=20, b=20))
    return fig


# ==========================================
# UI Sections
# ==========================================
def render_form(state: PredictorViewState) -> None:
    st.subheader("Prediction Form")
    st.caption("Enter building details to predict energy usage")

    with st.form("prediction_form"):
        building_type = st.selectbox("Building Type", BUILDING_TYPES, index=0)
        square_footage = st.number_input("Square Footage", min_value=0.0, value=250.0, step=10.0)
        occupants = st.number_input("Number of Occupants", min_value=0, value=4, step=1)
        appliances = st.number_input("Number of Appliances", min_value=0, value=20, step=1)
        submitted = st.form_submit_button(
            "Predicting..." if state.loading else "Predict Energy Consumption",
            type="primary",
            disabled=state.loading,
            use_container_width=True,
        )

    if submitted:
        with st.spinner("Predicting..."):
            run_prediction(
                state,
                PredictionInput(
                    building_type=building_type,
                    square_footage=square_footage,
                    number_of_occupants=int(occupants),
                    appliances_used=int(appliances),
                ),
            )

    if state.error:
        st.error(state.error)

    if state.result is not None:
        st.success(
            "Predicted Monthly Energy Consumption: "
            f"**{state.result.format_monthly(settings.monthly_divisor)}**"
        )


def render_results(state: PredictorViewState) -> None:
    result = state.result
    if result is None:
        if not state.loading:
            with st.container(border=True):
                st.markdown("### 📊 Submit the form to see results")
                st.write("The prediction results and factor analysis will appear here.")
        return

    st.subheader("Prediction Results")
    st.metric(
        "Predicted Monthly Energy Consumption",
        result.format_monthly(settings.monthly_divisor),
    )

    st.markdown("#### Factor Contributions")
    st.plotly_chart(factor_figure(result), use_container_width=True)
    st.caption(
        "This chart shows how each input factor contributes to the total energy consumption prediction."
    )


def main() -> None:
    state = _state()

    header, nav = st.columns([4, 1])
    header.title("Energy Consumption Predictor")
    nav.page_link("pages/dataset.py", label="View Dataset", icon="📈")

    form_col, result_col = st.columns([1, 2])
    with form_col:
        render_form(state)
    with result_col:
        render_results(state)


if __name__ == "__main__":
    main()
