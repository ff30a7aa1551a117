"""Streamlit UI for exploring real-estate listings."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import sys

import streamlit as st

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

load_dotenv(dotenv_path=ROOT_DIR / ".env", override=False)

from app.backend_client import BackendClient
from app.components.charts import (
    render_choropleth,
    render_correlation_heatmap,
    render_group_bar_chart,
    render_overview_chart,
    render_scatter,
    render_state_bar_chart,
)
from app.components.tables import (
    render_group_summary_table,
    render_missing_table,
    render_overview_table,
)
from listings.errors import DatasetError, MissingInputFile
from listings.models.listing import DatasetReport
from listings.models.views import GeoMapState, OverviewState, ScatterState, StateComparisonState

st.set_page_config(page_title="Listings Explorer", layout="wide", page_icon="🏠")

DATASET_ARG: Optional[str] = sys.argv[1] if len(sys.argv) > 1 else None


@st.cache_resource(show_spinner=False)
def get_backend_client(listings_csv: Optional[str]) -> BackendClient:
    return BackendClient(listings_csv)


def session_default(key: str, factory):
    if key not in st.session_state:
        st.session_state[key] = factory()
    return st.session_state[key]


def render_overview_tab(backend: BackendClient, report: DatasetReport) -> None:
    st.subheader("Dataset")
    cols = st.columns(3)
    cols[0].metric("Listings", f"{report.rows:,}")
    cols[1].metric("Complete listings", f"{report.cleaned_rows:,}")
    cols[2].metric("Dropped (missing values)", f"{report.dropped_rows:,}")
    if report.provenance:
        st.caption(f"Source: {report.provenance}")
    if report.cleaned_rows == 0:
        st.warning("No listing has price, bedrooms, bathrooms, lot size and house size all recorded.")

    st.markdown("#### Missing values")
    render_missing_table(report.missing_by_field, report.rows)

    state_col, status_col = st.columns(2)
    with state_col:
        st.markdown("#### By state")
        by_state = backend.group_summary("state")
        chart = render_group_bar_chart(by_state, "Highest average price by state")
        if chart is not None:
            st.plotly_chart(chart, use_container_width=True)
        render_group_summary_table(by_state, "State")
    with status_col:
        st.markdown("#### By status")
        by_status = backend.group_summary("status")
        render_group_summary_table(by_status, "Status")
        if report.cleaned_rows:
            st.plotly_chart(render_correlation_heatmap(backend.correlations()), use_container_width=True)


def render_variables_tab(backend: BackendClient, report: DatasetReport) -> None:
    state: OverviewState = session_default("overview_state", backend.default_overview_state)
    with st.form("overview_form"):
        choices = report.field_choices
        index = choices.index(state.selected_field) if state.selected_field in choices else 0
        field = st.selectbox("Variable", choices, index=index)
        if st.form_submit_button("Summarise"):
            state = OverviewState(selected_field=field)
            st.session_state["overview_state"] = state
    try:
        result = backend.overview(state)
    except DatasetError as exc:
        st.error(str(exc))
        return
    st.caption("Computed over all listings, before removing incomplete rows.")
    table_col, chart_col = st.columns([1, 2])
    with table_col:
        render_overview_table(result)
    with chart_col:
        chart = render_overview_chart(result)
        if chart is not None:
            st.plotly_chart(chart, use_container_width=True)


def render_state_comparison_tab(backend: BackendClient, report: DatasetReport) -> None:
    state: StateComparisonState = session_default("state_comparison_state", backend.default_state_comparison_state)
    with st.form("state_comparison_form"):
        selected = st.multiselect("States", report.state_choices, default=state.selected_states)
        if st.form_submit_button("Compare"):
            state = StateComparisonState(selected_states=selected)
            st.session_state["state_comparison_state"] = state
    try:
        result = backend.compare_states(state)
    except DatasetError as exc:
        st.error(str(exc))
        return
    chart = render_state_bar_chart(result)
    if chart is None:
        st.info("Select at least one state to compare.")
        return
    st.plotly_chart(chart, use_container_width=True)


def render_scatter_tab(backend: BackendClient, report: DatasetReport) -> None:
    state: ScatterState = session_default("scatter_state", backend.default_scatter_state)
    if not report.state_choices:
        st.info("No states recorded in this dataset.")
        return
    with st.form("scatter_form"):
        choices = report.state_choices
        index = choices.index(state.selected_state) if state.selected_state in choices else 0
        selected = st.selectbox("State", choices, index=index)
        log_scale = st.checkbox("Log scale", value=state.log_scale)
        if st.form_submit_button("Plot"):
            state = ScatterState(selected_state=selected, log_scale=log_scale)
            st.session_state["scatter_state"] = state
    try:
        result = backend.scatter(state)
    except DatasetError as exc:
        st.error(str(exc))
        return
    if not result.points:
        st.info(f"No listings to plot for {result.state}.")
        return
    st.plotly_chart(render_scatter(result), use_container_width=True)
    if result.excluded:
        st.caption(f"{result.excluded:,} listings with a zero or negative size or price have no logarithm and are not shown.")


def render_map_tab(backend: BackendClient) -> None:
    try:
        default: GeoMapState = session_default("geo_map_default", backend.default_geo_map_state)
    except MissingInputFile as exc:
        st.error(f"The map is unavailable: {exc}")
        return
    if default.price_range is None:
        st.info("No complete listings to map.")
        return
    lo, hi = default.price_range
    if lo < hi:
        price_range = st.slider(
            "Average price range ($)",
            min_value=float(lo),
            max_value=float(hi),
            value=(float(lo), float(hi)),
            step=max((hi - lo) / 200, 1.0),
        )
    else:
        price_range = (lo, hi)
    show_na = st.checkbox("Show states without data", value=default.show_na)
    try:
        result = backend.geo_map(GeoMapState(price_range=price_range, show_na=show_na))
    except DatasetError as exc:
        st.error(str(exc))
        return
    st.plotly_chart(render_choropleth(result), use_container_width=True)
    st.caption(f"{len(result.matched_regions)} states within the selected range.")


def main() -> None:
    st.title("Real-Estate Listings Explorer")
    try:
        backend = get_backend_client(DATASET_ARG)
        report = backend.dataset_report()
    except MissingInputFile as exc:
        st.error(f"Could not load the listings dataset: {exc}")
        st.stop()
        return

    overview_tab, variables_tab, comparison_tab, scatter_tab, map_tab = st.tabs(
        ["Overview", "Variables", "State comparison", "Scatterplot", "Map"]
    )
    with overview_tab:
        render_overview_tab(backend, report)
    with variables_tab:
        render_variables_tab(backend, report)
    with comparison_tab:
        render_state_comparison_tab(backend, report)
    with scatter_tab:
        render_scatter_tab(backend, report)
    with map_tab:
        render_map_tab(backend)


main()
