"""Tabular components for summaries and group statistics."""

from __future__ import annotations

from typing import Dict, List, Optional

import pandas as pd
import streamlit as st

from listings.models.listing import GroupSummary
from listings.models.views import NumericSummary, OverviewResult


def _fmt_currency(value: Optional[float]) -> str:
    if value is None:
        return "Insufficient data"
    return f"${value:,.0f}"


def _fmt_number(value: Optional[float], precision: int = 0) -> str:
    if value is None:
        return "Insufficient data"
    return f"{value:,.{precision}f}"


def render_numeric_summary(summary: NumericSummary) -> None:
    data = [
        {"Statistic": "Count", "Value": _fmt_number(summary.count)},
        {"Statistic": "Missing", "Value": _fmt_number(summary.missing)},
        {"Statistic": "Mean", "Value": _fmt_number(summary.mean, precision=2)},
        {"Statistic": "Min", "Value": _fmt_number(summary.min, precision=2)},
        {"Statistic": "1st quartile", "Value": _fmt_number(summary.q1, precision=2)},
        {"Statistic": "Median", "Value": _fmt_number(summary.median, precision=2)},
        {"Statistic": "3rd quartile", "Value": _fmt_number(summary.q3, precision=2)},
        {"Statistic": "Max", "Value": _fmt_number(summary.max, precision=2)},
    ]
    st.dataframe(pd.DataFrame(data), hide_index=True, width="stretch")


def render_overview_table(result: OverviewResult) -> None:
    if result.kind == "numeric" and result.numeric is not None:
        render_numeric_summary(result.numeric)
        return
    if result.kind == "categorical":
        if not result.frequencies:
            st.info(f"No values recorded for {result.label}.")
            return
        df = pd.DataFrame([entry.model_dump() for entry in result.frequencies])
        df = df.rename(columns={"value": result.label, "count": "Listings"})
        st.dataframe(df, hide_index=True, width="stretch")
        if result.missing:
            st.caption(f"{result.missing:,} listings have no {result.label.lower()}.")
        return
    st.warning(f"Summaries are not available for {result.label}.")


def render_group_summary_table(summaries: List[GroupSummary], key_label: str) -> None:
    if not summaries:
        st.info("No listings to summarise.")
        return
    rows: List[Dict[str, str]] = [
        {
            key_label: row.key if row.key is not None else "—",
            "Average Price": _fmt_currency(row.avg_price),
            "Median Size (sqft)": _fmt_number(row.median_size),
            "Listings": _fmt_number(row.count),
        }
        for row in summaries
    ]
    st.dataframe(pd.DataFrame(rows), hide_index=True, width="stretch")


def render_missing_table(missing: Dict[str, int], total: int) -> None:
    df = pd.DataFrame(
        [
            {"Field": field, "Missing": count, "Share": f"{count / total * 100:.1f}%" if total else "—"}
            for field, count in missing.items()
        ]
    )
    st.dataframe(df, hide_index=True, width="stretch")
