"""Plotly chart helpers for Streamlit UI."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

import plotly.graph_objects as go
from plotly.colors import sample_colorscale

from listings.models.listing import CorrelationMatrix, GroupSummary
from listings.models.views import GeoMapResult, MapVertex, OverviewResult, ScatterResult, StateComparisonResult
from listings.utils.normalize import Bounds, min_max

COLORSCALE = "Viridis"
NA_COLOR = "#bdbdbd"
TRANSPARENT = "rgba(0, 0, 0, 0)"


def _layout(fig: go.Figure, title: str, height: int = 420, **kwargs) -> go.Figure:
    fig.update_layout(
        title=title,
        margin=dict(l=10, r=10, t=40, b=30),
        height=height,
        template="plotly_white",
        **kwargs,
    )
    return fig


def render_state_bar_chart(result: StateComparisonResult) -> Optional[go.Figure]:
    if not result.bars:
        return None
    fig = go.Figure(
        go.Bar(
            x=[bar.state for bar in result.bars],
            y=[bar.avg_price for bar in result.bars],
            marker_color="#1565C0",
        )
    )
    # Keep the ranking from the result instead of plotly's category sorting.
    fig.update_xaxes(categoryorder="array", categoryarray=[bar.state for bar in result.bars])
    return _layout(fig, "Average price by state", xaxis_title="State", yaxis_title="Average price ($)")


def render_group_bar_chart(summaries: Sequence[GroupSummary], title: str, limit: int = 15) -> Optional[go.Figure]:
    rows = [row for row in summaries if row.key is not None][:limit]
    if not rows:
        return None
    fig = go.Figure(
        go.Bar(
            x=[row.key for row in rows],
            y=[row.avg_price for row in rows],
            customdata=[[row.count, row.median_size] for row in rows],
            hovertemplate="%{x}<br>Avg price $%{y:,.0f}<br>Listings %{customdata[0]}<br>Median size %{customdata[1]:,.0f} sqft<extra></extra>",
            marker_color="#42A5F5",
        )
    )
    fig.update_xaxes(categoryorder="array", categoryarray=[row.key for row in rows])
    return _layout(fig, title, yaxis_title="Average price ($)")


def render_scatter(result: ScatterResult) -> go.Figure:
    x = [point.house_size for point in result.points]
    y = [point.price for point in result.points]
    fig = go.Figure(
        go.Scatter(x=x, y=y, mode="markers", marker=dict(color="#1565C0", opacity=0.6, size=6))
    )
    if result.log_scale:
        x_title, y_title = "log(house size)", "log(price)"
    else:
        x_title, y_title = "House size (sqft)", "Price ($)"
    return _layout(fig, f"Price vs house size · {result.state or '-'}", xaxis_title=x_title, yaxis_title=y_title)


def render_overview_chart(result: OverviewResult, limit: int = 30) -> Optional[go.Figure]:
    if result.kind == "numeric" and result.numeric and result.numeric.count:
        summary = result.numeric
        fig = go.Figure(
            go.Box(
                name=result.label,
                q1=[summary.q1],
                median=[summary.median],
                q3=[summary.q3],
                lowerfence=[summary.min],
                upperfence=[summary.max],
                mean=[summary.mean],
                marker_color="#1565C0",
            )
        )
        return _layout(fig, f"Distribution of {result.label}", height=320)
    if result.kind == "categorical" and result.frequencies:
        top = result.frequencies[:limit]
        fig = go.Figure(go.Bar(x=[entry.value for entry in top], y=[entry.count for entry in top], marker_color="#42A5F5"))
        fig.update_xaxes(categoryorder="array", categoryarray=[entry.value for entry in top])
        return _layout(fig, f"Most frequent values of {result.label}", yaxis_title="Listings")
    return None


def render_correlation_heatmap(matrix: CorrelationMatrix) -> go.Figure:
    fig = go.Figure(
        go.Heatmap(
            z=matrix.values,
            x=matrix.fields,
            y=matrix.fields,
            zmin=-1,
            zmax=1,
            colorscale="RdBu",
            reversescale=True,
            texttemplate="%{z:.2f}",
        )
    )
    return _layout(fig, "Correlation of numeric fields", height=420)


def fill_color(value: Optional[float], bounds: Optional[Bounds], show_na: bool) -> str:
    if value is None or bounds is None:
        return NA_COLOR if show_na else TRANSPARENT
    return sample_colorscale(COLORSCALE, [min_max(value, bounds)])[0]


def _polygons(vertices: Sequence[MapVertex]) -> Dict[int, List[MapVertex]]:
    groups: Dict[int, List[MapVertex]] = {}
    for vertex in vertices:
        groups.setdefault(vertex.group, []).append(vertex)
    return groups


def render_choropleth(result: GeoMapResult) -> go.Figure:
    """One filled outline per polygon group, shaded by the state's average price."""

    bounds = Bounds.from_pair(result.price_range) if result.price_range else None
    fig = go.Figure()
    for group, points in _polygons(result.vertices).items():
        value = points[0].avg_price
        fig.add_trace(
            go.Scatter(
                x=[p.long for p in points],
                y=[p.lat for p in points],
                mode="lines",
                fill="toself",
                fillcolor=fill_color(value, bounds, result.show_na),
                line=dict(color="#ffffff", width=0.6),
                name=points[0].region,
                hoverinfo="text",
                text=f"{points[0].region}: " + (f"${value:,.0f}" if value is not None else "no data"),
                showlegend=False,
            )
        )
    if bounds is not None:
        # Invisible marker trace that only carries the colour bar.
        fig.add_trace(
            go.Scatter(
                x=[None],
                y=[None],
                mode="markers",
                marker=dict(
                    colorscale=COLORSCALE,
                    cmin=bounds.minimum,
                    cmax=bounds.maximum,
                    color=[bounds.minimum],
                    showscale=True,
                    colorbar=dict(title="Avg price ($)"),
                ),
                hoverinfo="skip",
                showlegend=False,
            )
        )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False, scaleanchor="x", scaleratio=1.3)
    return _layout(fig, "Average listing price by state", height=520)
