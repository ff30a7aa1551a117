import pandas as pd

from app.components.charts import (
    NA_COLOR,
    TRANSPARENT,
    fill_color,
    render_choropleth,
    render_scatter,
    render_state_bar_chart,
)
from listings.models.views import GeoMapState
from listings.services.geo_map import build_geo_map
from listings.services.scatter import scatter_points
from listings.services.state_comparison import compare_states
from listings.utils.normalize import Bounds, min_max


def _table() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "state": ["Texas", "Ohio", "Texas"],
            "price": [200.0, 100.0, 400.0],
            "house_size": [1000.0, 0.0, 1500.0],
        }
    )


def _polygons() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "region": ["texas"] * 3 + ["ohio"] * 3 + ["maine"] * 3,
            "group": [1, 1, 1, 2, 2, 2, 3, 3, 3],
            "long": [0.0, 1.0, 0.5] * 3,
            "lat": [0.0, 0.0, 1.0] * 3,
        }
    )


def test_missing_fill_is_grey_or_transparent():
    bounds = Bounds(0.0, 1.0)
    assert fill_color(None, bounds, show_na=True) == NA_COLOR
    assert fill_color(None, bounds, show_na=False) == TRANSPARENT
    assert fill_color(0.5, bounds, show_na=False) not in (NA_COLOR, TRANSPARENT)


def test_colour_position_is_clamped_to_bounds():
    bounds = Bounds.observed([300.0, None, float("nan"), 100.0])
    assert bounds.as_tuple() == (100.0, 300.0)
    assert min_max(200.0, bounds) == 0.5
    assert min_max(50.0, bounds) == 0.0
    assert min_max(900.0, bounds) == 1.0
    assert min_max(7.0, Bounds(7.0, 7.0)) == 0.5
    assert Bounds.observed([None, float("nan")]) is None


def test_choropleth_has_one_trace_per_polygon_plus_colour_bar():
    result = build_geo_map(_table(), _polygons(), GeoMapState(show_na=False))
    fig = render_choropleth(result)
    outlines = [trace for trace in fig.data if trace.fill == "toself"]
    assert len(outlines) == 3
    maine = next(trace for trace in outlines if trace.name == "maine")
    assert maine.fillcolor == TRANSPARENT
    assert len(fig.data) == 4


def test_bar_chart_keeps_ranking():
    fig = render_state_bar_chart(compare_states(_table(), ["Ohio", "Texas"]))
    assert list(fig.data[0].x) == ["Texas", "Ohio"]


def test_empty_comparison_has_no_chart():
    assert render_state_bar_chart(compare_states(_table(), [])) is None


def test_scatter_axis_titles_follow_scale():
    fig = render_scatter(scatter_points(_table(), "Ohio", log_scale=True))
    assert fig.layout.xaxis.title.text == "log(house size)"
    assert len(fig.data[0].x) == 0
