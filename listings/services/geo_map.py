"""Average price per state joined onto state outlines for the choropleth."""

from __future__ import annotations

from typing import Optional

import pandas as pd

from ..errors import require_fields
from ..models.views import GeoMapResult, GeoMapState, MapVertex
from ..utils.coerce import to_float
from ..utils.logging import get_logger
from ..utils.normalize import Bounds
from .aggregation import group_summarize

LOGGER = get_logger("services.geo_map")


def geo_price_summary(cleaned: pd.DataFrame) -> pd.DataFrame:
    """Mean price per state keyed by the lower-cased state name (``region``).

    Lower-casing happens after grouping. When two spellings collapse onto one
    region the first group is kept so the join cannot duplicate geometry.
    """

    summary = group_summarize(cleaned, "state", "price", "mean", value_name="avg_price")
    summary = summary.dropna(subset=["state"])
    summary = summary.assign(region=summary["state"].astype(str).str.lower())
    collisions = summary["region"].duplicated(keep="first")
    if collisions.any():
        LOGGER.warning(
            "geo_region_collision regions=%s",
            ",".join(sorted(summary.loc[collisions, "region"].unique())),
        )
        summary = summary.loc[~collisions]
    return summary[["region", "avg_price"]].reset_index(drop=True)


def observed_price_range(summary: pd.DataFrame) -> Optional[Bounds]:
    return Bounds.observed(summary["avg_price"].tolist())


def build_geo_map(cleaned: pd.DataFrame, polygons: pd.DataFrame, state: GeoMapState) -> GeoMapResult:
    """Left-join the in-range state averages onto every polygon vertex."""

    require_fields(polygons.columns, "region", "group", "long", "lat")
    summary = geo_price_summary(cleaned)
    observed = observed_price_range(summary)
    bounds = Bounds.from_pair(state.price_range) if state.price_range is not None else observed

    if bounds is None:
        in_range = summary.iloc[0:0]
    else:
        in_range = summary.loc[summary["avg_price"].between(bounds.minimum, bounds.maximum, inclusive="both")]

    joined = polygons[["region", "group", "long", "lat"]].merge(
        in_range, how="left", on="region", validate="many_to_one"
    )
    vertices = [
        MapVertex(
            long=float(row.long),
            lat=float(row.lat),
            group=int(row.group),
            region=str(row.region),
            avg_price=to_float(row.avg_price),
        )
        for row in joined.itertuples(index=False)
    ]
    matched = sorted(set(in_range["region"]) & set(polygons["region"]))
    return GeoMapResult(
        price_range=bounds.as_tuple() if bounds else None,
        observed_range=observed.as_tuple() if observed else None,
        show_na=state.show_na,
        vertices=vertices,
        matched_regions=matched,
    )


class GeoMapController:
    def __init__(self, cleaned: pd.DataFrame, polygons: pd.DataFrame) -> None:
        self.cleaned = cleaned
        self.polygons = polygons

    def default_state(self) -> GeoMapState:
        observed = observed_price_range(geo_price_summary(self.cleaned))
        return GeoMapState(price_range=observed.as_tuple() if observed else None, show_na=True)

    def recompute(self, state: GeoMapState) -> GeoMapResult:
        return build_geo_map(self.cleaned, self.polygons, state)
