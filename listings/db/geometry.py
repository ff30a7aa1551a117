"""Polygon outlines used as the base layer of the choropleth."""

from __future__ import annotations

import pandas as pd

from ..errors import MissingInputFile
from ..utils.io import load_csv
from ..utils.logging import get_logger

LOGGER = get_logger("db.geometry")

POLYGON_COLUMNS = ("region", "group", "long", "lat")


def prepare_polygons(df: pd.DataFrame) -> pd.DataFrame:
    """Validate and order a vertex table of (region, group, long, lat)."""

    missing = [col for col in POLYGON_COLUMNS if col not in df.columns]
    if missing:
        raise MissingInputFile(f"Polygon table is missing columns: {', '.join(missing)}")
    df = df.copy()
    if "order" in df.columns:
        df = df.sort_values("order", kind="mergesort")
    df["region"] = df["region"].astype(str)
    group = pd.to_numeric(df["group"], errors="coerce")
    if group.isna().any():
        raise MissingInputFile("Polygon table has vertices without a numeric group id")
    df["group"] = group.astype("int64")
    df["long"] = pd.to_numeric(df["long"], errors="coerce")
    df["lat"] = pd.to_numeric(df["lat"], errors="coerce")
    return df.reset_index(drop=True)


def load_polygons(name: str) -> pd.DataFrame:
    df = prepare_polygons(load_csv(name))
    LOGGER.info("loaded_polygons regions=%d vertices=%d", df["region"].nunique(), len(df.index))
    return df


__all__ = ["load_polygons", "prepare_polygons", "POLYGON_COLUMNS"]
