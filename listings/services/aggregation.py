"""Group-by-key aggregation shared by the summary tables and the views."""

from __future__ import annotations

from typing import List, Literal

import numpy as np
import pandas as pd

from ..errors import require_fields
from ..models.listing import GroupSummary
from ..utils.coerce import to_float, to_str

Reducer = Literal["mean", "median", "count"]
REDUCERS = ("mean", "median", "count")


def _grouped(table: pd.DataFrame, key_field: str):
    # Groups come out in order of first appearance and rows with a missing key
    # still form a group of their own.
    return table.groupby(key_field, sort=False, dropna=False)


def group_summarize(
    table: pd.DataFrame,
    key_field: str,
    value_field: str,
    reducer: Reducer,
    value_name: str = "value",
) -> pd.DataFrame:
    """Reduce ``value_field`` per distinct ``key_field`` value.

    Returns a frame with the key column and ``value_name``, one row per group
    in emission order. Missing values are skipped by ``mean``/``median`` but
    the row still belongs to its group; ``count`` counts rows whatever
    ``value_field`` holds, but the column must still exist.
    """

    if reducer not in REDUCERS:
        raise ValueError(f"Unknown reducer '{reducer}', expected one of {REDUCERS}")
    require_fields(table.columns, key_field, value_field)
    if reducer == "count":
        reduced = _grouped(table, key_field).size()
    else:
        values = pd.to_numeric(table[value_field], errors="coerce")
        reduced = values.groupby(table[key_field], sort=False, dropna=False).agg(reducer)
    return reduced.rename(value_name).rename_axis(key_field).reset_index()


def sort_descending(frame: pd.DataFrame, column: str) -> pd.DataFrame:
    """Stable descending sort: ties keep their current order, NaN goes last."""

    require_fields(frame.columns, column)
    emitted = frame.assign(_emitted=np.arange(len(frame.index)))
    ordered = emitted.sort_values(
        [column, "_emitted"],
        ascending=[False, True],
        na_position="last",
        kind="mergesort",
    )
    return ordered.drop(columns="_emitted").reset_index(drop=True)


def summarize_groups(table: pd.DataFrame, key_field: str) -> pd.DataFrame:
    """avg_price, median_size and count per key, in emission order."""

    require_fields(table.columns, key_field, "price", "house_size")
    frame = table.assign(
        price=pd.to_numeric(table["price"], errors="coerce"),
        house_size=pd.to_numeric(table["house_size"], errors="coerce"),
    )
    summary = _grouped(frame, key_field).agg(
        avg_price=("price", "mean"),
        median_size=("house_size", "median"),
        count=("price", "size"),
    )
    return summary.reset_index()


def group_summaries(table: pd.DataFrame, key_field: str) -> List[GroupSummary]:
    """GroupSummary rows sorted by descending average price."""

    ordered = sort_descending(summarize_groups(table, key_field), "avg_price")
    return [
        GroupSummary(
            key=to_str(row[key_field]),
            avg_price=to_float(row["avg_price"]),
            median_size=to_float(row["median_size"]),
            count=int(row["count"]),
        )
        for _, row in ordered.iterrows()
    ]


__all__ = [
    "Reducer",
    "REDUCERS",
    "group_summarize",
    "sort_descending",
    "summarize_groups",
    "group_summaries",
]
