"""First-look summary of any single column of the raw listings."""

from __future__ import annotations

from typing import List

import pandas as pd

from ..errors import require_fields
from ..models.fields import field_kind, field_label
from ..models.views import FrequencyEntry, NumericSummary, OverviewResult, OverviewState
from ..utils.coerce import to_float
from .aggregation import sort_descending


def numeric_summary(series: pd.Series) -> NumericSummary:
    values = pd.to_numeric(series, errors="coerce")
    missing = int(values.isna().sum())
    values = values.dropna()
    if values.empty:
        return NumericSummary(count=0, missing=missing)
    q1, median, q3 = values.quantile([0.25, 0.5, 0.75]).tolist()
    return NumericSummary(
        count=int(values.size),
        missing=missing,
        mean=to_float(values.mean()),
        min=to_float(values.min()),
        q1=to_float(q1),
        median=to_float(median),
        q3=to_float(q3),
        max=to_float(values.max()),
    )


def frequency_table(series: pd.Series) -> List[FrequencyEntry]:
    """Occurrences per distinct value, most frequent first (ties by first appearance)."""

    present = series.dropna().astype(str)
    counts = present.groupby(present, sort=False).size()
    frame = counts.rename("count").rename_axis("value").reset_index()
    frame = sort_descending(frame, "count")
    return [FrequencyEntry(value=value, count=int(count)) for value, count in zip(frame["value"], frame["count"])]


def summarize_field(table: pd.DataFrame, field: str) -> OverviewResult:
    require_fields(table.columns, field)
    series = table[field]
    kind = field_kind(field, series)
    missing = int(series.isna().sum())
    if kind == "numeric":
        return OverviewResult(
            field=field,
            label=field_label(field),
            kind="numeric",
            numeric=numeric_summary(series),
            missing=missing,
        )
    if kind == "categorical":
        return OverviewResult(
            field=field,
            label=field_label(field),
            kind="categorical",
            frequencies=frequency_table(series),
            missing=missing,
        )
    return OverviewResult(field=field, label=field_label(field), kind="unsupported", missing=missing)


class OverviewController:
    """Summarises the unfiltered table, before any cleaning."""

    def __init__(self, raw: pd.DataFrame) -> None:
        self.raw = raw

    def field_choices(self) -> List[str]:
        return [str(col) for col in self.raw.columns]

    def default_state(self) -> OverviewState:
        return OverviewState()

    def recompute(self, state: OverviewState) -> OverviewResult:
        return summarize_field(self.raw, state.selected_field)
