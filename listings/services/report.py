"""Dataset-level summaries shown before the interactive views."""

from __future__ import annotations

from typing import List, Sequence

import pandas as pd

from ..errors import FieldNotFound, require_fields
from ..models.fields import NUMERIC_FIELDS
from ..models.listing import CorrelationMatrix, DatasetReport, GroupSummary
from ..utils.coerce import to_float
from .aggregation import group_summaries
from .cleaning import missing_by_field
from .state_comparison import distinct_states

SUMMARY_KEYS = ("state", "status")


class ReportService:
    def __init__(self, repository):
        self.repository = repository

    def dataset_report(self) -> DatasetReport:
        raw = self.repository.raw
        cleaned = self.repository.cleaned
        return DatasetReport(
            rows=len(raw.index),
            cleaned_rows=len(cleaned.index),
            dropped_rows=len(raw.index) - len(cleaned.index),
            missing_by_field=missing_by_field(raw),
            field_choices=[str(col) for col in raw.columns],
            state_choices=distinct_states(raw),
            provenance=self.repository.provenance(),
        )

    def group_summary(self, key_field: str) -> List[GroupSummary]:
        """Per-state or per-status summary of the cleaned listings."""

        if key_field not in SUMMARY_KEYS:
            raise FieldNotFound(key_field, SUMMARY_KEYS)
        return group_summaries(self.repository.cleaned, key_field)

    def correlations(self, fields: Sequence[str] = NUMERIC_FIELDS) -> CorrelationMatrix:
        return correlation_matrix(self.repository.cleaned, fields)


def correlation_matrix(table: pd.DataFrame, fields: Sequence[str] = NUMERIC_FIELDS) -> CorrelationMatrix:
    """Pearson correlations between the numeric fields."""

    require_fields(table.columns, *fields)
    numeric = table[list(fields)].apply(pd.to_numeric, errors="coerce")
    corr = numeric.corr()
    values = [[to_float(corr.loc[row, col]) for col in fields] for row in fields]
    return CorrelationMatrix(fields=list(fields), values=values)
