"""Average listing price of a user-selected set of states."""

from __future__ import annotations

from typing import List, Sequence

import pandas as pd

from ..errors import require_fields
from ..models.views import StateBar, StateComparisonResult, StateComparisonState
from ..utils.coerce import to_float
from .aggregation import group_summarize, sort_descending

DEFAULT_SELECTION_SIZE = 5


def distinct_states(table: pd.DataFrame) -> List[str]:
    """Distinct non-missing states in order of first appearance."""

    require_fields(table.columns, "state")
    return [str(state) for state in table["state"].dropna().unique()]


def compare_states(raw: pd.DataFrame, selected_states: Sequence[str]) -> StateComparisonResult:
    require_fields(raw.columns, "state", "price")
    selected = list(dict.fromkeys(selected_states))
    if not selected:
        return StateComparisonResult(selected_states=[], bars=[])
    subset = raw[raw["state"].isin(selected)]
    means = group_summarize(subset, "state", "price", "mean", value_name="avg_price")
    ranked = sort_descending(means, "avg_price")
    bars = [
        StateBar(state=str(row.state), avg_price=to_float(row.avg_price))
        for row in ranked.itertuples(index=False)
    ]
    return StateComparisonResult(selected_states=selected, bars=bars)


class StateComparisonController:
    def __init__(self, raw: pd.DataFrame) -> None:
        self.raw = raw

    def state_choices(self) -> List[str]:
        return distinct_states(self.raw)

    def default_state(self) -> StateComparisonState:
        return StateComparisonState(selected_states=self.state_choices()[:DEFAULT_SELECTION_SIZE])

    def recompute(self, state: StateComparisonState) -> StateComparisonResult:
        return compare_states(self.raw, state.selected_states)
