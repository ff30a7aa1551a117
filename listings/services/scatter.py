"""House size against price for the listings of one state."""

from __future__ import annotations

from typing import List, Optional

import numpy as np
import pandas as pd

from ..errors import require_fields
from ..models.views import ScatterPoint, ScatterResult, ScatterState
from ..utils.coerce import to_float
from ..utils.logging import get_logger
from .state_comparison import distinct_states

LOGGER = get_logger("services.scatter")


def scatter_points(raw: pd.DataFrame, selected_state: Optional[str], log_scale: bool = False) -> ScatterResult:
    """Paired (house_size, price) points for one state.

    Missing coordinates stay in the series as unplottable points. Under
    ``log_scale`` a row with a non-positive coordinate has no logarithm and
    is left out; it is counted in ``excluded``.
    """

    require_fields(raw.columns, "state", "house_size", "price")
    if selected_state is None:
        return ScatterResult(state=None, log_scale=log_scale, points=[])
    subset = raw.loc[raw["state"] == selected_state]
    sizes = pd.to_numeric(subset["house_size"], errors="coerce").to_numpy(dtype="float64")
    prices = pd.to_numeric(subset["price"], errors="coerce").to_numpy(dtype="float64")

    excluded = 0
    if log_scale:
        # NaN compares False here, so missing coordinates are kept as missing.
        undefined = (sizes <= 0) | (prices <= 0)
        excluded = int(undefined.sum())
        sizes, prices = sizes[~undefined], prices[~undefined]
        with np.errstate(divide="ignore", invalid="ignore"):
            sizes, prices = np.log(sizes), np.log(prices)
        if excluded:
            LOGGER.debug("scatter_log_excluded state=%s excluded=%d", selected_state, excluded)

    points = [ScatterPoint(house_size=to_float(x), price=to_float(y)) for x, y in zip(sizes, prices)]
    return ScatterResult(state=selected_state, log_scale=log_scale, points=points, excluded=excluded)


class ScatterController:
    def __init__(self, raw: pd.DataFrame) -> None:
        self.raw = raw

    def state_choices(self) -> List[str]:
        return distinct_states(self.raw)

    def default_state(self) -> ScatterState:
        choices = self.state_choices()
        return ScatterState(selected_state=choices[0] if choices else None, log_scale=False)

    def recompute(self, state: ScatterState) -> ScatterResult:
        return scatter_points(self.raw, state.selected_state, state.log_scale)
