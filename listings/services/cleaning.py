"""Drop listings that cannot take part in the numeric analysis."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from ..errors import require_fields
from ..models.fields import NUMERIC_FIELDS
from ..utils.logging import get_logger

LOGGER = get_logger("services.cleaning")


def clean(table: pd.DataFrame, fields: Sequence[str] = NUMERIC_FIELDS) -> pd.DataFrame:
    """Rows of ``table`` with every field in ``fields`` present.

    Source order and row labels are kept, and the input is not modified.
    """

    require_fields(table.columns, *fields)
    present = table[list(fields)].notna().all(axis=1)
    cleaned = table.loc[present].copy()
    dropped = len(table.index) - len(cleaned.index)
    if cleaned.empty:
        LOGGER.warning("cleaning_empty rows=%d dropped=%d", len(table.index), dropped)
    else:
        LOGGER.info("cleaned rows=%d kept=%d dropped=%d", len(table.index), len(cleaned.index), dropped)
    return cleaned


def missing_by_field(table: pd.DataFrame, fields: Sequence[str] = NUMERIC_FIELDS) -> dict:
    require_fields(table.columns, *fields)
    return {field: int(table[field].isna().sum()) for field in fields}


__all__ = ["clean", "missing_by_field"]
