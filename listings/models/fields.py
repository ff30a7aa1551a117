"""Registry of the listing columns and the kind each one is declared as."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Tuple

import pandas as pd
from pandas.api import types as ptypes

FieldKind = Literal["numeric", "categorical", "date", "text", "other"]


@dataclass(frozen=True)
class FieldSpec:
    name: str
    kind: FieldKind
    label: str


FIELD_REGISTRY: Dict[str, FieldSpec] = {
    spec.name: spec
    for spec in (
        FieldSpec("price", "numeric", "Price ($)"),
        FieldSpec("bed", "numeric", "Bedrooms"),
        FieldSpec("bath", "numeric", "Bathrooms"),
        FieldSpec("acre_lot", "numeric", "Lot size (acres)"),
        FieldSpec("house_size", "numeric", "House size (sqft)"),
        FieldSpec("state", "categorical", "State"),
        FieldSpec("city", "categorical", "City"),
        FieldSpec("status", "categorical", "Status"),
        FieldSpec("street", "text", "Street"),
        FieldSpec("prev_sold_date", "date", "Previously sold"),
    )
}

# Cleaning requires all of these; the loader parses them as numbers.
NUMERIC_FIELDS: Tuple[str, ...] = ("price", "bed", "bath", "acre_lot", "house_size")
CATEGORICAL_FIELDS: Tuple[str, ...] = ("state", "city", "status")
REQUIRED_FIELDS: Tuple[str, ...] = NUMERIC_FIELDS + CATEGORICAL_FIELDS


def field_kind(name: str, series: pd.Series) -> FieldKind:
    """Declared kind of a column, inferring from dtype for unregistered ones."""

    spec = FIELD_REGISTRY.get(name)
    if spec is not None:
        return spec.kind
    if ptypes.is_bool_dtype(series) or ptypes.is_datetime64_any_dtype(series):
        return "other"
    if ptypes.is_numeric_dtype(series):
        return "numeric"
    if ptypes.is_object_dtype(series) or ptypes.is_string_dtype(series) or isinstance(series.dtype, pd.CategoricalDtype):
        return "categorical"
    return "other"


def field_label(name: str) -> str:
    spec = FIELD_REGISTRY.get(name)
    return spec.label if spec else name.replace("_", " ").capitalize()
