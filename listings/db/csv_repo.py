"""CSV-backed listings source."""

from __future__ import annotations

import os
from typing import Dict, List, Optional

import pandas as pd

from ..errors import MissingInputFile
from ..models.fields import CATEGORICAL_FIELDS, NUMERIC_FIELDS, REQUIRED_FIELDS
from ..utils.io import file_sha256, load_csv, resolve_path
from .mappers import map_listing_row

DEFAULT_LISTINGS_CSV = "realtor-data.csv"


def listings_csv_name() -> str:
    return os.getenv("LISTINGS_CSV", DEFAULT_LISTINGS_CSV)


def prepare_listings(df: pd.DataFrame) -> pd.DataFrame:
    """Parse the analysed columns into numbers/strings; everything else is kept as read."""

    missing = [col for col in REQUIRED_FIELDS if col not in df.columns]
    if missing:
        raise MissingInputFile(f"Listings CSV is missing required columns: {', '.join(missing)}")
    df = df.copy()
    for col in NUMERIC_FIELDS:
        df[col] = pd.to_numeric(df[col], errors="coerce")
    for col in CATEGORICAL_FIELDS:
        df[col] = df[col].map(lambda v: None if pd.isna(v) else str(v)).astype("object")
    return df


class CSVRepository:
    def __init__(self, name: Optional[str] = None) -> None:
        self.name = name or listings_csv_name()
        self._listings = prepare_listings(load_csv(self.name))

    @property
    def listings(self) -> pd.DataFrame:
        return self._listings

    @property
    def path(self) -> str:
        return str(resolve_path(self.name))

    def list_listings(self, state: Optional[str] = None, limit: Optional[int] = 50) -> List[Dict]:
        df = self._listings
        if state:
            df = df[df["state"] == state]
        if limit is not None:
            df = df.head(limit)
        return [map_listing_row(record) for record in df.to_dict("records")]

    def provenance(self) -> Optional[str]:
        sha = file_sha256(self.name)
        if sha:
            return f"{os.path.basename(self.name)}#sha256:{sha}"
        return None
