"""Shared, read-only tables for every view: raw listings, cleaned listings, polygons."""

from __future__ import annotations

import os
from typing import Dict, List, Optional

import pandas as pd

from ..services.cleaning import clean
from ..utils.logging import get_logger
from .csv_repo import CSVRepository
from .geometry import load_polygons

LOGGER = get_logger("db.repo")

DEFAULT_POLYGONS_CSV = "us_states_polygons.csv"


class Repo:
    """Loads the listings once and derives the cleaned table from them.

    Views receive ``raw``, ``cleaned`` and ``polygons`` by reference and must
    treat them as read-only.
    """

    def __init__(self, listings_csv: Optional[str] = None, polygons_csv: Optional[str] = None) -> None:
        self._csv_repo = CSVRepository(listings_csv)
        self.polygons_csv = polygons_csv or os.getenv("POLYGONS_CSV", DEFAULT_POLYGONS_CSV)
        self._raw = self._csv_repo.listings
        self._cleaned = clean(self._raw)
        self._polygons: Optional[pd.DataFrame] = None
        LOGGER.info(
            "Repository ready path=%s rows=%d cleaned=%d",
            self._csv_repo.path,
            len(self._raw.index),
            len(self._cleaned.index),
        )

    @property
    def raw(self) -> pd.DataFrame:
        return self._raw

    @property
    def cleaned(self) -> pd.DataFrame:
        return self._cleaned

    def polygons(self) -> pd.DataFrame:
        """Polygon vertices, loaded on first use; raises MissingInputFile."""

        if self._polygons is None:
            self._polygons = load_polygons(self.polygons_csv)
        return self._polygons

    # ------------------------------------------------------------------
    # Listings
    def list_listings(self, state: Optional[str] = None, limit: Optional[int] = 50) -> List[Dict]:
        return self._csv_repo.list_listings(state=state, limit=limit)

    def provenance(self) -> Optional[str]:
        return self._csv_repo.provenance()


_repo_singleton: Repo | None = None


def get_repository() -> Repo:
    global _repo_singleton
    if _repo_singleton is None:
        _repo_singleton = Repo()
    return _repo_singleton


def set_repository(repo: Repo) -> None:
    global _repo_singleton
    _repo_singleton = repo


def reset_repository() -> None:
    global _repo_singleton
    _repo_singleton = None
