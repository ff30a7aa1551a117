"""Pydantic models representing listing records and dataset aggregates."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class ListingRecord(BaseModel):
    """One listing; columns outside the analysed set are kept as extras."""

    model_config = ConfigDict(extra="allow", frozen=True)

    price: Optional[float] = None
    bed: Optional[float] = None
    bath: Optional[float] = None
    acre_lot: Optional[float] = None
    house_size: Optional[float] = None
    state: Optional[str] = None
    city: Optional[str] = None
    status: Optional[str] = None


class ListingPage(BaseModel):
    items: List[ListingRecord]
    total: int


class GroupSummary(BaseModel):
    key: Optional[str]
    avg_price: Optional[float] = None
    median_size: Optional[float] = None
    count: int


class CorrelationMatrix(BaseModel):
    fields: List[str]
    values: List[List[Optional[float]]]


class DatasetReport(BaseModel):
    rows: int
    cleaned_rows: int
    dropped_rows: int
    missing_by_field: Dict[str, int]
    field_choices: List[str]
    state_choices: List[str]
    provenance: Optional[str] = None
