"""Pydantic schemas for view states and the render data each view produces."""

from __future__ import annotations

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator


# ---------------------------------------------------------------------------
# View states
# ---------------------------------------------------------------------------


class OverviewState(BaseModel):
    selected_field: str = "price"


class StateComparisonState(BaseModel):
    selected_states: List[str] = Field(default_factory=list)

    @field_validator("selected_states")
    @classmethod
    def _dedupe(cls, value: List[str]) -> List[str]:
        return list(dict.fromkeys(value))


class ScatterState(BaseModel):
    selected_state: Optional[str] = None
    log_scale: bool = False


class GeoMapState(BaseModel):
    price_range: Optional[Tuple[float, float]] = None
    show_na: bool = True

    @field_validator("price_range")
    @classmethod
    def _ordered(cls, value: Optional[Tuple[float, float]]) -> Optional[Tuple[float, float]]:
        if value is not None and value[0] > value[1]:
            return (value[1], value[0])
        return value


# ---------------------------------------------------------------------------
# Render data
# ---------------------------------------------------------------------------


class NumericSummary(BaseModel):
    count: int
    missing: int
    mean: Optional[float] = None
    min: Optional[float] = None
    q1: Optional[float] = None
    median: Optional[float] = None
    q3: Optional[float] = None
    max: Optional[float] = None


class FrequencyEntry(BaseModel):
    value: str
    count: int


class OverviewResult(BaseModel):
    field: str
    label: str
    kind: Literal["numeric", "categorical", "unsupported"]
    numeric: Optional[NumericSummary] = None
    frequencies: List[FrequencyEntry] = Field(default_factory=list)
    missing: int = 0

    def frequency_map(self) -> dict:
        return {entry.value: entry.count for entry in self.frequencies}


class StateBar(BaseModel):
    state: str
    avg_price: Optional[float] = None


class StateComparisonResult(BaseModel):
    selected_states: List[str]
    bars: List[StateBar]


class ScatterPoint(BaseModel):
    house_size: Optional[float] = None
    price: Optional[float] = None


class ScatterResult(BaseModel):
    state: Optional[str]
    log_scale: bool
    points: List[ScatterPoint]
    excluded: int = 0


class MapVertex(BaseModel):
    long: float
    lat: float
    group: int
    region: str
    avg_price: Optional[float] = None


class GeoMapResult(BaseModel):
    price_range: Optional[Tuple[float, float]]
    observed_range: Optional[Tuple[float, float]]
    show_na: bool
    vertices: List[MapVertex]
    matched_regions: List[str] = Field(default_factory=list)
