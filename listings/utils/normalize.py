"""Range helpers shared by the map view and its colour scale."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class Bounds:
    minimum: float
    maximum: float

    @classmethod
    def from_pair(cls, pair: Tuple[float, float]) -> "Bounds":
        lo, hi = float(pair[0]), float(pair[1])
        if lo > hi:
            lo, hi = hi, lo
        return cls(lo, hi)

    @classmethod
    def observed(cls, values: Iterable[Optional[float]]) -> Optional["Bounds"]:
        """Bounds spanning the finite values, or None when there are none."""

        arr = np.array([v for v in values if v is not None], dtype="float64")
        arr = arr[np.isfinite(arr)]
        if arr.size == 0:
            return None
        return cls(float(arr.min()), float(arr.max()))

    def clamp(self, value: float) -> float:
        return max(self.minimum, min(self.maximum, value))

    def as_tuple(self) -> Tuple[float, float]:
        return (self.minimum, self.maximum)


def min_max(value: float, bounds: Bounds) -> float:
    """Position of value inside bounds on a 0-1 scale."""

    if bounds.maximum == bounds.minimum:
        return 0.5
    normalized = (bounds.clamp(value) - bounds.minimum) / (bounds.maximum - bounds.minimum)
    return float(max(0.0, min(1.0, normalized)))


__all__ = ["Bounds", "min_max"]
