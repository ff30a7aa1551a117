import math
from typing import Optional


def to_float(v) -> Optional[float]:
    try:
        if v is None or v == "" or str(v).lower() in ("null", "nan"):
            return None
        f = float(v)
    except Exception:
        return None
    return None if math.isnan(f) else f


def to_str(v) -> Optional[str]:
    if v is None or (isinstance(v, float) and math.isnan(v)):
        return None
    return str(v)
