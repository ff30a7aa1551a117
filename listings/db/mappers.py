from numbers import Number
from typing import Any, Dict

from ..models.fields import CATEGORICAL_FIELDS, NUMERIC_FIELDS
from ..utils.coerce import to_float, to_str


def _extra_value(v: Any) -> Any:
    if isinstance(v, bool):
        return v
    if isinstance(v, Number):
        return to_float(v)
    return to_str(v)


def map_listing_row(r: Dict[str, Any]) -> Dict[str, Any]:
    record: Dict[str, Any] = {field: to_float(r.get(field)) for field in NUMERIC_FIELDS}
    record.update({field: to_str(r.get(field)) for field in CATEGORICAL_FIELDS})
    for key, value in r.items():
        if key not in record:
            record[str(key)] = _extra_value(value)
    return record
