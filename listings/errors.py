"""Exceptions raised by the listings pipeline."""

from __future__ import annotations

from typing import Iterable


class DatasetError(Exception):
    """Base class for dataset and schema failures."""


class FieldNotFound(DatasetError, KeyError):
    """A referenced column is not part of the table schema."""

    def __init__(self, field: str, available: Iterable[str] = ()) -> None:
        self.field = field
        self.available = list(available)
        super().__init__(field)

    def __str__(self) -> str:
        if self.available:
            return f"Unknown field '{self.field}'; available: {', '.join(self.available)}"
        return f"Unknown field '{self.field}'"


class MissingInputFile(DatasetError, FileNotFoundError):
    """The source file could not be located, read or lacks required columns."""


def require_fields(columns: Iterable[str], *fields: str) -> None:
    columns = list(columns)
    for field in fields:
        if field not in columns:
            raise FieldNotFound(field, columns)


__all__ = ["DatasetError", "FieldNotFound", "MissingInputFile", "require_fields"]
