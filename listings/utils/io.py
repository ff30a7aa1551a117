"""IO helpers for loading CSV data into pandas DataFrames."""

from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Optional

import pandas as pd

from ..errors import MissingInputFile
from .logging import get_logger

LOGGER = get_logger("utils.io")

DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"


def data_dir() -> Path:
    return Path(os.getenv("DATA_DIR", str(DEFAULT_DATA_DIR)))


def resolve_path(name: str | os.PathLike) -> Path:
    """Resolve a CSV name against the data directory unless it is absolute."""

    path = Path(name)
    if path.is_absolute():
        return path
    return data_dir() / path


def load_csv(name: str | os.PathLike) -> pd.DataFrame:
    """Load a CSV by filename from the data directory."""

    path = resolve_path(name)
    if not path.exists():
        raise MissingInputFile(f"CSV not found: {path}")
    LOGGER.debug("loading_csv path=%s", path)
    try:
        df = pd.read_csv(path, low_memory=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise MissingInputFile(f"CSV could not be parsed: {path} ({exc})") from exc
    LOGGER.info("loaded_csv path=%s rows=%d cols=%d", path, len(df.index), len(df.columns))
    return df


def file_sha256(name: str | os.PathLike) -> Optional[str]:
    """Compute a sha256 hash for provenance tracking."""

    path = resolve_path(name)
    if not path.exists():
        return None
    h = hashlib.sha256()
    with open(path, "rb") as infile:
        for chunk in iter(lambda: infile.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


__all__ = ["load_csv", "file_sha256", "resolve_path", "data_dir"]
