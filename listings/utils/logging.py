"""Logging utilities with structured output for the listings explorer."""

from __future__ import annotations

import logging
import os
from typing import Optional

_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def configure_logging(namespace: str = "listings") -> logging.Logger:
    """Return the listings logger, writing one line per event to stderr.

    Events are a short name followed by key=value pairs, e.g.
    ``loaded_csv path=... rows=...``, ``cleaned rows=... kept=... dropped=...``,
    ``geo_region_collision regions=...`` or ``api_unavailable base_url=...``.
    The level comes from ``LOG_LEVEL`` (default INFO).
    """

    logger = logging.getLogger(namespace)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    logger.setLevel(_LOG_LEVEL)
    logger.propagate = False
    return logger


def get_logger(child: Optional[str] = None) -> logging.Logger:
    """Helper to retrieve a child logger."""

    base = configure_logging()
    if child:
        return base.getChild(child)
    return base
