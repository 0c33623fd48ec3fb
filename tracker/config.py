"""Configuration for the expense tracker.

Values come from environment variables with built-in defaults:

- ``EXPENSE_TRACKER_CATALOG``: path to a category catalog JSON file
- ``EXPENSE_TRACKER_DAILY_WINDOW``: number of days in the daily chart
- ``EXPENSE_TRACKER_LOG_LEVEL``: logging level name
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from tracker.catalog import DEFAULT_CATALOG, Catalog, load_catalog

CATALOG_PATH: Optional[Path] = (
    Path(os.environ["EXPENSE_TRACKER_CATALOG"]).resolve()
    if os.getenv("EXPENSE_TRACKER_CATALOG")
    else None
)

DAILY_WINDOW = int(os.getenv("EXPENSE_TRACKER_DAILY_WINDOW", "7"))

LOG_LEVEL = os.getenv("EXPENSE_TRACKER_LOG_LEVEL", "WARNING").upper()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_catalog(path: Optional[Path] = None) -> Catalog:
    """Catalog from ``path``, else from the environment, else the defaults."""
    path = path or CATALOG_PATH
    if path is None:
        return DEFAULT_CATALOG
    return load_catalog(str(path))


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(level=(level or LOG_LEVEL), format=LOG_FORMAT)
