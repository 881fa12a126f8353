from __future__ import annotations

from typing import Literal

from pizzabasket.config import get_config

from .backends.csv_backend import CsvCatalog
from .interface import CatalogAccess


def get_catalog(kind: Literal["csv"] = "csv") -> CatalogAccess:
    if kind == "csv":
        # Reads from configured CSV folder
        config = get_config()
        return CsvCatalog(data_dir=config.data_dir)
    raise ValueError(f"Unknown catalog kind: {kind}")
