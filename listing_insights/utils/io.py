"""IO helpers for loading reference CSV data into pandas DataFrames."""

from __future__ import annotations

import os
from functools import lru_cache

import pandas as pd

from ..config import DATA_DIR
from .logging import get_logger

LOGGER = get_logger("utils.io")


def data_path(name: str, data_dir: str = DATA_DIR) -> str:
    return name if os.path.isabs(name) else os.path.join(data_dir, name)


@lru_cache(maxsize=16)
def load_csv(name: str, data_dir: str = DATA_DIR) -> pd.DataFrame:
    """Load a CSV by filename from the data directory."""

    path = data_path(name, data_dir)
    if not os.path.exists(path):
        raise FileNotFoundError(f"CSV not found: {path}")
    LOGGER.debug("loading_csv path=%s", path)
    return pd.read_csv(path)


__all__ = ["load_csv", "data_path"]
