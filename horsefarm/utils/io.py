"""IO helpers for loading the bundled JSON datasets."""

from __future__ import annotations

import json
import os
from functools import lru_cache
from typing import Any

from .logging import get_logger

LOGGER = get_logger("utils.io")

DATA_DIR = os.getenv("DATA_DIR", os.path.join(os.path.dirname(os.path.dirname(__file__)), "data"))


@lru_cache(maxsize=16)
def load_json(name: str) -> Any:
    """Load a JSON document by filename from the data directory."""

    path = name if os.path.isabs(name) else os.path.join(DATA_DIR, name)
    if not os.path.exists(path):
        raise FileNotFoundError(f"Dataset not found: {path}")
    LOGGER.debug("loading_json path=%s", path)
    with open(path, "r", encoding="utf-8") as infile:
        return json.load(infile)


__all__ = ["load_json", "DATA_DIR"]
