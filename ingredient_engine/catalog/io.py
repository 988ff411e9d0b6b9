"""Read and write catalog snapshots as JSON files (CLI and test fixtures)."""

from __future__ import annotations

import json
import logging
import os
from typing import Iterable, List

from pydantic import TypeAdapter

from ingredient_engine.models.catalog_schema import IngredientEntry

logger = logging.getLogger(__name__)

_ENTRIES = TypeAdapter(List[IngredientEntry])


def load_catalog(path: str) -> List[IngredientEntry]:
    """Load a JSON array of catalog rows. Raises ValueError / ValidationError on bad input."""
    with open(path, "r", encoding="utf8") as fh:
        data = json.load(fh)
    if isinstance(data, dict) and "ingredients" in data:
        data = data["ingredients"]
    if not isinstance(data, list):
        raise ValueError(f"catalog file {path} must hold a JSON array of ingredients")
    entries = _ENTRIES.validate_python(data)
    logger.info("Catalog loaded from %s (%d entries)", path, len(entries))
    return entries


def load_raw_rows(path: str) -> List[dict]:
    """Load catalog rows without validation, for consistency reports."""
    with open(path, "r", encoding="utf8") as fh:
        data = json.load(fh)
    if isinstance(data, dict) and "ingredients" in data:
        data = data["ingredients"]
    if not isinstance(data, list):
        raise ValueError(f"catalog file {path} must hold a JSON array of ingredients")
    return [row for row in data if isinstance(row, dict)]


def save_catalog(entries: Iterable[IngredientEntry], path: str) -> None:
    entries = list(entries)
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    with open(path, "w", encoding="utf8") as fh:
        json.dump([e.model_dump(mode="json") for e in entries], fh, ensure_ascii=False, indent=2)
    logger.info("Catalog saved to %s (%d entries)", path, len(entries))
