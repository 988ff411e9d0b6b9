"""Map legacy and free-form category labels onto the fixed category set."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Sequence

from pydantic import BaseModel, Field

from ingredient_engine.models.category import Category, DEFAULT_CATEGORY
from ingredient_engine.text.normalize import normalize

logger = logging.getLogger(__name__)

# keys are normalized labels (see _label_key)
LEGACY_CATEGORY_MAP: Dict[str, Category] = {
    "vegetables": Category.FRESH_PRODUCE,
    "fruits": Category.FRESH_PRODUCE,
    "produce": Category.FRESH_PRODUCE,
    "spices": Category.FLAVOR_BUILDERS,
    "herbs": Category.FLAVOR_BUILDERS,
    "seasonings": Category.FLAVOR_BUILDERS,
    "dairy": Category.DAIRY_COLD,
    "pantry": Category.PANTRY_STAPLES,
    "other": Category.PANTRY_STAPLES,
    "canned_goods": Category.PANTRY_STAPLES,
    "condiments": Category.PANTRY_STAPLES,
    "meat": Category.PROTEINS,
    "seafood": Category.PROTEINS,
    "poultry": Category.PROTEINS,
    "grains": Category.BAKERY_GRAINS,
    "bread": Category.BAKERY_GRAINS,
    "bakery": Category.BAKERY_GRAINS,
    "oils": Category.COOKING_ESSENTIALS,
    "frozen_foods": Category.FROZEN,
}

_CANONICAL = {c.value: c for c in Category}


def _label_key(label) -> str:
    return normalize(label).replace(" ", "_")


def is_valid_category(label) -> bool:
    if isinstance(label, Category):
        return True
    return isinstance(label, str) and label in _CANONICAL


def normalize_category(label) -> Category:
    """Return the Category for a label, mapping legacy names and defaulting to pantry_staples."""
    if isinstance(label, Category):
        return label
    key = _label_key(label)
    if key in LEGACY_CATEGORY_MAP:
        return LEGACY_CATEGORY_MAP[key]
    if key in _CANONICAL:
        return _CANONICAL[key]
    logger.warning("Unknown category %r, defaulting to %s", label, DEFAULT_CATEGORY.value)
    return DEFAULT_CATEGORY


def available_categories(labels: Iterable) -> List[Category]:
    """Distinct categories for a set of raw labels, in enumeration order."""
    found = {normalize_category(label) for label in labels}
    return [c for c in Category if c in found]


class InvalidLabel(BaseModel):
    id: str
    name: str
    category: str


class CategoryReport(BaseModel):
    is_valid: bool
    issues: List[str] = Field(default_factory=list)
    invalid_catalog_labels: List[InvalidLabel] = Field(default_factory=list)
    invalid_pantry_labels: List[str] = Field(default_factory=list)


def validate_category_consistency(
    rows: Sequence[Mapping],
    pantry: Mapping[str, Sequence[str]] | None = None,
) -> CategoryReport:
    """Report catalog rows and pantry groupings whose category label is not canonical.

    `rows` are raw storage rows with "id", "name" and "category" keys;
    `pantry` maps category labels to ingredient names.
    """
    issues: List[str] = []
    bad_rows = [
        InvalidLabel(id=str(r.get("id", "")), name=str(r.get("name", "")), category=str(r.get("category", "")))
        for r in rows
        if not is_valid_category(r.get("category"))
    ]
    if bad_rows:
        issues.append(
            "Invalid categories in catalog: "
            + ", ".join(f"{r.name} ({r.category})" for r in bad_rows)
        )
    bad_pantry = [label for label in (pantry or {}) if not is_valid_category(label)]
    if bad_pantry:
        issues.append("Invalid categories in pantry: " + ", ".join(bad_pantry))
    return CategoryReport(
        is_valid=not issues,
        issues=issues,
        invalid_catalog_labels=bad_rows,
        invalid_pantry_labels=bad_pantry,
    )
