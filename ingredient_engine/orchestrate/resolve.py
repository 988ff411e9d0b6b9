"""Pipeline helpers: phrase -> core -> match -> category, and shopping-list grouping.

Kept small and dependency-light so the CLI and callers embedding the engine
share one path from raw recipe text to a categorized verdict.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel

from ingredient_engine.availability.state import AvailabilityRecord
from ingredient_engine.catalog.index import CatalogIndex
from ingredient_engine.categories.categorize import Context, categorize
from ingredient_engine.matching.match import match
from ingredient_engine.models.category import Category
from ingredient_engine.models.results import MatchResult
from ingredient_engine.text.reduce import split_description

logger = logging.getLogger(__name__)


class ResolvedIngredient(BaseModel):
    phrase: str
    core: str
    description: str = ""
    match: MatchResult
    category: Category

    @property
    def display_name(self) -> str:
        if self.match.matched_entry is not None:
            return self.match.matched_entry.name
        return self.core


def resolve_ingredient(
    phrase, index: CatalogIndex, threshold: Optional[int] = None, context: Context = None
) -> ResolvedIngredient:
    """Match a phrase and pick its category: the catalog's if matched, the heuristic otherwise.

    `context` (recipe course/cuisine labels) only steers the heuristic.
    """
    raw = phrase if isinstance(phrase, str) else ""
    description, core = split_description(raw)
    result = match(raw, index, threshold=threshold)
    if result.matched_entry is not None:
        category = result.matched_entry.category
    else:
        category = categorize(core, context)
    return ResolvedIngredient(phrase=raw, core=core, description=description, match=result, category=category)


def resolve_ingredients(
    phrases: Iterable[str], index: CatalogIndex, threshold: Optional[int] = None, context: Context = None
) -> List[ResolvedIngredient]:
    resolved = [resolve_ingredient(p, index, threshold=threshold, context=context) for p in phrases]
    logger.info(
        "Resolved %d ingredients (%d unmatched)",
        len(resolved),
        sum(1 for r in resolved if not r.match.matched),
    )
    return resolved


def unknown_ingredients(
    phrases: Iterable[str], index: CatalogIndex, threshold: Optional[int] = None, context: Context = None
) -> List[ResolvedIngredient]:
    """Phrases the catalog does not know, with a suggested category each."""
    return [
        r for r in resolve_ingredients(phrases, index, threshold=threshold, context=context) if not r.match.matched
    ]


def build_shopping_list(
    record: AvailabilityRecord, index: Optional[CatalogIndex] = None
) -> Dict[Category, List[str]]:
    """Group the record's needed (unavailable) names by category.

    Categories follow enumeration order and only non-empty ones are present;
    names within a category are sorted case-insensitively.
    """
    grouped: Dict[Category, List[str]] = {}
    for name in record.unavailable:
        category = None
        if index is not None:
            result = match(name, index)
            if result.matched_entry is not None:
                category = result.matched_entry.category
        if category is None:
            category = categorize(name)
        grouped.setdefault(category, []).append(name)
    return {c: sorted(grouped[c], key=str.lower) for c in Category if c in grouped}
