"""How much of a recipe can be cooked from what the catalog (usually a pantry) holds."""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Sequence

from ingredient_engine.catalog.index import CatalogIndex
from ingredient_engine.matching.match import match
from ingredient_engine.models.results import RecipeCompatibility

logger = logging.getLogger(__name__)


def recipe_compatibility(
    ingredients: Sequence[str],
    index: CatalogIndex,
    recipe_id: Optional[str] = None,
    threshold: Optional[int] = None,
) -> RecipeCompatibility:
    """Match every ingredient line and score the recipe.

    compatibility_score is the percentage of lines matched; confidence_score
    is the mean confidence of the matched lines. Both are 0 when nothing matched.
    """
    results = [match(line, index, threshold=threshold) for line in ingredients]
    available = [r for r in results if r.matched]
    missing = [r for r in results if not r.matched]
    total = len(results)
    compatibility = round(100 * len(available) / total) if total else 0
    confidence = round(sum(r.confidence for r in available) / len(available)) if available else 0
    logger.debug(
        "recipe_compatibility: %s matched %d/%d (confidence %d)",
        recipe_id,
        len(available),
        total,
        confidence,
    )
    return RecipeCompatibility(
        recipe_id=recipe_id,
        total_ingredients=total,
        available=available,
        missing=missing,
        compatibility_score=compatibility,
        confidence_score=confidence,
    )


def analyze_recipes(
    recipes: Mapping[str, Sequence[str]],
    index: CatalogIndex,
    threshold: Optional[int] = None,
) -> List[RecipeCompatibility]:
    """Score each recipe (id -> ingredient lines), best compatibility first."""
    scored = [
        recipe_compatibility(lines, index, recipe_id=recipe_id, threshold=threshold)
        for recipe_id, lines in recipes.items()
    ]
    return sorted(scored, key=lambda c: (-c.compatibility_score, c.recipe_id or ""))
