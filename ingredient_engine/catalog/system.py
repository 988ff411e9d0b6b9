"""Curated starter catalog ("group by behavior, not biology")."""

from __future__ import annotations

from typing import Dict, List

from ingredient_engine.models.catalog_schema import IngredientEntry, Origin
from ingredient_engine.models.category import Category
from ingredient_engine.text.normalize import normalize

SYSTEM_CATALOG: Dict[Category, List[str]] = {
    Category.PROTEINS: [
        "chicken breast",
        "chicken thighs",
        "ground beef",
        "salmon",
        "eggs",
        "tofu",
        "greek yogurt",
        "beans",
        "lentils",
        "nuts",
    ],
    Category.FRESH_PRODUCE: [
        "onions",
        "garlic",
        "carrots",
        "spinach",
        "tomatoes",
        "bell peppers",
        "avocados",
        "lemons",
        "basil",
        "cilantro",
        "green onions",
    ],
    Category.FLAVOR_BUILDERS: [
        "salt",
        "black pepper",
        "garlic powder",
        "cumin",
        "paprika",
        "oregano",
        "thyme",
        "bay leaves",
        "ginger",
        "chili powder",
    ],
    Category.COOKING_ESSENTIALS: [
        "olive oil",
        "vegetable oil",
        "butter",
        "chicken stock",
        "vegetable stock",
        "balsamic vinegar",
        "soy sauce",
        "vanilla extract",
    ],
    Category.BAKERY_GRAINS: [
        "bread",
        "pasta",
        "rice",
        "flour",
        "bagels",
        "tortillas",
        "quinoa",
        "oats",
    ],
    Category.DAIRY_COLD: [
        "milk",
        "cheese",
        "yogurt",
        "butter",
        "eggs",
        "cream cheese",
        "heavy cream",
        "sour cream",
    ],
    Category.PANTRY_STAPLES: [
        "canned tomatoes",
        "canned beans",
        "pasta sauce",
        "honey",
        "peanut butter",
        "crackers",
        "soup",
        "olives",
    ],
    Category.FROZEN: [
        "frozen vegetables",
        "frozen berries",
        "ice cream",
        "frozen pizza",
        "frozen shrimp",
        "popsicles",
    ],
}

SYSTEM_SYNONYMS: Dict[str, List[str]] = {
    "green onions": ["green onion", "scallion", "spring onion"],
    "cilantro": ["coriander leaves"],
    "chicken stock": ["chicken broth"],
    "vegetable stock": ["vegetable broth"],
    "flour": ["all purpose flour", "plain flour"],
    "bell peppers": ["capsicum", "sweet pepper"],
    "heavy cream": ["double cream", "whipping cream"],
}


def system_entries() -> List[IngredientEntry]:
    """System-origin entries for SYSTEM_CATALOG; an item listed twice keeps its first category."""
    entries: List[IngredientEntry] = []
    seen = set()
    for category, items in SYSTEM_CATALOG.items():
        for item in items:
            key = normalize(item)
            if key in seen:
                continue
            seen.add(key)
            entries.append(
                IngredientEntry(
                    id=f"system:{key}",
                    name=item,
                    synonyms=SYSTEM_SYNONYMS.get(item, []),
                    category=category,
                    origin=Origin.SYSTEM,
                )
            )
    return entries
