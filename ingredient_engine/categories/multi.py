"""Ingredients that legitimately live in more than one category.

One catalog entry, several shelves: stock is a cooking essential fresh and a
pantry staple in a carton; coconut milk sits in the fridge or with the cans.
Carts here are category -> names mappings like the one build_shopping_list
returns; names are compared in normalized form.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Tuple, Union

from ingredient_engine.categories.mapping import normalize_category
from ingredient_engine.models.category import Category
from ingredient_engine.text.normalize import normalize

logger = logging.getLogger(__name__)

MULTI_CATEGORY_INGREDIENTS: Dict[str, Tuple[Category, ...]] = {
    # fresh vs shelf-stable
    "Chicken Stock": (Category.COOKING_ESSENTIALS, Category.PANTRY_STAPLES),
    "Chicken Broth": (Category.COOKING_ESSENTIALS, Category.PANTRY_STAPLES),
    "Vegetable Stock": (Category.COOKING_ESSENTIALS, Category.PANTRY_STAPLES),
    "Vegetable Broth": (Category.COOKING_ESSENTIALS, Category.PANTRY_STAPLES),
    "Beef Stock": (Category.COOKING_ESSENTIALS, Category.PANTRY_STAPLES),
    "Beef Broth": (Category.COOKING_ESSENTIALS, Category.PANTRY_STAPLES),
    "Bone Broth": (Category.COOKING_ESSENTIALS, Category.PANTRY_STAPLES),
    # everyday cooking vs special occasion
    "Coconut Oil": (Category.COOKING_ESSENTIALS, Category.PANTRY_STAPLES),
    "Sesame Oil": (Category.COOKING_ESSENTIALS, Category.PANTRY_STAPLES),
    # baking tool vs pantry flavoring
    "Vanilla Extract": (Category.COOKING_ESSENTIALS, Category.PANTRY_STAPLES),
    "Almond Extract": (Category.COOKING_ESSENTIALS, Category.PANTRY_STAPLES),
    # fridge vs cans
    "Coconut Milk": (Category.DAIRY_COLD, Category.PANTRY_STAPLES),
}

_BY_KEY = {normalize(name): cats for name, cats in MULTI_CATEGORY_INGREDIENTS.items()}

Cart = Mapping[Union[Category, str], Iterable[str]]


def _coerce(cart: Cart) -> Dict[Category, List[str]]:
    out: Dict[Category, List[str]] = {}
    for label, names in cart.items():
        out.setdefault(normalize_category(label), []).extend(names or [])
    return out


def ingredient_categories(name) -> List[Category]:
    """Every category the ingredient belongs to; empty for single-category ingredients."""
    return list(_BY_KEY.get(normalize(name), ()))


def is_multi_category(name) -> bool:
    return len(ingredient_categories(name)) > 1


def is_in_cart(name, cart: Cart) -> bool:
    """True if the name is in any of its categories, or anywhere for ordinary ingredients."""
    key = normalize(name)
    if not key:
        return False
    carts = _coerce(cart)
    categories = ingredient_categories(name) or list(carts)
    return any(key in {normalize(n) for n in carts.get(c, [])} for c in categories)


def add_to_cart(name, primary: Category, cart: Cart) -> Dict[Category, List[str]]:
    """Return a new cart with the name under `primary` and under none of its other categories."""
    key = normalize(name)
    if not key:
        raise ValueError(f"ingredient name must be a non-empty string, got {name!r}")
    primary = normalize_category(primary)
    updated = _coerce(cart)
    for category in ingredient_categories(name):
        if category != primary and category in updated:
            updated[category] = [n for n in updated[category] if normalize(n) != key]
    names = updated.setdefault(primary, [])
    if key not in {normalize(n) for n in names}:
        names.append(name)
    logger.debug("add_to_cart: '%s' -> %s", name, primary.value)
    return updated


def remove_from_cart(name, cart: Cart) -> Dict[Category, List[str]]:
    """Return a new cart without the name in any category."""
    key = normalize(name)
    return {c: [n for n in names if normalize(n) != key] for c, names in _coerce(cart).items()}
