"""Keyword heuristics that bucket an ingredient name into a kitchen-behavior category.

Rules are evaluated top to bottom and the first rule with a keyword found
inside the normalized name wins. Order is deliberate: packaged and spice
keywords come before the produce keywords they overlap with ("canned
tomatoes", "black pepper" vs "bell pepper"), and a category may appear in
more than one rule.

Short keywords only match at the start of a word, so "oil" does not fire
for "boiled" while "egg" still covers "eggs".

A recipe's course and cuisine labels ("Course: Dessert", "Cuisine: Asian")
can steer the choice: CONTEXT_RULES for matching labels are tried before
the general rules.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple, Union

from ingredient_engine.models.category import Category, DEFAULT_CATEGORY
from ingredient_engine.text.normalize import normalize

logger = logging.getLogger(__name__)

# keywords up to this length must start a word
SHORT_KEYWORD = 4


@lru_cache(maxsize=None)
def _word_start(keyword: str) -> re.Pattern:
    return re.compile(r"\b" + re.escape(keyword))


def _has_keyword(normalized: str, keyword: str) -> bool:
    if len(keyword) > SHORT_KEYWORD:
        return keyword in normalized
    return _word_start(keyword).search(normalized) is not None


@dataclass(frozen=True)
class CategoryRule:
    name: str
    keywords: Tuple[str, ...]
    category: Category

    def matches(self, normalized: str) -> bool:
        return any(_has_keyword(normalized, k) for k in self.keywords)


@dataclass(frozen=True)
class ContextRule:
    """Rules that apply only when a recipe label contains `context`."""

    context: str
    rules: Tuple[CategoryRule, ...]

    def applies(self, labels: List[str]) -> bool:
        return any(self.context in label for label in labels)


CATEGORY_RULES: Tuple[CategoryRule, ...] = (
    CategoryRule(
        "frozen_goods",
        ("frozen", "ice cream", "popsicle", "sorbet", "gelato"),
        Category.FROZEN,
    ),
    CategoryRule(
        "packaged_goods",
        (
            "canned",
            "tinned",
            "peanut butter",
            "almond butter",
            "pasta sauce",
            "tomato sauce",
            "tomato paste",
            "salsa",
            "jam",
            "cornstarch",
            "baking soda",
            "baking powder",
        ),
        Category.PANTRY_STAPLES,
    ),
    # produce whose names contain dairy or protein keywords
    CategoryRule(
        "produce_exceptions",
        ("butternut", "eggplant", "green bean"),
        Category.FRESH_PRODUCE,
    ),
    CategoryRule(
        "dairy",
        (
            "milk",
            "cheese",
            "cheddar",
            "mozzarella",
            "parmesan",
            "feta",
            "ricotta",
            "yogurt",
            "yoghurt",
            "cream",
            "butter",
            "ghee",
            "kefir",
        ),
        Category.DAIRY_COLD,
    ),
    CategoryRule(
        "spices_and_seasonings",
        (
            "black pepper",
            "white pepper",
            "peppercorn",
            "ground pepper",
            "cayenne",
            "pepper flakes",
            "chili powder",
            "chili flakes",
            "garlic powder",
            "onion powder",
            "salt",
            "cumin",
            "paprika",
            "oregano",
            "thyme",
            "bay lea",
            "cinnamon",
            "nutmeg",
            "turmeric",
            "ginger",
            "curry",
            "spice",
            "seasoning",
        ),
        Category.FLAVOR_BUILDERS,
    ),
    CategoryRule(
        "cooking_liquids",
        ("oil", "vinegar", "stock", "broth", "soy sauce", "fish sauce", "worcestershire", "extract", "cooking wine"),
        Category.COOKING_ESSENTIALS,
    ),
    CategoryRule(
        "grains_and_bakery",
        (
            "flour",
            "bread",
            "pasta",
            "spaghetti",
            "noodle",
            "rice",
            "quinoa",
            "oats",
            "oatmeal",
            "tortilla",
            "bagel",
            "couscous",
            "barley",
            "cereal",
        ),
        Category.BAKERY_GRAINS,
    ),
    CategoryRule(
        "fresh_produce",
        (
            "bell pepper",
            "jalapeno",
            "chili",
            "onion",
            "scallion",
            "shallot",
            "garlic",
            "carrot",
            "spinach",
            "tomato",
            "avocado",
            "lemon",
            "lime",
            "apple",
            "banana",
            "berry",
            "berries",
            "orange",
            "potato",
            "lettuce",
            "cucumber",
            "mushroom",
            "broccoli",
            "zucchini",
            "squash",
            "celery",
            "cabbage",
            "kale",
            "basil",
            "cilantro",
            "parsley",
            "mint",
            "herb",
            "vegetable",
            "fruit",
            "coconut",
            "pepper",
        ),
        Category.FRESH_PRODUCE,
    ),
    CategoryRule(
        "proteins",
        (
            "chicken",
            "beef",
            "pork",
            "lamb",
            "turkey",
            "bacon",
            "sausage",
            "salmon",
            "tuna",
            "shrimp",
            "prawn",
            "fish",
            "tofu",
            "tempeh",
            "egg",
            "bean",
            "lentil",
            "chickpea",
            "nut",
            "walnut",
            "pecan",
            "cashew",
            "peanut",
            "almond",
            "meat",
            "steak",
        ),
        Category.PROTEINS,
    ),
    CategoryRule(
        "pantry_goods",
        ("honey", "sugar", "syrup", "cracker", "soup", "olive", "chocolate", "ketchup", "mustard", "mayo", "sauce"),
        Category.PANTRY_STAPLES,
    ),
)


CONTEXT_RULES: Tuple[ContextRule, ...] = (
    ContextRule(
        "breakfast",
        (
            CategoryRule("breakfast_proteins", ("egg", "bacon"), Category.PROTEINS),
            CategoryRule("breakfast_dairy", ("milk", "cheese"), Category.DAIRY_COLD),
            CategoryRule("breakfast_pantry", ("bread", "toast"), Category.PANTRY_STAPLES),
        ),
    ),
    ContextRule(
        "dessert",
        (CategoryRule("dessert_pantry", ("sugar", "flour", "chocolate", "vanilla"), Category.PANTRY_STAPLES),),
    ),
    ContextRule(
        "middle eastern",
        (
            CategoryRule("middle_eastern_pantry", ("tahini", "hummus"), Category.PANTRY_STAPLES),
            CategoryRule("middle_eastern_spices", ("sumac", "zaatar", "za atar"), Category.FLAVOR_BUILDERS),
        ),
    ),
    ContextRule(
        "asian",
        (
            CategoryRule("asian_pantry", ("soy", "miso"), Category.PANTRY_STAPLES),
            CategoryRule("asian_spices", ("ginger", "sesame"), Category.FLAVOR_BUILDERS),
        ),
    ),
)

Context = Union[str, Iterable[str], None]


def _context_labels(context: Context) -> List[str]:
    if context is None:
        return []
    if isinstance(context, str):
        context = [context]
    return [label for label in (normalize(c) for c in context) if label]


def matching_rule(ingredient_name, context: Context = None) -> Optional[CategoryRule]:
    """First rule that fires for the name, or None when only the default applies.

    `context` is one or more recipe labels such as "Course: Breakfast".
    """
    normalized = normalize(ingredient_name)
    if not normalized:
        return None
    labels = _context_labels(context)
    if labels:
        for context_rule in CONTEXT_RULES:
            if not context_rule.applies(labels):
                continue
            for rule in context_rule.rules:
                if rule.matches(normalized):
                    return rule
    for rule in CATEGORY_RULES:
        if rule.matches(normalized):
            return rule
    return None


def categorize(ingredient_name, context: Context = None) -> Category:
    """Category for an ingredient name; DEFAULT_CATEGORY (pantry_staples) when no rule fires."""
    rule = matching_rule(ingredient_name, context)
    if rule is None:
        logger.debug("categorize: no rule for %r; using %s", ingredient_name, DEFAULT_CATEGORY.value)
        return DEFAULT_CATEGORY
    logger.debug("categorize: %r -> %s (rule %s)", ingredient_name, rule.category.value, rule.name)
    return rule.category
