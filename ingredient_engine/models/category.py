from __future__ import annotations

from enum import Enum


class Category(str, Enum):
    """Kitchen-behavior grocery buckets, in display order."""

    PROTEINS = "proteins"
    FRESH_PRODUCE = "fresh_produce"
    FLAVOR_BUILDERS = "flavor_builders"
    COOKING_ESSENTIALS = "cooking_essentials"
    BAKERY_GRAINS = "bakery_grains"
    DAIRY_COLD = "dairy_cold"
    PANTRY_STAPLES = "pantry_staples"
    FROZEN = "frozen"


DEFAULT_CATEGORY = Category.PANTRY_STAPLES
