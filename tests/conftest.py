import pytest

from ingredient_engine.catalog.index import CatalogIndex
from ingredient_engine.models.catalog_schema import IngredientEntry


def entry(id, name, category="pantry_staples", synonyms=None, origin="system", usage_count=0):
    return IngredientEntry(
        id=id,
        name=name,
        synonyms=synonyms or [],
        category=category,
        origin=origin,
        usage_count=usage_count,
    )


@pytest.fixture
def catalog_entries():
    return [
        entry("1", "Green Onion", "fresh_produce", ["scallion"], usage_count=5),
        entry("2", "Tomato", "fresh_produce", ["roma tomato"]),
        entry("3", "Olive Oil", "cooking_essentials"),
        entry("4", "Black Pepper", "flavor_builders"),
        entry("5", "Jalapeño", "fresh_produce"),
        entry("6", "Chicken Breast", "proteins", usage_count=10),
        entry("7", "chicken thighs", "proteins", origin="user", usage_count=2),
        entry("8", "Garlic", "fresh_produce"),
        entry("9", "Parmesan Cheese", "dairy_cold", origin="user"),
    ]


@pytest.fixture
def index(catalog_entries):
    return CatalogIndex.build(catalog_entries)
