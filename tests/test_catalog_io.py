import json

import pytest

from conftest import entry

from ingredient_engine.catalog.io import load_catalog, load_raw_rows, save_catalog
from ingredient_engine.models.catalog_schema import Origin
from ingredient_engine.models.category import Category


def test_save_then_load(tmp_path):
    path = tmp_path / "out" / "catalog.json"
    entries = [
        entry("1", "Jalapeño", "fresh_produce", synonyms=["jalapeno pepper"], usage_count=3),
        entry("2", "Olive Oil", "cooking_essentials", origin="user"),
    ]
    save_catalog(entries, str(path))
    loaded = load_catalog(str(path))
    assert loaded == entries
    assert loaded[0].normalized_name == "jalapeno"


def test_load_storage_rows(tmp_path):
    path = tmp_path / "catalog.json"
    rows = [
        {"id": 7, "name": "Cumin", "category": "spices", "is_system": True, "created_at": "2024-01-01"},
        {"id": 8, "name": "Kimchi", "category": "other", "is_system": False, "usage_count": 2},
    ]
    path.write_text(json.dumps(rows), encoding="utf8")
    cumin, kimchi = load_catalog(str(path))
    assert cumin.id == "7"
    assert cumin.origin is Origin.SYSTEM
    assert cumin.category is Category.FLAVOR_BUILDERS
    assert kimchi.origin is Origin.USER
    assert kimchi.category is Category.PANTRY_STAPLES
    assert kimchi.usage_count == 2


def test_load_wrapped_rows(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"ingredients": [{"id": "a", "name": "Rice", "category": "grains"}]}), encoding="utf8")
    [rice] = load_catalog(str(path))
    assert rice.category is Category.BAKERY_GRAINS
    assert load_raw_rows(str(path)) == [{"id": "a", "name": "Rice", "category": "grains"}]


def test_load_rejects_non_array(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"name": "Rice"}), encoding="utf8")
    with pytest.raises(ValueError):
        load_catalog(str(path))
