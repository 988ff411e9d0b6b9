import logging

from conftest import entry

from ingredient_engine.catalog.index import CatalogIndex
from ingredient_engine.catalog.system import system_entries
from ingredient_engine.models.catalog_schema import Origin
from ingredient_engine.models.category import Category


def test_lookup_exact_by_name_and_synonym(index):
    assert index.lookup_exact("green onion").name == "Green Onion"
    assert index.lookup_exact("scallion").name == "Green Onion"
    assert index.lookup_exact("roma tomato").name == "Tomato"
    assert index.lookup_exact("jalapeno").name == "Jalapeño"
    assert index.lookup_exact("leek") is None
    assert index.lookup_exact("") is None


def test_name_beats_synonym_on_collision():
    idx = CatalogIndex.build(
        [
            entry("b", "Green Onion", synonyms=["scallion"], usage_count=100),
            entry("a", "Scallion", origin="user"),
        ]
    )
    assert idx.lookup_exact("scallion").id == "a"


def test_shared_synonym_goes_to_better_ranked_entry():
    idx = CatalogIndex.build(
        [
            entry("u", "Spring Onion", synonyms=["salad onion"], origin="user", usage_count=50),
            entry("s", "Green Onion", synonyms=["salad onion"], origin="system"),
        ]
    )
    assert idx.lookup_exact("salad onion").id == "s"


def test_lookup_contains_is_bidirectional(index):
    # query contains the catalog key
    assert [e.name for e in index.lookup_contains("scallions")] == ["Green Onion"]
    # catalog key contains the query
    assert [e.name for e in index.lookup_contains("parmesan")] == ["Parmesan Cheese"]


def test_lookup_contains_orders_by_length_difference_first():
    idx = CatalogIndex.from_names(["green onions", "red onion"])
    assert [e.name for e in idx.lookup_contains("onion")] == ["red onion", "green onions"]


def test_lookup_contains_prefers_system_then_usage(index):
    # both chicken entries are 7 characters longer than the query
    assert [e.name for e in index.lookup_contains("chicken")] == ["Chicken Breast", "chicken thighs"]

    idx = CatalogIndex.build(
        [
            entry("1", "red lentils", origin="user", usage_count=1),
            entry("2", "puy lentils", origin="user", usage_count=9),
        ]
    )
    assert [e.id for e in idx.lookup_contains("lentils")] == ["2", "1"]


def test_lookup_contains_ignores_tiny_fragments(index):
    assert index.lookup_contains("on") == []
    assert index.contains_hits("") == []


def test_contains_hits_report_matched_key(index):
    hits = index.contains_hits("scallions")
    assert [(e.name, key) for e, key in hits] == [("Green Onion", "scallion")]


def test_lookup_fuzzy_orders_by_distance(index):
    hits = index.lookup_fuzzy("garlik", 1)
    assert [(e.name, d) for e, d in hits] == [("Garlic", 1)]

    idx = CatalogIndex.from_names(["rice", "ice", "mice cream"])
    assert [(e.name, d) for e, d in idx.lookup_fuzzy("rice", 1)] == [("rice", 0), ("ice", 1)]


def test_lookup_fuzzy_respects_max_distance(index):
    assert index.lookup_fuzzy("garlik", 0) == []
    assert index.lookup_fuzzy("xyzzyqux", 2) == []
    assert index.lookup_fuzzy("", 3) == []


def test_duplicate_names_keep_system_entry(caplog):
    with caplog.at_level(logging.WARNING):
        idx = CatalogIndex.build(
            [
                entry("u", "basil", origin="user", usage_count=99),
                entry("s", "Basil", origin="system"),
            ]
        )
    assert len(idx) == 1
    assert idx.lookup_exact("basil").id == "s"
    assert "duplicate normalized name" in caplog.text


def test_from_names_and_accessors():
    idx = CatalogIndex.from_names(["Milk", "milk", " ", "Eggs"])
    assert len(idx) == 2
    assert sorted(idx.names()) == ["Eggs", "Milk"]
    assert idx.get("user:milk").origin is Origin.USER
    assert {e.normalized_name for e in idx} == {"milk", "eggs"}


def test_system_catalog_index():
    entries = system_entries()
    assert all(e.is_system for e in entries)
    assert len({e.normalized_name for e in entries}) == len(entries)
    idx = CatalogIndex.build(entries)
    assert idx.lookup_exact("scallion").name == "green onions"
    assert idx.lookup_exact("garlic").category is Category.FRESH_PRODUCE
    assert idx.lookup_exact("milk").category is Category.DAIRY_COLD
    assert idx.get("system:garlic").name == "garlic"


def test_word_hits_share_whole_words():
    idx = CatalogIndex.from_names(["onions", "chicken thighs", "red wine vinegar"])
    hits = idx.word_hits("red onion")
    assert [(e.name, key, shared) for e, key, shared in hits] == [
        ("onions", "onions", 1),
        ("red wine vinegar", "red wine vinegar", 1),
    ]
    # words shorter than the containment minimum never count
    assert idx.word_hits("an ox") == []
    assert idx.word_hits("") == []
