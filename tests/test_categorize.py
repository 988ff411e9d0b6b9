from ingredient_engine.categories.categorize import CATEGORY_RULES, categorize, matching_rule
from ingredient_engine.models.category import Category, DEFAULT_CATEGORY


def _rule_position(name):
    return [r.name for r in CATEGORY_RULES].index(name)


def test_pepper_keyword_order():
    assert categorize("black pepper") is Category.FLAVOR_BUILDERS
    assert categorize("bell pepper") is Category.FRESH_PRODUCE
    assert categorize("Black Pepper, freshly ground") is Category.FLAVOR_BUILDERS


def test_spices_are_checked_before_produce():
    assert _rule_position("spices_and_seasonings") < _rule_position("fresh_produce")
    assert _rule_position("packaged_goods") < _rule_position("fresh_produce")
    assert _rule_position("produce_exceptions") < _rule_position("dairy")
    assert _rule_position("dairy") < _rule_position("spices_and_seasonings")


def test_common_ingredients():
    cases = {
        "canned tomatoes": Category.PANTRY_STAPLES,
        "peanut butter": Category.PANTRY_STAPLES,
        "unsalted butter": Category.DAIRY_COLD,
        "milk": Category.DAIRY_COLD,
        "olive oil": Category.COOKING_ESSENTIALS,
        "chicken stock": Category.COOKING_ESSENTIALS,
        "all-purpose flour": Category.BAKERY_GRAINS,
        "chicken breast": Category.PROTEINS,
        "eggs": Category.PROTEINS,
        "eggplant": Category.FRESH_PRODUCE,
        "butternut squash": Category.FRESH_PRODUCE,
        "Jalapeño": Category.FRESH_PRODUCE,
        "frozen peas": Category.FROZEN,
        "ice cream": Category.FROZEN,
        "honey": Category.PANTRY_STAPLES,
    }
    for name, expected in cases.items():
        assert categorize(name) is expected, name


def test_unknown_falls_back_to_default():
    assert DEFAULT_CATEGORY is Category.PANTRY_STAPLES
    assert categorize("xyzzyqux") is DEFAULT_CATEGORY
    assert matching_rule("xyzzyqux") is None


def test_total_over_odd_input():
    for value in ("", "   ", "!!!", None, 42, "🥕", "x" * 500):
        assert categorize(value) in set(Category)


def test_matching_rule_names_the_rule():
    rule = matching_rule("black pepper")
    assert rule.name == "spices_and_seasonings"
    assert rule.category is Category.FLAVOR_BUILDERS


def test_rules_only_use_known_categories():
    assert all(isinstance(r.category, Category) for r in CATEGORY_RULES)
    assert all(r.keywords for r in CATEGORY_RULES)


def test_short_keywords_match_whole_words():
    assert categorize("boiled eggs") is Category.PROTEINS
    assert categorize("strawberries") is Category.FRESH_PRODUCE
    assert categorize("walnuts") is Category.PROTEINS
    assert categorize("unsalted butter") is Category.DAIRY_COLD


def test_ground_pepper_and_named_cheeses():
    assert categorize("freshly ground pepper") is Category.FLAVOR_BUILDERS
    for name in ("cheddar", "shredded mozzarella", "parmesan", "feta"):
        assert categorize(name) is Category.DAIRY_COLD, name


def test_recipe_context_steers_the_heuristic():
    assert categorize("flour") is Category.BAKERY_GRAINS
    assert categorize("flour", context=["Course: Dessert"]) is Category.PANTRY_STAPLES
    assert categorize("sumac") is DEFAULT_CATEGORY
    assert categorize("sumac", context="Cuisine: Middle Eastern") is Category.FLAVOR_BUILDERS
    assert categorize("soy sauce") is Category.COOKING_ESSENTIALS
    assert categorize("soy sauce", context=["Course: Dinner", "Cuisine: Asian"]) is Category.PANTRY_STAPLES


def test_context_without_a_matching_rule_falls_through():
    assert categorize("flour", context=["Course: Breakfast"]) is Category.BAKERY_GRAINS
    assert categorize("chicken breast", context=["Cuisine: Italian"]) is Category.PROTEINS
    assert matching_rule("toast", context=["Course: Breakfast"]).name == "breakfast_pantry"
    assert categorize("bread", context=[]) is Category.BAKERY_GRAINS
