import copy

import pytest

from bluebliss_server.models.combo_data import COMBO_SUGGESTION_RULES, PREDEFINED_COMBOS, TRENDING_DISHES
from bluebliss_server.models.combo_matcher import (
    CatalogError,
    NotFoundError,
    ValidationError,
    analyze_cart,
    bundle_item_names,
    compute_cart_summary,
    get_combo_by_id,
    match_combo,
    rule_hints,
    savings_for,
    trending_overlap,
    validate_catalog,
)


def item(name, price=0, **extra):
    return {"name": name, "price": price, **extra}


def test_catalog_shape():
    assert len(PREDEFINED_COMBOS) == 15
    ids = [c["id"] for c in PREDEFINED_COMBOS]
    assert ids[0] == "combo_001" and ids[-1] == "combo_015"
    assert len(set(ids)) == len(ids)
    for combo in PREDEFINED_COMBOS:
        assert combo["savings"] == combo["originalPrice"] - combo["comboPrice"]
        assert combo["comboPrice"] < combo["originalPrice"]


@pytest.mark.parametrize("cart", [[], [item("CHEEZY 7 PIZZA", 229)], [item("RANDOM DISH", 50)]])
def test_fewer_than_two_items_never_match(cart):
    assert match_combo(cart, PREDEFINED_COMBOS) is None


def test_triple_delight_scenario(triple_delight_cart):
    combo = match_combo(triple_delight_cart, PREDEFINED_COMBOS)
    assert combo["id"] == "combo_001"
    assert combo["name"] == "Triple Delight Feast"
    assert savings_for(combo) == 806 - 649 == 157


def test_two_items_unique_to_spicy_fire_bundle():
    cart = [item("PERI PERI VEG", 259), item("PERI PERI FRIES", 99)]
    assert match_combo(cart, PREDEFINED_COMBOS)["id"] == "combo_002"


def test_first_match_wins_over_better_savings():
    # Both combo_001 (saves 157) and combo_002 (saves 196) contain these two items
    cart = [item("PERI PERI PANEER", 209), item("PERI PERI PANEER WRAP", 209)]
    combo = match_combo(cart, PREDEFINED_COMBOS)
    assert combo["id"] == "combo_001"
    assert savings_for(combo) < savings_for(get_combo_by_id("combo_002", PREDEFINED_COMBOS))


def test_catalog_order_decides():
    cart = [item("PERI PERI PANEER", 209), item("PERI PERI PANEER WRAP", 209)]
    reordered = list(reversed(PREDEFINED_COMBOS))
    # combo_015 holds only the wrap, so combo_002 is the first qualifying bundle in reverse order
    assert match_combo(cart, reordered)["id"] == "combo_002"


def test_match_is_case_insensitive():
    cart = [item("cheezy 7 pizza", 229), item("Peri Peri Paneer", 209)]
    assert match_combo(cart, PREDEFINED_COMBOS)["id"] == "combo_001"


def test_substrings_do_not_match():
    cart = [item("CHEEZY 7"), item("PERI PERI"), item("PANEER WRAP")]
    assert match_combo(cart, PREDEFINED_COMBOS) is None


def test_duplicate_entries_inflate_match_count():
    # COLD COFFEE appears once in combo_001, yet two copies reach the threshold
    cart = [item("COLD COFFEE", 159), item("COLD COFFEE", 159)]
    assert match_combo(cart, PREDEFINED_COMBOS)["id"] == "combo_001"


def test_unknown_items_do_not_match():
    cart = [item("RANDOM DISH", 50), item("ANOTHER DISH", 60), item("COLD COFFEE", 159)]
    assert match_combo(cart, PREDEFINED_COMBOS) is None


def test_matched_bundle_always_overlaps_two_cart_items():
    carts = [
        [item("CHOCO LAVA"), item("TWIN CLUB"), item("RANDOM")],
        [item("PERI PERI WINGS"), item("SPICY MANGO")],
        [item("OREO MILKSHAKE"), item("CAJUN CRINKLE FRIES"), item("LIME N MINT")],
        [item("LIME N MINT"), item("MARGHERITTA")],
    ]
    for cart in carts:
        combo = match_combo(cart, PREDEFINED_COMBOS)
        if combo is None:
            continue
        names = bundle_item_names(combo)
        assert sum(1 for ci in cart if ci["name"].lower() in names) >= 2


def test_match_is_deterministic_and_pure(triple_delight_cart):
    before = copy.deepcopy(triple_delight_cart)
    first = match_combo(triple_delight_cart, PREDEFINED_COMBOS)
    second = match_combo(triple_delight_cart, PREDEFINED_COMBOS)
    assert first == second
    assert triple_delight_cart == before


@pytest.mark.parametrize("cart", [None, "CHEEZY 7 PIZZA", {"name": "X"}, 3])
def test_non_list_cart_is_rejected(cart):
    with pytest.raises(ValidationError):
        match_combo(cart, PREDEFINED_COMBOS)
    with pytest.raises(ValidationError):
        compute_cart_summary(cart)


def test_non_object_entries_are_rejected():
    with pytest.raises(ValidationError):
        match_combo(["CHEEZY 7 PIZZA", "COLD COFFEE"], PREDEFINED_COMBOS)


def test_missing_names_are_tolerated():
    assert match_combo([{"price": 10}, {"name": None}], PREDEFINED_COMBOS) is None


def test_empty_cart_summary():
    assert compute_cart_summary([]) == {"itemCount": 0, "totalPrice": 0, "categories": []}


def test_cart_summary_totals_and_categories():
    cart = [
        item("A", 100, category="PIZZA"),
        {"name": "B", "category": "PIZZA"},
        item("C", 50.5),
        item("D", "25"),
        item("E", "abc", category="SHAKES"),
        item("F", True),
    ]
    summary = compute_cart_summary(cart)
    assert summary["itemCount"] == 6
    assert summary["totalPrice"] == pytest.approx(175.5)
    assert summary["categories"] == ["PIZZA", "Unknown", "SHAKES"]


@pytest.mark.parametrize("price", ["NaN", "inf", "-Infinity", "1e400", float("nan"), float("inf")])
def test_non_finite_prices_count_as_zero(price):
    summary = compute_cart_summary([item("A", price), item("B", 10)])
    assert summary["totalPrice"] == 10


def test_cart_summary_is_not_quantity_weighted():
    summary = compute_cart_summary([item("A", 100, qty=3)])
    assert summary["itemCount"] == 1
    assert summary["totalPrice"] == 100


def test_trending_overlap():
    cart = [item("COLD COFFEE"), item("tandoori paneer wrap"), item("CHEEZY 7 PIZZA")]
    assert trending_overlap(cart, TRENDING_DISHES)["name"] == "tandoori paneer wrap"
    assert trending_overlap([item("COLD COFFEE")], TRENDING_DISHES) is None
    assert trending_overlap([], TRENDING_DISHES) is None


def test_get_combo_by_id():
    assert get_combo_by_id("combo_004", PREDEFINED_COMBOS)["name"] == "Cheese Lover's Paradise"
    with pytest.raises(NotFoundError):
        get_combo_by_id("combo_999", PREDEFINED_COMBOS)


def test_rule_hints_keywords(triple_delight_cart):
    hints = rule_hints(triple_delight_cart, COMBO_SUGGESTION_RULES)
    assert hints == [
        COMBO_SUGGESTION_RULES["spicyItems"]["message"],
        COMBO_SUGGESTION_RULES["cheeseItems"]["message"],
        COMBO_SUGGESTION_RULES["paneerItems"]["message"],
    ]


def test_rule_hints_thresholds():
    cart = [
        item("COLD COFFEE", restaurant="Peppanizze"),
        item("OREO MILKSHAKE", restaurant="Urbanwrap"),
        item("VANILLA SHAKE", restaurant="Shimmers"),
        item("MANGO MILKSHAKE", restaurant="Urbanwrap"),
    ]
    hints = rule_hints(cart, COMBO_SUGGESTION_RULES)
    assert hints == [
        COMBO_SUGGESTION_RULES["multipleRestaurants"]["message"],
        COMBO_SUGGESTION_RULES["partyItems"]["message"],
    ]


def test_analyze_cart(triple_delight_cart):
    result = analyze_cart(triple_delight_cart, PREDEFINED_COMBOS, TRENDING_DISHES, COMBO_SUGGESTION_RULES)
    assert result["itemCount"] == 3
    assert result["totalPrice"] == 647
    assert result["categories"] == ["Unknown"]
    assert result["suggestedCombo"]["id"] == "combo_001"
    assert result["savingsPotential"] == 157
    assert result["suggestionReason"] == 'You could save ₹157 by choosing our "Triple Delight Feast" combo!'
    assert result["trendingMatch"]["name"] == "CHEEZY 7 PIZZA"


def test_analyze_cart_without_match():
    result = analyze_cart([item("RANDOM DISH", 50)], PREDEFINED_COMBOS)
    assert result["suggestedCombo"] is None
    assert result["savingsPotential"] is None
    assert result["suggestionReason"] == ""
    assert result["trendingMatch"] is None
    assert result["ruleHints"] == []


def _bundle(**overrides):
    bundle = copy.deepcopy(PREDEFINED_COMBOS[0])
    bundle.update(overrides)
    return bundle


def test_validate_catalog_accepts_shipped_data():
    validate_catalog(PREDEFINED_COMBOS)


def test_validate_catalog_rejects_wrong_savings():
    with pytest.raises(CatalogError, match="savings"):
        validate_catalog([_bundle(savings=100)])


def test_validate_catalog_rejects_non_discount():
    with pytest.raises(CatalogError, match="not below"):
        validate_catalog([_bundle(comboPrice=900, savings=-94)])


def test_validate_catalog_rejects_duplicate_ids():
    with pytest.raises(CatalogError, match="duplicate"):
        validate_catalog([_bundle(), _bundle()])
