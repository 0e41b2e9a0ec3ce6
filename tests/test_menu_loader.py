import json

from bluebliss_server.models.combo_data import PREDEFINED_COMBOS
from bluebliss_server.models.menu_loader import (
    all_menus,
    canonical_restaurant,
    classify_dish,
    flatten_dishes,
    format_menus_for_ai,
    load_menus,
    restaurant_menu,
)


def test_classify_dish_keywords():
    assert classify_dish("CLASSIC CHICKEN ZINGER WRAP") == "nonveg"
    assert classify_dish("Tandoori Mutton Wrap") == "nonveg"
    assert classify_dish("AUTHENTIC LAMB BURGER") == "nonveg"
    assert classify_dish("CHEEZY 7 PIZZA") == "veg"
    assert classify_dish(None) == "veg"


def test_shipped_menus_load_for_every_brand():
    menus = load_menus()
    assert set(menus) == {"Peppanizze", "Shimmers", "Urbanwrap"}
    assert all(menus[brand] for brand in menus)


def test_flatten_tags_category_restaurant_and_type():
    dishes = {d["name"]: d for d in flatten_dishes(load_menus())}
    pizza = dishes["CHEEZY 7 PIZZA"]
    assert pizza["restaurant"] == "Peppanizze"
    assert pizza["category"] == "EXOTIC VEG PIZZAS"
    assert pizza["type"] == "veg"
    assert dishes["AUTHENTIC CHICKEN BURGER"]["type"] == "nonveg"
    # An explicit type on the item wins over keyword detection
    assert dishes["PANEER TIKKA WRAP"]["type"] == "veg"


def test_every_combo_item_is_on_a_menu():
    dishes = {(d["name"], d["restaurant"]): d for d in flatten_dishes(load_menus())}
    for combo in PREDEFINED_COMBOS:
        for ci in combo["items"]:
            assert (ci["name"], ci["restaurant"]) in dishes, ci["name"]
            assert dishes[(ci["name"], ci["restaurant"])]["price"] == ci["price"]


def test_missing_and_broken_files_yield_empty_menus(tmp_path):
    (tmp_path / "Peppanizze.json").write_text(json.dumps([{"category": "PIZZA", "items": [{"name": "X", "price": 1}]}]), encoding="utf-8")
    (tmp_path / "Shimmers.json").write_text("{not json", encoding="utf-8")
    menus = load_menus(tmp_path)
    assert menus["Peppanizze"][0]["category"] == "PIZZA"
    assert menus["Shimmers"] == []
    assert menus["Urbanwrap"] == []
    assert [d["name"] for d in flatten_dishes(menus)] == ["X"]


def test_restaurant_views(tmp_path):
    (tmp_path / "Urbanwrap.json").write_text(json.dumps([{"category": "WRAPS", "items": []}]), encoding="utf-8")
    menus = load_menus(tmp_path)
    assert restaurant_menu("Urbanwrap", menus) == [{"category": "WRAPS", "items": [], "restaurant": "Urbanwrap"}]
    assert all_menus(menus) == restaurant_menu("Urbanwrap", menus)
    assert canonical_restaurant("urbanwrap") == "Urbanwrap"
    assert canonical_restaurant("dominos") is None


def test_format_menus_for_ai():
    text = format_menus_for_ai(load_menus())
    assert "=== AVAILABLE MENUS ===" in text
    assert "PEPPANIZZE (Pizza Restaurant)" in text
    assert "  - CHEEZY 7 PIZZA: ₹229 (" in text
    assert text.index("PEPPANIZZE") < text.index("SHIMMERS") < text.index("URBANWRAP")
