"""
Keyword search over the flattened menu.

``parse_user_query`` turns a free-text chat message into filters,
``filter_dishes`` applies them and ``compose_chat_answer`` renders the
menu-aware reply used by the chat endpoint (no LLM involved).
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Sequence

from .menu_loader import RESTAURANTS

CATEGORY_WORDS: List[str] = ["pizza", "burger", "wrap", "fries", "shake", "mojito", "sandwich", "pasta", "wings", "bread"]
SPICY_WORDS: List[str] = ["PERI PERI", "TANDOORI", "SPICY"]
CHEESE_WORDS: List[str] = ["CHEESE", "CHEEZY"]
NON_VEG_WORDS: List[str] = ["CHICKEN", "MUTTON", "LAMB", "EGG"]
TOP_N: int = 5

_MIN_PRICE_RE = re.compile(r"above\s+(\d+)|over\s+(\d+)|more\s+than\s+(\d+)|atleast\s+(\d+)|at\s+least\s+(\d+)")
_MAX_PRICE_RE = re.compile(r"under\s+(\d+)|below\s+(\d+)|less\s+than\s+(\d+)|₹?\s*(\d+)")
_NON_VEG_PHRASE_RE = re.compile(r"non[\s-]?veg")


def _first_group_int(m: Optional[re.Match]) -> Optional[int]:
    if not m:
        return None
    for g in m.groups():
        if g is not None:
            return int(g)
    return None


def extract_min_price(query: str) -> Optional[int]:
    return _first_group_int(_MIN_PRICE_RE.search(query.lower()))


def extract_max_price(query: str) -> Optional[int]:
    q = query.lower()
    # A number already claimed by "above N" is not also an upper bound
    q = _MIN_PRICE_RE.sub(" ", q)
    return _first_group_int(_MAX_PRICE_RE.search(q))


def extract_category(query: str) -> Optional[str]:
    q = query.lower()
    return next((c for c in CATEGORY_WORDS if c in q), None)


def extract_restaurant(query: str) -> Optional[str]:
    q = query.lower()
    return next((brand for brand in RESTAURANTS if brand.lower() in q), None)


def parse_user_query(query: str) -> Dict[str, Any]:
    lower = (query or "").lower()
    non_veg_phrase = bool(_NON_VEG_PHRASE_RE.search(lower))
    non_veg = non_veg_phrase or any(w in lower for w in ["chicken", "mutton", "lamb", "egg"])
    return {
        "query": lower,
        "maxPrice": extract_max_price(lower),
        "minPrice": extract_min_price(lower),
        "category": extract_category(lower),
        "restaurant": extract_restaurant(lower),
        "spicy": any(w in lower for w in ["spicy", "peri peri", "tandoori"]),
        "cheese": "cheese" in lower or "cheesy" in lower,
        "paneer": "paneer" in lower,
        "chicken": "chicken" in lower,
        "nonVeg": non_veg,
        "veg": ("veg" in lower or "vegetarian" in lower) and not non_veg_phrase,
        "trending": "trending" in lower or "popular" in lower,
        "combo": "combo" in lower,
    }


def _name_has(dish: Dict[str, Any], words: Sequence[str]) -> bool:
    name = str(dish.get("name") or "").upper()
    return any(w in name for w in words)


def sort_by_rating(dishes: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(dishes, key=lambda d: d.get("rating") or 0, reverse=True)


def filter_dishes(dishes: Sequence[Dict[str, Any]], filters: Dict[str, Any]) -> List[Dict[str, Any]]:
    results = list(dishes)
    if filters.get("maxPrice"):
        results = [d for d in results if (d.get("price") or 0) <= filters["maxPrice"]]
    if filters.get("minPrice"):
        results = [d for d in results if (d.get("price") or 0) >= filters["minPrice"]]
    if filters.get("category"):
        results = [d for d in results if filters["category"] in str(d.get("category") or "").lower()]
    if filters.get("restaurant"):
        results = [d for d in results if d.get("restaurant") == filters["restaurant"]]
    if filters.get("spicy"):
        results = [d for d in results if _name_has(d, SPICY_WORDS)]
    if filters.get("cheese"):
        results = [d for d in results if _name_has(d, CHEESE_WORDS)]
    if filters.get("paneer"):
        results = [d for d in results if _name_has(d, ["PANEER"])]
    if filters.get("chicken"):
        results = [d for d in results if _name_has(d, ["CHICKEN"])]
    elif filters.get("nonVeg"):
        results = [d for d in results if _name_has(d, NON_VEG_WORDS) or d.get("type") == "nonveg"]
    elif filters.get("veg"):
        results = [d for d in results if d.get("type", "veg") == "veg"]
    return sort_by_rating(results)


def search_dishes(
    dishes: Sequence[Dict[str, Any]],
    query: Optional[str] = None,
    max_price: Optional[float] = None,
    min_price: Optional[float] = None,
    category: Optional[str] = None,
    restaurant: Optional[str] = None,
    veg_only: bool = False,
) -> List[Dict[str, Any]]:
    results = list(dishes)
    if query:
        q = query.lower()
        results = [
            d for d in results
            if q in str(d.get("name") or "").lower()
            or q in str(d.get("category") or "").lower()
            or q in str(d.get("desc") or "").lower()
        ]
    if max_price:
        results = [d for d in results if (d.get("price") or 0) <= max_price]
    if min_price:
        results = [d for d in results if (d.get("price") or 0) >= min_price]
    if category:
        results = [d for d in results if category.lower() in str(d.get("category") or "").lower()]
    if restaurant:
        results = [d for d in results if d.get("restaurant") == restaurant]
    if veg_only:
        results = [d for d in results if d.get("type") == "veg"]
    return sort_by_rating(results)


def _combo_lines(combos: Sequence[Dict[str, Any]]) -> str:
    text = "🎉 Here are our popular combos:\n\n"
    for i, combo in enumerate(combos[:3], start=1):
        text += f"{i}. **{combo['name']}** - ₹{combo['comboPrice']} (Save ₹{combo['savings']})\n   {combo.get('description_long', '')}\n\n"
    return text + "Which combo interests you?"


def _trending_lines(trending: Sequence[Dict[str, Any]]) -> str:
    text = "🔥 Trending now:\n\n"
    for i, dish in enumerate(trending[:TOP_N], start=1):
        text += f"{i}. **{dish['name']}** from {dish['restaurant']}\n   {dish.get('reason', '')}\n\n"
    return text


def _result_lines(matched: Sequence[Dict[str, Any]], filters: Dict[str, Any]) -> str:
    price_info = f" under ₹{filters['maxPrice']}" if filters.get("maxPrice") else ""
    cat_info = f" {filters['category']}s" if filters.get("category") else ""
    text = f"✨ Found {len(matched)} items{cat_info}{price_info}! Here are the top picks:\n\n"
    for i, dish in enumerate(matched[:TOP_N], start=1):
        rating = f"⭐ {dish['rating']}" if dish.get("rating") else ""
        text += f"{i}. **{dish['name']}** - ₹{dish.get('price')} {rating}\n   {dish.get('desc') or ''} | From {dish.get('restaurant')}\n\n"
    if len(matched) > TOP_N:
        text += f"\n💡 Showing top {TOP_N} of {len(matched)} items. Want to see more or refine your search?"
    return text


GUIDANCE_TEXT: str = (
    "🤔 Hmm, I couldn't find exactly that. Let me help!\n\n"
    "Try asking for:\n"
    "• Items by price: \"Show me burgers under 299\"\n"
    "• By type: \"Pizza with paneer\", \"Spicy wraps\"\n"
    "• By restaurant: \"Peppanizze pizzas\"\n"
    "• Trending: \"What's trending today?\"\n"
    "• Combos: \"Show me combo deals\"\n\n"
    "Or browse our restaurants: Peppanizze 🍕 | Shimmers 🍔 | Urbanwrap 🌯"
)


def compose_chat_answer(
    message: str,
    dishes: Sequence[Dict[str, Any]],
    combos: Sequence[Dict[str, Any]],
    trending: Sequence[Dict[str, Any]],
    user_context: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Answer a chat message from the menu alone.

    Combo questions win over trending ones, which win over dish matches;
    with nothing to show the reply is a short how-to-ask guide.
    """
    filters = parse_user_query(message)
    matched = filter_dishes(dishes, filters)

    if filters["combo"]:
        answer = _combo_lines(combos)
    elif filters["trending"]:
        answer = _trending_lines(trending)
    elif matched:
        answer = _result_lines(matched, filters)
    else:
        answer = GUIDANCE_TEXT

    ctx = user_context or {}
    if ctx.get("isReturningUser") and matched:
        favourites = ctx.get("favoriteCategories") or []
        answer += (
            "\n\n💡 **Personalized tip**: Based on your previous orders, you might also like dishes with "
            f"{favourites[0] if favourites else 'paneer'}!"
        )

    return {
        "aiResponse": answer,
        "matchedCount": len(matched),
        "suggestions": matched[:TOP_N],
        "filters": filters,
    }
