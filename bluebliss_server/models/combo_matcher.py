"""
Cart analysis and combo matching.

Everything here is a pure function over plain dicts (the JSON shapes the
storefront sends and receives), so it is safe to call from any number of
concurrent requests. The combo catalog itself lives in ``combo_data``.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Optional, Sequence

# Minimum number of cart items that must overlap a bundle's items
MATCH_THRESHOLD: int = 2
UNKNOWN_CATEGORY: str = "Unknown"


class BlueBlissError(Exception):
    """Base class for errors raised by the BlueBliss back end."""


class ValidationError(BlueBlissError):
    """Malformed client input. Maps to a 400 response."""


class NotFoundError(BlueBlissError):
    """A lookup by id found nothing. Maps to a 404 response."""


class CatalogError(BlueBlissError, ValueError):
    """The static combo catalog is internally inconsistent."""


def _require_cart(cart: Any) -> List[Dict[str, Any]]:
    if not isinstance(cart, list):
        raise ValidationError("Invalid request. 'cartItems' array is required.")
    for item in cart:
        if not isinstance(item, dict):
            raise ValidationError("Each cart item must be an object with at least a 'name'.")
    return cart


def _name_key(value: Any) -> str:
    if value is None:
        return ""
    return str(value).lower()


def coerce_price(value: Any) -> float:
    """Lenient price coercion: numbers pass through, numeric strings are parsed, anything else is 0."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0
    else:
        return 0
    # NaN, inf and overflowing literals like "1e400" count as missing
    if isinstance(number, float) and not math.isfinite(number):
        return 0
    return number


def bundle_item_names(bundle: Dict[str, Any]) -> set[str]:
    return {_name_key(i.get("name")) for i in bundle.get("items") or []}


def count_overlap(cart: Sequence[Dict[str, Any]], bundle: Dict[str, Any]) -> int:
    # Each cart entry is tested on its own, so duplicate entries each count
    names = bundle_item_names(bundle)
    return sum(1 for ci in cart if _name_key(ci.get("name")) in names)


def match_combo(cart: Any, catalog: Sequence[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Return the first bundle in catalog order that shares at least two items with the cart.

    Bundles are not ranked by savings or rating: catalog order decides.
    Returns None for carts with fewer than two entries or when nothing qualifies.
    """
    cart = _require_cart(cart)
    if len(cart) < MATCH_THRESHOLD:
        return None
    for bundle in catalog:
        if count_overlap(cart, bundle) >= MATCH_THRESHOLD:
            return bundle
    return None


def compute_cart_summary(cart: Any) -> Dict[str, Any]:
    cart = _require_cart(cart)
    total = sum(coerce_price(item.get("price")) for item in cart)
    categories: List[str] = []
    for item in cart:
        category = item.get("category") or UNKNOWN_CATEGORY
        if category not in categories:
            categories.append(category)
    return {
        "itemCount": len(cart),
        "totalPrice": total,
        "categories": categories,
    }


def trending_overlap(cart: Any, trending: Iterable[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    cart = _require_cart(cart)
    trending_names = {_name_key(td.get("name")) for td in trending}
    for item in cart:
        if _name_key(item.get("name")) in trending_names:
            return item
    return None


def get_combo_by_id(combo_id: str, catalog: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    for bundle in catalog:
        if bundle.get("id") == combo_id:
            return bundle
    raise NotFoundError("Combo not found")


def savings_for(bundle: Dict[str, Any]) -> float:
    return bundle["originalPrice"] - bundle["comboPrice"]


def affordable_combos(catalog: Sequence[Dict[str, Any]], budget: float) -> List[Dict[str, Any]]:
    return [c for c in catalog if c["comboPrice"] <= budget]


def rule_hints(cart: Any, rules: Dict[str, Dict[str, Any]]) -> List[str]:
    """Upsell messages for every suggestion rule the cart triggers, in rule order.

    Keyword rules fire when any item name contains one of their keywords.
    ``multipleRestaurants`` counts distinct restaurants; ``partyItems`` counts entries.
    """
    cart = _require_cart(cart)
    upper_names = [str(ci.get("name") or "").upper() for ci in cart]
    restaurants = {ci.get("restaurant") for ci in cart if ci.get("restaurant")}
    hints: List[str] = []
    for key, rule in rules.items():
        keywords = rule.get("items")
        if keywords:
            if any(kw.upper() in name for name in upper_names for kw in keywords):
                hints.append(rule["message"])
            continue
        threshold = rule.get("threshold")
        if threshold is None:
            continue
        if key == "multipleRestaurants":
            fired = len(restaurants) >= threshold
        else:
            fired = len(cart) >= threshold
        if fired:
            hints.append(rule["message"])
    return hints


def analyze_cart(
    cart: Any,
    catalog: Sequence[Dict[str, Any]],
    trending: Iterable[Dict[str, Any]] = (),
    rules: Optional[Dict[str, Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    summary = compute_cart_summary(cart)
    combo = match_combo(cart, catalog)
    savings = savings_for(combo) if combo else None
    reason = ""
    if combo:
        reason = f'You could save ₹{savings} by choosing our "{combo["name"]}" combo!'
    return {
        **summary,
        "suggestedCombo": combo,
        "savingsPotential": savings,
        "suggestionReason": reason,
        "trendingMatch": trending_overlap(cart, trending),
        "ruleHints": rule_hints(cart, rules or {}),
    }


def validate_catalog(catalog: Sequence[Dict[str, Any]]) -> None:
    """Raise CatalogError if any bundle breaks the pricing or id invariants."""
    seen: set[str] = set()
    problems: List[str] = []
    for bundle in catalog:
        cid = bundle.get("id")
        if not cid:
            problems.append(f"bundle {bundle.get('name')!r} has no id")
            continue
        if cid in seen:
            problems.append(f"{cid}: duplicate id")
        seen.add(cid)
        if not bundle.get("items"):
            problems.append(f"{cid}: no items")
        original = bundle.get("originalPrice")
        price = bundle.get("comboPrice")
        if not isinstance(original, (int, float)) or not isinstance(price, (int, float)):
            problems.append(f"{cid}: originalPrice and comboPrice must be numbers")
            continue
        if price >= original:
            problems.append(f"{cid}: comboPrice {price} is not below originalPrice {original}")
        if bundle.get("savings") != original - price:
            problems.append(
                f"{cid}: savings {bundle.get('savings')} != originalPrice - comboPrice ({original - price})"
            )
    if problems:
        raise CatalogError("Invalid combo catalog: " + "; ".join(problems))
