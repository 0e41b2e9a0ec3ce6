from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

MENUS_DIR: Path = Path(__file__).resolve().parent.parent / "data" / "menus"

# Brand name -> menu file
RESTAURANTS: Dict[str, str] = {
    "Peppanizze": "Peppanizze.json",
    "Shimmers": "Shimmers.json",
    "Urbanwrap": "Urbanwrap.json",
}

RESTAURANT_BLURBS: Dict[str, str] = {
    "Peppanizze": "Pizza Restaurant",
    "Shimmers": "Burgers & Shakes",
    "Urbanwrap": "Wraps & Rolls Restaurant",
}

NON_VEG_KEYWORDS: List[str] = [
    "chicken", "mutton", "egg", "fish", "prawn", "beef",
    "pork", "meat", "biryani", "kebab", "tikka", "tandoori",
    "fry", "masala", "curry", "seekh", "shami", "keema", "lamb",
]

_MENU_CACHE: Dict[str, List[Dict[str, Any]]] = {}


def classify_dish(name: Optional[str]) -> str:
    n = (name or "").lower()
    if any(k in n for k in NON_VEG_KEYWORDS):
        return "nonveg"
    return "veg"


def canonical_restaurant(name: Optional[str]) -> Optional[str]:
    n = (name or "").strip().lower()
    for brand in RESTAURANTS:
        if brand.lower() == n:
            return brand
    return None


def _read_menu_file(path: Path) -> List[Dict[str, Any]]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Error loading {path.name}: {e}")
        return []
    if not isinstance(data, list):
        logger.error(f"Error loading {path.name}: expected a list of categories")
        return []
    return data


def load_menus(menus_dir: Optional[Path] = None, refresh: bool = False) -> Dict[str, List[Dict[str, Any]]]:
    """Return {brand: [category records]} for every brand, reading files at most once."""
    if menus_dir is not None:
        return {brand: _read_menu_file(Path(menus_dir) / fname) for brand, fname in RESTAURANTS.items()}
    if refresh:
        _MENU_CACHE.clear()
    if not _MENU_CACHE:
        for brand, fname in RESTAURANTS.items():
            _MENU_CACHE[brand] = _read_menu_file(MENUS_DIR / fname)
        logger.info(f"Menus loaded: {', '.join(f'{b}={len(c)} categories' for b, c in _MENU_CACHE.items())}")
    return _MENU_CACHE


def restaurant_menu(brand: str, menus: Optional[Dict[str, List[Dict[str, Any]]]] = None) -> List[Dict[str, Any]]:
    menus = menus if menus is not None else load_menus()
    return [{**category, "restaurant": brand} for category in menus.get(brand, [])]


def all_menus(menus: Optional[Dict[str, List[Dict[str, Any]]]] = None) -> List[Dict[str, Any]]:
    menus = menus if menus is not None else load_menus()
    out: List[Dict[str, Any]] = []
    for brand in RESTAURANTS:
        out.extend(restaurant_menu(brand, menus))
    return out


def flatten_dishes(menus: Optional[Dict[str, List[Dict[str, Any]]]] = None) -> List[Dict[str, Any]]:
    """Flatten category records into dishes tagged with category, restaurant and veg/nonveg type."""
    menus = menus if menus is not None else load_menus()
    dishes: List[Dict[str, Any]] = []
    for brand in RESTAURANTS:
        for category in menus.get(brand, []):
            for item in category.get("items") or []:
                dishes.append({
                    **item,
                    "category": category.get("category"),
                    "restaurant": brand,
                    "type": item.get("type") or classify_dish(item.get("name")),
                })
    return dishes


def all_dishes() -> List[Dict[str, Any]]:
    return flatten_dishes(load_menus())


def format_menus_for_ai(menus: Optional[Dict[str, List[Dict[str, Any]]]] = None) -> str:
    menus = menus if menus is not None else load_menus()
    lines: List[str] = ["", "", "=== AVAILABLE MENUS ===", ""]
    for brand in RESTAURANTS:
        header = f"{brand.upper()} ({RESTAURANT_BLURBS[brand]})"
        lines.append(header)
        lines.append("=" * len(header))
        for category in menus.get(brand, []):
            lines.append("")
            lines.append(f"{category.get('category')}:")
            for item in category.get("items") or []:
                lines.append(
                    f"  - {item.get('name')}: ₹{item.get('price')} ({item.get('desc', '')}) - Rating: {item.get('rating', '-')}/5"
                )
        lines.append("")
        lines.append("")
    return "\n".join(lines)
