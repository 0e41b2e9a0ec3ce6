from __future__ import annotations

import json
from typing import Any, Dict, List

from .models.combo_data import COMBO_SUGGESTION_RULES, PREDEFINED_COMBOS, TRENDING_DISHES
from .models.combo_matcher import (
    BlueBlissError,
    analyze_cart,
    compute_cart_summary,
    get_combo_by_id,
    match_combo,
    savings_for,
)


def _load_cart(raw: str) -> Any:
    cart = json.loads(raw)
    # Accept either a bare array or a {"cartItems": [...]} request body
    if isinstance(cart, dict) and "cartItems" in cart:
        return cart["cartItems"]
    return cart


def handle_command(command: str, args: List[str]) -> Dict[str, Any]:
    try:
        if command == "combos":
            return {"combos": list(PREDEFINED_COMBOS), "count": len(PREDEFINED_COMBOS)}

        if command == "combo":
            # args: [combo_id]
            if not args:
                return {"error": "combo requires a combo id"}
            return {"combo": get_combo_by_id(args[0], PREDEFINED_COMBOS)}

        if command == "trending":
            return {"trending": list(TRENDING_DISHES), "count": len(TRENDING_DISHES)}

        if command == "match_combo":
            # args: [cart_json]
            if not args:
                return {"error": "match_combo requires the cart as a JSON string"}
            combo = match_combo(_load_cart(args[0]), PREDEFINED_COMBOS)
            return {"suggestedCombo": combo, "savingsPotential": savings_for(combo) if combo else None}

        if command == "cart_summary":
            if not args:
                return {"error": "cart_summary requires the cart as a JSON string"}
            return compute_cart_summary(_load_cart(args[0]))

        if command == "analyze_cart":
            if not args:
                return {"error": "analyze_cart requires the cart as a JSON string"}
            return analyze_cart(_load_cart(args[0]), PREDEFINED_COMBOS, TRENDING_DISHES, COMBO_SUGGESTION_RULES)

        if command == "search":
            # args: [query, veg_only?]
            from .models.dish_search import search_dishes
            from .models.menu_loader import all_dishes
            query = args[0] if args else None
            veg_only = len(args) > 1 and args[1].lower() in ("1", "true", "veg")
            results = search_dishes(all_dishes(), query=query, veg_only=veg_only)
            return {"results": results, "count": len(results)}

        if command == "ask":
            # Menu-aware keyword answer, no LLM
            if not args:
                return {"error": "ask requires a message"}
            from .models.dish_search import compose_chat_answer
            from .models.menu_loader import all_dishes
            return compose_chat_answer(" ".join(args), all_dishes(), PREDEFINED_COMBOS, TRENDING_DISHES)

        if command == "chat":
            if not args:
                return {"error": "chat requires a message"}
            from .models.llm import get_ai_response
            return {"aiResponse": get_ai_response(" ".join(args))}

        if command == "delivery":
            # args: [lat, lng]
            if len(args) < 2:
                return {"error": "delivery requires lat and lng"}
            from .models.delivery import calculate_delivery
            return calculate_delivery({"lat": args[0], "lng": args[1]})
    except json.JSONDecodeError as e:
        return {"error": f"Invalid JSON: {e}"}
    except BlueBlissError as e:
        return {"error": str(e)}

    return {"error": "Unknown command or arguments"}
