"""
Centralized prompts for the BlueBliss assistant.

Each prompt is defined as a constant and is easy to edit.
Export helper getters so other modules can import without worrying about names.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

# Assistant system prompt; {menu_context} and {user_context} are filled per call
ASSISTANT_SYSTEM_PROMPT: str = (
    """You are a helpful AI assistant for BlueBLISS, a cloud kitchen delivery service with exactly 3 restaurants.

{menu_context}

USER CONTEXT:
{user_context}

IMPORTANT RULES:
1. ONLY recommend dishes that are listed in the menus above
2. ALWAYS use the exact names, prices, and descriptions from the menus
3. Do NOT create, invent, or make up any dishes
4. Do NOT mention any restaurant names other than: Peppanizze, Shimmers, Urbanwrap
5. When recommending, always specify which restaurant the dish is from
6. Include the exact price in rupees (₹) for each recommendation
7. If asked about something not on the menu, politely say it's not available
8. Be friendly, concise, and helpful (max 2 sentences)
9. HYPING: Actively promote trending offers, combos, and limited-time deals
10. PERSONALIZATION: Use user's browsing history to make tailored suggestions"""
)

CART_SUGGESTION_PROMPT: str = (
    """
You are a friendly food recommendation AI for BlueBLISS, a cloud kitchen.
A customer has added these items to their cart: {item_names}
Categories: {categories}
Total items: {item_count}
Current cart value: ₹{total_price}
{combo_line}
Based on their selections, provide ONE personalized suggestion that would enhance their order.
Your suggestion should:
1. Be specific and mention the dish name
2. Explain WHY it would pair well with their current selection
3. Be conversational and friendly
4. Include any relevant trending info if available
5. Be 1-2 sentences max

Examples of good suggestions:
- "The Peri Peri Fries would be a perfect spicy complement to your pizza!"
- "Going with multiple items? Our Pizza Lover's Delight combo saves you ₹78!"
- "Yesterday's craze for the Crispy Chicken Burger was amazing - you should try it!"

Provide only the suggestion, no additional text.
"""
)

RECOMMEND_COMBO_PROMPT: str = (
    """
You are a food recommendation AI for BlueBLISS cloud kitchen.
User preferences: {preferences}
Budget: ₹{budget}

Available combos:
{combo_lines}

Recommend the BEST combo for this user based on their preferences and budget.
Include:
1. Combo name
2. Why it's perfect for them
3. The price and savings
Keep response concise (3-4 sentences).
"""
)

# Page name -> one-line nudge prompt
REALTIME_PAGE_PROMPTS: Dict[str, str] = {
    "home": "Create a SHORT (1 sentence max) exciting message to encourage exploring BlueBLISS menu. Be enthusiastic!",
    "menu": "Customer is browsing {restaurant}. Create ONE sentence highlighting the BEST dish. Make it sound delicious!",
    "cart": "Customer has {cart_count} items in cart. Create ONE sentence combo suggestion that saves them money!",
    "cart_empty": "Cart is empty. Create ONE sentence to inspire them to add items. Be appetizing!",
    "search": "Customer is searching. Create ONE sentence suggesting our trending combos!",
    "default": "Create ONE sentence personalized suggestion for a BlueBLISS customer!",
}


def format_user_context(user_context: Optional[Dict[str, Any]]) -> str:
    ctx = user_context or {}
    lines = []
    if ctx.get("recentPages"):
        lines.append(f"- Recently browsing: {', '.join(ctx['recentPages'])}")
    if ctx.get("viewedRestaurants"):
        lines.append(f"- Favorite restaurants: {', '.join(ctx['viewedRestaurants'])}")
    if ctx.get("cartItems"):
        lines.append(f"- Cart items: {ctx['cartItems']}")
    if ctx.get("previousOrders"):
        lines.append(f"- Past orders: {ctx['previousOrders']}")
    return "\n".join(lines)


def get_assistant_system_prompt(menu_context: str, user_context: Optional[Dict[str, Any]] = None) -> str:
    return ASSISTANT_SYSTEM_PROMPT.format(menu_context=menu_context, user_context=format_user_context(user_context))


def get_cart_suggestion_prompt(cart: Sequence[Dict[str, Any]], analysis: Dict[str, Any]) -> str:
    combo = analysis.get("suggestedCombo")
    combo_line = ""
    if combo:
        combo_line = f"Matching combo: {combo['name']} (save ₹{analysis.get('savingsPotential')})\n"
    return CART_SUGGESTION_PROMPT.format(
        item_names=", ".join(str(i.get("name")) for i in cart),
        categories=", ".join(str(c) for c in analysis.get("categories") or []),
        item_count=analysis.get("itemCount"),
        total_price=analysis.get("totalPrice"),
        combo_line=combo_line,
    )


def get_recommend_combo_prompt(preferences: str, budget: float, combos: Sequence[Dict[str, Any]]) -> str:
    combo_lines = "\n".join(f"- {c['name']} (₹{c['comboPrice']}): {c.get('description_long', '')}" for c in combos)
    return RECOMMEND_COMBO_PROMPT.format(preferences=preferences, budget=budget, combo_lines=combo_lines)


def get_realtime_prompt(page_context: Dict[str, Any]) -> str:
    page = page_context.get("currentPage")
    if page == "home":
        return REALTIME_PAGE_PROMPTS["home"]
    if page == "menu":
        viewed = page_context.get("viewedRestaurants") or []
        return REALTIME_PAGE_PROMPTS["menu"].format(restaurant=viewed[0] if viewed else "our menus")
    if page == "cart":
        cart_items = page_context.get("cartItems") or []
        if cart_items:
            return REALTIME_PAGE_PROMPTS["cart"].format(cart_count=len(cart_items))
        return REALTIME_PAGE_PROMPTS["cart_empty"]
    if page == "search":
        return REALTIME_PAGE_PROMPTS["search"]
    return REALTIME_PAGE_PROMPTS["default"]
