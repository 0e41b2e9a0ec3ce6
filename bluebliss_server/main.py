from __future__ import annotations

import argparse
import asyncio
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import settings
from .cli import handle_command
from .models.combo_data import COMBO_SUGGESTION_RULES, PREDEFINED_COMBOS, TRENDING_DISHES
from .models.combo_matcher import (
    NotFoundError,
    ValidationError,
    affordable_combos,
    analyze_cart,
    coerce_price,
    get_combo_by_id,
)
from .models.delivery import DeliveryError, RouteUnavailable, calculate_delivery, restaurant_location
from .models.dish_search import compose_chat_answer, search_dishes
from .models.llm import LLMError, generate_realtime_suggestion, get_ai_response
from .models.menu_loader import all_dishes, all_menus, canonical_restaurant, load_menus, restaurant_menu
from .models.prompts import get_cart_suggestion_prompt, get_recommend_combo_prompt
from .models.user_context import SessionStore

settings.ensure_env_loaded()

app = FastAPI(title="BlueBLISS API", version="2.0")

# Allow the storefront from any origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# Set up logging to file
LOG_FILE = settings.log_file()
logger = logging.getLogger()
logger.setLevel(logging.INFO)
file_handler = logging.FileHandler(LOG_FILE, mode='a', encoding='utf-8')
file_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s: %(message)s'))
logger.handlers = [file_handler]

logger.info("Backend server started!")

sessions = SessionStore()
SESSION_SWEEP_INTERVAL_S = 3600
DEFAULT_BUDGET = 500


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _error_response(exc: Exception, where: str) -> JSONResponse:
    if isinstance(exc, (ValidationError, RouteUnavailable)):
        status = 400
    elif isinstance(exc, NotFoundError):
        status = 404
    elif isinstance(exc, (LLMError, DeliveryError)):
        status = 502
    else:
        status = 500
    if status >= 500:
        logger.error(f"{where} error: {exc}", exc_info=status == 500)
    else:
        logger.info(f"{where} rejected: {exc}")
    return JSONResponse(content={"success": False, "error": str(exc)}, status_code=status)


async def _read_json(request: Request) -> Dict[str, Any]:
    try:
        body = await request.json()
    except ValueError:
        raise ValidationError("Request body must be valid JSON")
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def _quantity(item: Dict[str, Any]) -> float:
    # Same leniency as prices; missing or unusable quantities mean one
    qty = coerce_price(item.get("qty"))
    return qty if qty > 0 else 1


async def _run_blocking(func, *args):
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, func, *args)


async def _sweep_sessions() -> None:
    while True:
        await asyncio.sleep(SESSION_SWEEP_INTERVAL_S)
        removed = sessions.clear_old_sessions()
        if removed:
            logger.info(f"Evicted {removed} idle sessions")


@app.on_event("startup")
async def preload_on_startup():
    load_menus()
    app.state.session_sweeper = asyncio.create_task(_sweep_sessions())


@app.on_event("shutdown")
async def stop_on_shutdown():
    task = getattr(app.state, "session_sweeper", None)
    if task is not None:
        task.cancel()


@app.get("/")
def read_root():
    logger.info("GET / called")
    return {
        "message": "Welcome to BlueBLISS API",
        "version": "2.0",
        "endpoints": {
            "ai": "/api/ai/chat - Smart AI chat with menu awareness",
            "search": "/api/ai/search - Advanced search with filters",
            "combos": "/api/combo/combos - Get all combo deals",
            "analyze": "/api/combo/analyze-cart - Combo suggestion for a cart",
            "menu": "/api/menus - Get all menu items",
            "delivery": "/api/delivery/calculate - Delivery distance and time",
            "health": "/health - Health check",
        },
    }


@app.get("/health")
def health():
    return {
        "status": "Server is running",
        "timestamp": _now_iso(),
        "environment": settings.environment(),
        "ai": "Smart AI enabled",
    }


@app.get("/logs")
async def get_logs():
    logs = ""
    if os.path.exists(LOG_FILE):
        with open(LOG_FILE, 'r', encoding='utf-8') as f:
            logs = f.read()
        open(LOG_FILE, 'w').close()
    return JSONResponse(content={"logs": logs})


@app.post("/cli")
async def cli_endpoint(request: Request):
    data = await request.json()
    command = data.get("command", "")
    args = [str(a) for a in data.get("args", [])]
    logger.info(f"/cli called with command={command}, args={args}")
    result = await _run_blocking(handle_command, command, args)
    return JSONResponse(content=result)


# Combo API
@app.get("/api/combo/combos")
def list_combos():
    return {"success": True, "combos": list(PREDEFINED_COMBOS), "count": len(PREDEFINED_COMBOS)}


@app.get("/api/combo/combos/{combo_id}")
def combo_by_id(combo_id: str):
    try:
        return {"success": True, "combo": get_combo_by_id(combo_id, PREDEFINED_COMBOS)}
    except Exception as e:
        return _error_response(e, "/api/combo/combos/{id}")


@app.get("/api/combo/trending")
def list_trending():
    return {"success": True, "trending": list(TRENDING_DISHES), "count": len(TRENDING_DISHES)}


@app.post("/api/combo/analyze-cart")
async def analyze_cart_endpoint(request: Request):
    try:
        body = await _read_json(request)
        cart = body.get("cartItems")
        analysis = analyze_cart(cart, PREDEFINED_COMBOS, TRENDING_DISHES, COMBO_SUGGESTION_RULES)
        combo = analysis["suggestedCombo"]
        logger.info(f"/api/combo/analyze-cart items={analysis['itemCount']} combo={combo['id'] if combo else None}")

        ai_suggestion: Optional[str] = None
        try:
            ai_suggestion = await _run_blocking(get_ai_response, get_cart_suggestion_prompt(cart, analysis))
        except LLMError as e:
            # The upsell text is optional; the match result still goes out
            logger.error(f"/api/combo/analyze-cart suggestion unavailable: {e}")

        return {
            "success": True,
            "cartAnalysis": {
                "itemCount": analysis["itemCount"],
                "totalPrice": analysis["totalPrice"],
                "categories": analysis["categories"],
            },
            **analysis,
            "aiSuggestion": ai_suggestion,
        }
    except Exception as e:
        return _error_response(e, "/api/combo/analyze-cart")


@app.post("/api/combo/recommend-combo")
async def recommend_combo_endpoint(request: Request):
    try:
        body = await _read_json(request)
        preferences = body.get("preferences")
        if not preferences or not isinstance(preferences, str):
            raise ValidationError("Invalid request. 'preferences' string is required.")
        budget = body.get("budget") or DEFAULT_BUDGET
        if isinstance(budget, bool) or not isinstance(budget, (int, float)):
            raise ValidationError("'budget' must be a number.")
        prompt = get_recommend_combo_prompt(preferences, budget, PREDEFINED_COMBOS)
        recommendation = await _run_blocking(get_ai_response, prompt)
        return {
            "success": True,
            "recommendation": recommendation,
            "availableCombos": affordable_combos(PREDEFINED_COMBOS, budget),
        }
    except Exception as e:
        return _error_response(e, "/api/combo/recommend-combo")


@app.post("/api/combo/chat")
async def combo_chat_endpoint(request: Request):
    try:
        body = await _read_json(request)
        message = body.get("message")
        if not message or not isinstance(message, str):
            raise ValidationError("Invalid request. 'message' field is required.")
        if not message.strip():
            raise ValidationError("Message cannot be empty.")
        ai_response = await _run_blocking(get_ai_response, message.strip())
        return {"success": True, "userMessage": message, "aiResponse": ai_response, "timestamp": _now_iso()}
    except Exception as e:
        return _error_response(e, "/api/combo/chat")


# Menu API
@app.get("/api/menus")
def menus_endpoint():
    return all_menus()


@app.get("/api/menus/all-dishes")
def all_dishes_endpoint():
    return all_dishes()


@app.get("/api/menus/{brand}")
def brand_menu_endpoint(brand: str):
    restaurant = canonical_restaurant(brand)
    if restaurant is None:
        return _error_response(NotFoundError(f"Unknown restaurant: {brand}"), "/api/menus/{brand}")
    return restaurant_menu(restaurant)


# Smart AI API
@app.post("/api/ai/chat")
async def smart_chat_endpoint(request: Request):
    try:
        body = await _read_json(request)
        message = body.get("message")
        if not isinstance(message, str) or not message.strip():
            raise ValidationError("Message is required")
        user_id = body.get("userId")
        user_ctx = sessions.get_user_context(user_id)
        sessions.track_search_query(user_id, message)
        answer = compose_chat_answer(message, all_dishes(), PREDEFINED_COMBOS, TRENDING_DISHES, user_ctx)
        return {
            "success": True,
            "aiResponse": answer["aiResponse"],
            "matchedCount": answer["matchedCount"],
            "suggestions": answer["suggestions"],
        }
    except Exception as e:
        return _error_response(e, "/api/ai/chat")


@app.post("/api/ai/update-cart")
async def update_cart_endpoint(request: Request):
    try:
        body = await _read_json(request)
        cart = body.get("cartItems") or []
        if not isinstance(cart, list) or not all(isinstance(i, dict) for i in cart):
            raise ValidationError("'cartItems' must be an array of objects")
        user_id = body.get("userId")
        sessions.update_cart(user_id, cart)
        for item in cart:
            sessions.track_dish_click(user_id, str(item.get("name")), item.get("restaurant"))
        return {"success": True, "message": "Cart updated"}
    except Exception as e:
        return _error_response(e, "/api/ai/update-cart")


@app.post("/api/ai/track-page")
async def track_page_endpoint(request: Request):
    try:
        body = await _read_json(request)
        page = body.get("pageName")
        if not page:
            raise ValidationError("'pageName' is required")
        sessions.track_page_visit(body.get("userId"), str(page), body.get("metadata"))
        return {"success": True}
    except Exception as e:
        return _error_response(e, "/api/ai/track-page")


@app.post("/api/ai/track-restaurant")
async def track_restaurant_endpoint(request: Request):
    try:
        body = await _read_json(request)
        brand = body.get("restaurant")
        if not brand or not isinstance(brand, str):
            raise ValidationError("'restaurant' is required")
        restaurant = canonical_restaurant(brand)
        if restaurant is None:
            raise NotFoundError(f"Unknown restaurant: {brand}")
        sessions.track_restaurant_view(body.get("userId"), restaurant)
        return {"success": True}
    except Exception as e:
        return _error_response(e, "/api/ai/track-restaurant")


@app.post("/api/ai/track-category")
async def track_category_endpoint(request: Request):
    try:
        body = await _read_json(request)
        category = body.get("category")
        if not category or not isinstance(category, str):
            raise ValidationError("'category' is required")
        sessions.track_category(body.get("userId"), category)
        return {"success": True}
    except Exception as e:
        return _error_response(e, "/api/ai/track-category")


@app.post("/api/ai/orders")
async def record_order_endpoint(request: Request):
    try:
        body = await _read_json(request)
        items = body.get("items")
        if not isinstance(items, list) or not items or not all(isinstance(i, dict) for i in items):
            raise ValidationError("'items' must be a non-empty array of objects")
        user_id = body.get("userId")
        total = sum(coerce_price(i.get("price")) * _quantity(i) for i in items)
        sessions.add_order(user_id, {"items": items, "total": total})
        return {"success": True, "totalOrders": sessions.get_user_context(user_id)["totalOrders"]}
    except Exception as e:
        return _error_response(e, "/api/ai/orders")


@app.post("/api/ai/page-suggestion")
async def page_suggestion_endpoint(request: Request):
    try:
        body = await _read_json(request)
        ctx = sessions.get_user_context(body.get("userId"))
        page = body.get("pageName") or (ctx["recentPages"][-1] if ctx["recentPages"] else None)
        page_context = {
            "currentPage": page,
            "recentPages": ctx["recentPages"],
            "viewedRestaurants": ctx["viewedRestaurants"],
            "cartItems": [str(i.get("name")) for i in ctx["currentCart"]],
        }
        suggestion = await _run_blocking(generate_realtime_suggestion, page_context)
        return {"success": True, "suggestion": suggestion, "page": page}
    except Exception as e:
        return _error_response(e, "/api/ai/page-suggestion")


@app.get("/api/ai/menu")
def smart_menu_endpoint():
    dishes = all_dishes()
    return {"success": True, "dishes": dishes, "count": len(dishes)}


@app.post("/api/ai/search")
async def smart_search_endpoint(request: Request):
    try:
        body = await _read_json(request)
        results = search_dishes(
            all_dishes(),
            query=body.get("query"),
            max_price=body.get("maxPrice"),
            min_price=body.get("minPrice"),
            category=body.get("category"),
            restaurant=body.get("restaurant"),
            veg_only=bool(body.get("vegOnly")),
        )
        return {"success": True, "results": results, "count": len(results)}
    except Exception as e:
        return _error_response(e, "/api/ai/search")


@app.post("/api/ai/real-time-suggestion")
async def realtime_suggestion_endpoint(request: Request):
    try:
        body = await _read_json(request)
        ctx = sessions.get_user_context(body.get("userId"))
        cart = ctx["currentCart"]
        if len(cart) < 2:
            return {"success": True, "suggestion": None}
        total = sum(coerce_price(i.get("price")) * _quantity(i) for i in cart)
        savings = int(total * 0.15)
        return {
            "success": True,
            "suggestion": f"You're buying multiple items! You could save ₹{savings} with our combo deals!",
        }
    except Exception as e:
        return _error_response(e, "/api/ai/real-time-suggestion")


@app.get("/api/ai/insights")
def insights_endpoint():
    return {"success": True, **sessions.trending_insights()}


# Delivery API
@app.post("/api/delivery/calculate")
async def delivery_endpoint(request: Request):
    try:
        body = await _read_json(request)
        data = await _run_blocking(calculate_delivery, body.get("destination"))
        return {"success": True, "data": data}
    except Exception as e:
        return _error_response(e, "/api/delivery/calculate")


@app.get("/api/delivery/restaurant-location")
def restaurant_location_endpoint():
    return {"success": True, "data": restaurant_location()}


def run(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(description="BlueBLISS API server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=settings.port(), help="Port to bind to (default: $PORT or 5001)")
    parser.add_argument("--reload", action="store_true", help="Enable hot reloading")
    args = parser.parse_args(argv)

    import uvicorn

    logger.info(f"Starting server on {args.host}:{args.port} (reload={'enabled' if args.reload else 'disabled'})")
    if args.reload:
        uvicorn.run("bluebliss_server.main:app", host=args.host, port=args.port, reload=True, log_level="info")
    else:
        uvicorn.run(app, host=args.host, port=args.port, log_level="info")


if __name__ == "__main__":
    run()
