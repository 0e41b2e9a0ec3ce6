from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

from openai import OpenAI, OpenAIError

from ..settings import env_float, env_int, env_str
from .combo_matcher import BlueBlissError
from .menu_loader import format_menus_for_ai
from .prompts import get_assistant_system_prompt, get_realtime_prompt

logger = logging.getLogger(__name__)

# Ollama serves an OpenAI-compatible API under /v1
DEFAULT_BASE_URL: str = "http://localhost:11434/v1"
DEFAULT_MODEL: str = "mistral:7b"


class LLMError(BlueBlissError, RuntimeError):
    """The inference server failed or returned nothing usable."""


_CLIENT: Optional[OpenAI] = None
_MENU_CONTEXT: Optional[str] = None


def _get_llm_client() -> OpenAI:
    global _CLIENT
    if _CLIENT is None:
        _CLIENT = OpenAI(
            base_url=env_str("LLM_BASE_URL", DEFAULT_BASE_URL),
            # Local servers ignore the key but the SDK requires one
            api_key=env_str("LLM_API_KEY", "ollama"),
            timeout=env_float("LLM_TIMEOUT_S", 60.0),
            max_retries=0,
        )
    return _CLIENT


def _menu_context() -> str:
    global _MENU_CONTEXT
    if _MENU_CONTEXT is None:
        _MENU_CONTEXT = format_menus_for_ai()
    return _MENU_CONTEXT


def get_ai_response(user_message: str, user_context: Optional[Dict[str, Any]] = None) -> str:
    client = _get_llm_client()
    system_prompt = get_assistant_system_prompt(_menu_context(), user_context)

    logger.info("LLM: processing message")
    start = time.perf_counter()
    try:
        response = client.chat.completions.create(
            model=env_str("LLM_MODEL", DEFAULT_MODEL),
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            temperature=env_float("LLM_TEMPERATURE", 0.7),
            max_tokens=env_int("LLM_MAX_TOKENS", 300),
        )
    except OpenAIError as e:
        logger.error(f"LLM error: {e}")
        raise LLMError(f"Failed to get AI response: {e}") from e
    duration_ms = int((time.perf_counter() - start) * 1000)

    content = response.choices[0].message.content if response.choices else None
    if not content or not content.strip():
        raise LLMError("No content returned from the LLM.")
    logger.info(f"LLM: response received _duration_ms={duration_ms}")
    return content.strip()


def generate_realtime_suggestion(page_context: Dict[str, Any]) -> str:
    cart_items = page_context.get("cartItems") or []
    return get_ai_response(
        get_realtime_prompt(page_context),
        {
            "recentPages": page_context.get("recentPages"),
            "viewedRestaurants": page_context.get("viewedRestaurants"),
            "cartItems": ", ".join(str(i) for i in cart_items),
        },
    )
