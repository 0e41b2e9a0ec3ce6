from types import SimpleNamespace

import pytest
from openai import OpenAIError

from bluebliss_server.models import llm
from bluebliss_server.models.llm import LLMError, generate_realtime_suggestion, get_ai_response


class FakeCompletions:
    def __init__(self, content=None, exc=None):
        self.content = content
        self.exc = exc
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.exc:
            raise self.exc
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def install(monkeypatch, completions):
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    monkeypatch.setattr(llm, "_get_llm_client", lambda: client)
    monkeypatch.setattr(llm, "_menu_context", lambda: "=== AVAILABLE MENUS ===")
    return completions


def test_response_is_stripped_and_prompt_has_menu_and_context(monkeypatch):
    completions = install(monkeypatch, FakeCompletions(content="  Try the CHEEZY 7 PIZZA!  "))
    answer = get_ai_response("something cheesy?", {"viewedRestaurants": ["Peppanizze"]})
    assert answer == "Try the CHEEZY 7 PIZZA!"

    call = completions.calls[0]
    assert call["model"] == llm.DEFAULT_MODEL
    system, user = call["messages"]
    assert "=== AVAILABLE MENUS ===" in system["content"]
    assert "- Favorite restaurants: Peppanizze" in system["content"]
    assert user == {"role": "user", "content": "something cheesy?"}


def test_model_comes_from_environment(monkeypatch):
    monkeypatch.setenv("LLM_MODEL", "llama3:8b")
    completions = install(monkeypatch, FakeCompletions(content="ok"))
    get_ai_response("hi")
    assert completions.calls[0]["model"] == "llama3:8b"


@pytest.mark.parametrize("content", [None, "", "   "])
def test_empty_content_is_an_error(monkeypatch, content):
    install(monkeypatch, FakeCompletions(content=content))
    with pytest.raises(LLMError):
        get_ai_response("hi")


def test_sdk_failure_is_wrapped(monkeypatch):
    install(monkeypatch, FakeCompletions(exc=OpenAIError("connection refused")))
    with pytest.raises(LLMError, match="connection refused"):
        get_ai_response("hi")


def test_realtime_suggestion_uses_page_prompt(monkeypatch):
    completions = install(monkeypatch, FakeCompletions(content="Grab a combo!"))
    result = generate_realtime_suggestion({"currentPage": "cart", "cartItems": ["CHEEZY 7 PIZZA", "COLD COFFEE"]})
    assert result == "Grab a combo!"
    user = completions.calls[0]["messages"][1]["content"]
    assert user.startswith("Customer has 2 items in cart.")
    assert "- Cart items: CHEEZY 7 PIZZA, COLD COFFEE" in completions.calls[0]["messages"][0]["content"]
