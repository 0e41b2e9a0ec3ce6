from datetime import datetime, timedelta, timezone

import pytest

from bluebliss_server.models.user_context import (
    MAX_PAGE_VISITS,
    MAX_SEARCH_QUERIES,
    IdleTimeoutPolicy,
    SessionStore,
)


class FakeClock:
    def __init__(self):
        self.now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return SessionStore(clock=clock)


def test_get_creates_once(store):
    first = store.get("u1")
    assert store.get("u1") is first
    assert len(store) == 1
    assert store.get(None).user_id == "anonymous"


def test_update_patches_fields(store):
    store.update("u1", favorite_categories=["WRAPS"])
    assert store.get("u1").favorite_categories == ["WRAPS"]
    with pytest.raises(AttributeError):
        store.update("u1", nickname="x")
    with pytest.raises(AttributeError):
        store.update("u1", user_id="u2")
    with pytest.raises(AttributeError):
        store.update("u1", created_at=None)
    assert store.get("u1").user_id == "u1"


def test_history_caps(store):
    for i in range(MAX_PAGE_VISITS + 5):
        store.track_page_visit("u1", f"page{i}")
    for i in range(MAX_SEARCH_QUERIES + 1):
        store.track_search_query("u1", f"q{i}")
    session = store.get("u1")
    assert len(session.page_visits) == MAX_PAGE_VISITS
    assert session.page_visits[0]["page"] == "page5"
    assert len(session.search_queries) == MAX_SEARCH_QUERIES
    assert session.search_queries[-1]["query"] == f"q{MAX_SEARCH_QUERIES}"


def test_user_context_summary(store, clock):
    for page in ["home", "menu", "cart"]:
        store.track_page_visit("u1", page)
    store.update_cart("u1", [
        {"name": "CHEEZY 7 PIZZA", "qty": 2, "restaurant": "Peppanizze", "category": "EXOTIC VEG PIZZAS"},
        {"name": "COLD COFFEE", "restaurant": "Peppanizze"},
    ])
    store.add_order("u1", {"items": [1, 2, 3]})
    clock.advance(minutes=30)

    ctx = store.get_user_context("u1")
    assert ctx["recentPages"] == ["home", "menu", "cart"]
    assert ctx["cartItems"] == "CHEEZY 7 PIZZA x2, COLD COFFEE x1"
    assert ctx["viewedRestaurants"] == ["Peppanizze"]
    assert ctx["favoriteCategories"] == ["EXOTIC VEG PIZZAS"]
    assert ctx["isReturningUser"] is True
    assert ctx["totalOrders"] == 1
    assert ctx["pastOrderValue"] == 3
    assert ctx["sessionDuration"] == pytest.approx(30.0)


def test_new_user_is_not_returning(store):
    ctx = store.get_user_context("fresh")
    assert ctx["isReturningUser"] is False
    assert ctx["cartItems"] == ""


def test_trending_insights(store):
    store.track_restaurant_view("a", "Shimmers")
    store.track_restaurant_view("b", "Shimmers")
    store.track_restaurant_view("b", "Urbanwrap")
    store.track_dish_click("a", "OREO MILKSHAKE", "Urbanwrap")
    store.track_dish_click("b", "OREO MILKSHAKE", "Urbanwrap")
    store.track_dish_click("b", "CHOCO LAVA", "Urbanwrap")
    insights = store.trending_insights()
    assert insights["trendingRestaurants"] == ["Shimmers", "Urbanwrap"]
    assert insights["trendingDishes"][0] == "OREO MILKSHAKE-Urbanwrap"


def test_idle_sessions_are_evicted(store, clock):
    store.get("old")
    clock.advance(minutes=1000)
    store.get("recent")
    clock.advance(minutes=441)
    assert store.clear_old_sessions() == 1
    assert "old" not in store
    assert "recent" in store


def test_custom_eviction_policy(clock):
    class EvictEverything:
        def should_evict(self, session, now):
            return True

    store = SessionStore(policy=EvictEverything(), clock=clock)
    store.get("a")
    store.get("b")
    assert store.clear_old_sessions() == 2
    assert len(store) == 0


def test_idle_timeout_policy_boundary(clock):
    store = SessionStore(policy=IdleTimeoutPolicy(max_idle=timedelta(minutes=10)), clock=clock)
    store.get("a")
    clock.advance(minutes=10)
    assert store.clear_old_sessions() == 0
    clock.advance(seconds=1)
    assert store.clear_old_sessions() == 1
