"""
Per-user browsing context used to personalise chat answers.

``SessionStore`` is an ordinary object: the app creates one and passes it
where it is needed. Idle-session eviction is a pluggable policy and the
clock is injectable so both can be exercised in tests.
"""

from __future__ import annotations

import threading
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional, Protocol

MAX_PAGE_VISITS: int = 20
MAX_SEARCH_QUERIES: int = 50
MAX_CART_HISTORY: int = 100
ANONYMOUS_USER: str = "anonymous"

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class UserSession:
    user_id: str
    created_at: datetime
    last_activity_at: datetime
    page_visits: List[Dict[str, Any]] = field(default_factory=list)
    viewed_restaurants: List[str] = field(default_factory=list)
    cart_history: List[Dict[str, Any]] = field(default_factory=list)
    search_queries: List[Dict[str, Any]] = field(default_factory=list)
    clicked_dishes: List[str] = field(default_factory=list)
    favorite_categories: List[str] = field(default_factory=list)
    order_history: List[Dict[str, Any]] = field(default_factory=list)
    current_cart: List[Dict[str, Any]] = field(default_factory=list)


class EvictionPolicy(Protocol):
    def should_evict(self, session: UserSession, now: datetime) -> bool:
        ...


@dataclass(frozen=True)
class IdleTimeoutPolicy:
    max_idle: timedelta = timedelta(minutes=1440)

    def should_evict(self, session: UserSession, now: datetime) -> bool:
        return now - session.last_activity_at > self.max_idle


def _add_unique(values: List[str], value: str) -> None:
    if value not in values:
        values.append(value)


def _trim(values: List[Any], limit: int) -> None:
    if len(values) > limit:
        del values[: len(values) - limit]


class SessionStore:
    def __init__(self, policy: Optional[EvictionPolicy] = None, clock: Clock = _utcnow) -> None:
        self._sessions: Dict[str, UserSession] = {}
        self._lock = threading.Lock()
        self.policy: EvictionPolicy = policy or IdleTimeoutPolicy()
        self.clock = clock

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._sessions

    def get(self, user_id: Optional[str]) -> UserSession:
        """Return the user's session, creating it on first sight, and mark it active."""
        uid = user_id or ANONYMOUS_USER
        now = self.clock()
        with self._lock:
            session = self._sessions.get(uid)
            if session is None:
                session = UserSession(user_id=uid, created_at=now, last_activity_at=now)
                self._sessions[uid] = session
            session.last_activity_at = now
            return session

    def update(self, user_id: Optional[str], /, **patch: Any) -> UserSession:
        session = self.get(user_id)
        for key, value in patch.items():
            if not hasattr(session, key) or key in ("user_id", "created_at"):
                raise AttributeError(f"UserSession has no writable field {key!r}")
            setattr(session, key, value)
        return session

    def track_page_visit(self, user_id: Optional[str], page_name: str, metadata: Optional[Dict[str, Any]] = None) -> UserSession:
        session = self.get(user_id)
        session.page_visits.append({"page": page_name, "timestamp": self.clock(), "metadata": metadata or {}})
        _trim(session.page_visits, MAX_PAGE_VISITS)
        return session

    def track_restaurant_view(self, user_id: Optional[str], restaurant: str) -> UserSession:
        session = self.get(user_id)
        _add_unique(session.viewed_restaurants, restaurant)
        return session

    def track_dish_click(self, user_id: Optional[str], dish_name: str, restaurant: Optional[str]) -> UserSession:
        session = self.get(user_id)
        _add_unique(session.clicked_dishes, f"{dish_name}-{restaurant}")
        return session

    def track_category(self, user_id: Optional[str], category: str) -> UserSession:
        session = self.get(user_id)
        _add_unique(session.favorite_categories, category)
        return session

    def track_search_query(self, user_id: Optional[str], query: str) -> UserSession:
        session = self.get(user_id)
        session.search_queries.append({"query": query, "timestamp": self.clock()})
        _trim(session.search_queries, MAX_SEARCH_QUERIES)
        return session

    def update_cart(self, user_id: Optional[str], cart_items: List[Dict[str, Any]]) -> UserSession:
        session = self.get(user_id)
        session.current_cart = list(cart_items)
        session.cart_history.append({"timestamp": self.clock(), "items": list(cart_items)})
        _trim(session.cart_history, MAX_CART_HISTORY)
        for item in cart_items:
            if item.get("restaurant"):
                _add_unique(session.viewed_restaurants, item["restaurant"])
            if item.get("category"):
                _add_unique(session.favorite_categories, item["category"])
        return session

    def add_order(self, user_id: Optional[str], order: Dict[str, Any]) -> UserSession:
        session = self.get(user_id)
        session.order_history.append({**order, "timestamp": self.clock()})
        return session

    def get_user_context(self, user_id: Optional[str]) -> Dict[str, Any]:
        session = self.get(user_id)
        now = self.clock()
        return {
            "userId": session.user_id,
            "recentPages": [v["page"] for v in session.page_visits[-5:]],
            "viewedRestaurants": session.viewed_restaurants[-3:],
            "cartItems": ", ".join(f"{i.get('name')} x{i.get('qty', 1)}" for i in session.current_cart),
            "currentCart": session.current_cart,
            "favoriteCategories": session.favorite_categories[-3:],
            "recentSearches": [s["query"] for s in session.search_queries[-5:]],
            "totalOrders": len(session.order_history),
            "pastOrderValue": sum(len(o.get("items") or []) for o in session.order_history[-3:]),
            "isReturningUser": len(session.order_history) > 0,
            "sessionDuration": (now - session.created_at).total_seconds() / 60,
        }

    def trending_insights(self) -> Dict[str, List[str]]:
        restaurants: Counter = Counter()
        dishes: Counter = Counter()
        categories: Counter = Counter()
        with self._lock:
            sessions = list(self._sessions.values())
        for s in sessions:
            restaurants.update(s.viewed_restaurants)
            dishes.update(s.clicked_dishes)
            categories.update(s.favorite_categories)
        return {
            "trendingRestaurants": [name for name, _ in restaurants.most_common(3)],
            "trendingDishes": [name for name, _ in dishes.most_common(5)],
            "trendingCategories": [name for name, _ in categories.most_common(3)],
        }

    def clear_old_sessions(self) -> int:
        """Drop every session the eviction policy rejects; return how many were removed."""
        now = self.clock()
        with self._lock:
            stale = [uid for uid, s in self._sessions.items() if self.policy.should_evict(s, now)]
            for uid in stale:
                del self._sessions[uid]
        return len(stale)
