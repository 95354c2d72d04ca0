"""In-memory subscription registry."""

from __future__ import annotations

from typing import Any, Callable

from scopebus.domain.models import Subscription


class SubscriptionRepository:
    """Dict-backed store of subscriptions, keyed by effective event name.

    Each event name maps to an insertion-ordered dict of callback ->
    Subscription; insertion order is dispatch order.
    """

    def __init__(self) -> None:
        self._store: dict[str, dict[Callable[..., Any], Subscription]] = {}

    def get(self, event_name: str) -> dict[Callable[..., Any], Subscription] | None:
        return self._store.get(event_name)

    def get_or_create(self, event_name: str) -> dict[Callable[..., Any], Subscription]:
        """Return the collection for *event_name*, registering an empty one if unknown."""
        return self._store.setdefault(event_name, {})

    def add(self, event_name: str, subscription: Subscription) -> bool:
        subscriptions = self.get_or_create(event_name)
        if subscription.callback in subscriptions:
            return False
        subscriptions[subscription.callback] = subscription
        return True

    def remove(self, event_name: str, callback: Callable[..., Any]) -> Subscription | None:
        subscriptions = self._store.get(event_name)
        if subscriptions is None:
            return None
        return subscriptions.pop(callback, None)

    def is_current(self, event_name: str, subscription: Subscription) -> bool:
        """True while *subscription* is still the live entry for its callback."""
        subscriptions = self._store.get(event_name)
        if subscriptions is None:
            return False
        return subscriptions.get(subscription.callback) is subscription

    def list_for_event(self, event_name: str) -> list[Subscription]:
        return list(self._store.get(event_name, {}).values())

    def event_names(self) -> list[str]:
        return list(self._store)

    def clear(self) -> None:
        self._store.clear()
