"""Helpers for turning an event name and optional scope into a registry key."""

from __future__ import annotations


def is_blank(value: str | None) -> bool:
    """Return True when *value* is None or contains only whitespace."""
    return value is None or (isinstance(value, str) and value.strip() == "")


def effective_event_name(event: str, scope: str | None = None) -> str:
    """Return the registry key for *event* narrowed by *scope*.

    The scope is appended without a separator, so ``("ab", "c")`` and
    ``("a", "bc")`` resolve to the same key.
    """
    if is_blank(scope):
        return event
    return f"{event}{scope}"
