"""Synchronous in-process publish/subscribe bus with scoped event names."""

from __future__ import annotations

import logging
from collections.abc import Hashable, Mapping
from typing import Any, Callable, Union

from pydantic import ValidationError

from scopebus.domain.action import Action
from scopebus.domain.models import (
    DEFAULT_SUBSCRIBE_OPTIONS,
    PublishOptions,
    SubscribeOptions,
    Subscription,
)
from scopebus.repos.memory import SubscriptionRepository
from scopebus.services.naming import effective_event_name

logger = logging.getLogger(__name__)

Subscriber = Callable[[Action], None]
SubscribeOptionsLike = Union[SubscribeOptions, Mapping[str, Any], None]
PublishOptionsLike = Union[PublishOptions, Mapping[str, Any], None]


def _is_subscriber(callback: Any) -> bool:
    return callable(callback) and isinstance(callback, Hashable)


class Publisher:
    """Publish/subscribe bus keyed by event name and optional scope.

    Subscribers are called synchronously in registration order. Rejected
    calls report ``False``; exceptions raised by subscribers propagate out
    of :meth:`publish`.
    """

    def __init__(self, repo: SubscriptionRepository | None = None) -> None:
        self.repo = repo if repo is not None else SubscriptionRepository()

    # ------------------------------------------------------------------
    # Subscribing
    # ------------------------------------------------------------------

    def subscribe(
        self,
        event: str,
        callback: Subscriber,
        options: SubscribeOptionsLike = None,
    ) -> bool:
        """Add *callback* as a subscriber of *event*.

        Returns True when the subscription was added. A callback can only be
        subscribed once per event and scope combination.
        """
        if not _is_subscriber(callback):
            logger.debug("Rejected subscriber %r for '%s': not callable", callback, event)
            return False

        try:
            opts = _subscribe_options(options)
        except ValidationError as exc:
            logger.debug("Rejected subscriber %r for '%s': %s", callback, event, exc)
            return False

        event_name = effective_event_name(event, opts.scope)
        subscription = Subscription(
            callback=callback,
            max_call_count=opts.max_call_count,
            scope=opts.scope,
        )
        if not self.repo.add(event_name, subscription):
            logger.debug("Subscriber %r already subscribed to '%s'", callback, event_name)
            return False

        logger.debug(
            "Subscribed %r to '%s' (max_call_count=%s)",
            callback,
            event_name,
            opts.max_call_count,
        )
        return True

    def once(
        self,
        event: str,
        callback: Subscriber,
        options: SubscribeOptionsLike = None,
    ) -> bool:
        """Subscribe *callback* for the next publication of *event* only."""
        if options is None:
            fields: dict[str, Any] = {}
        elif isinstance(options, SubscribeOptions):
            fields = options.model_dump()
        elif isinstance(options, Mapping):
            fields = dict(options)
        else:
            return self.subscribe(event, callback, options)
        fields["max_call_count"] = 1
        return self.subscribe(event, callback, fields)

    def unsubscribe(
        self,
        event: str,
        callback: Subscriber,
        scope: str | None = None,
    ) -> bool:
        """Remove *callback* from *event*; True when a subscription was removed."""
        if not _is_subscriber(callback):
            return False

        event_name = effective_event_name(event, scope)
        removed = self.repo.remove(event_name, callback)
        if removed is None:
            return False

        logger.debug("Unsubscribed %r from '%s'", callback, event_name)
        return True

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------

    def publish(
        self,
        event: str,
        detail: Any = None,
        options: PublishOptionsLike = None,
    ) -> Action[Any]:
        """Deliver a new Action for *event* to its subscribers and return it."""
        opts = _publish_options(options)
        event_name = effective_event_name(event, opts.scope)
        action: Action[Any] = Action(detail, opts.cancellable)

        # Subscribers added while dispatching are only reached by later publishes.
        pending = self.repo.list_for_event(event_name)
        if not pending:
            logger.debug("Publishing '%s' with no subscribers", event_name)
            return action

        logger.debug("Publishing '%s' to %d subscribers", event_name, len(pending))
        for subscription in pending:
            if not self.repo.is_current(event_name, subscription):
                continue

            # Bookkeeping happens before the call so a raising subscriber
            # has already been counted and, if exhausted, removed.
            subscription.call_count += 1
            if subscription.exhausted:
                self.repo.remove(event_name, subscription.callback)
                logger.debug(
                    "Subscriber %r reached max_call_count for '%s'",
                    subscription.callback,
                    event_name,
                )

            subscription.callback(action)

        return action

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def subscriptions(self, event: str, scope: str | None = None) -> tuple[Subscription, ...]:
        """Current subscriptions for *event* in dispatch order."""
        return tuple(self.repo.list_for_event(effective_event_name(event, scope)))

    def has_subscribers(self, event: str, scope: str | None = None) -> bool:
        return bool(self.repo.list_for_event(effective_event_name(event, scope)))

    def clear(self) -> None:
        """Remove every subscription for every event."""
        self.repo.clear()


def _subscribe_options(options: SubscribeOptionsLike) -> SubscribeOptions:
    if options is None:
        return DEFAULT_SUBSCRIBE_OPTIONS
    if isinstance(options, SubscribeOptions):
        return options
    if isinstance(options, Mapping):
        options = dict(options)
    return SubscribeOptions.model_validate(options)


def _publish_options(options: PublishOptionsLike) -> PublishOptions:
    if options is None:
        return PublishOptions()
    if isinstance(options, PublishOptions):
        return options
    if isinstance(options, Mapping):
        options = dict(options)
    return PublishOptions.model_validate(options)
