"""Delegation of the bus API for objects that own an ``EventBus``."""

from __future__ import annotations

from typing import Any

from .bus import EventBus, SubscriptionToken


class EventSource:
    """Expose the owned ``events`` bus as the object's own pub/sub API."""

    events: EventBus

    def subscribe(self, names: Any, handler: Any = None, context: Any = None) -> SubscriptionToken:
        return self.events.subscribe(names, handler, context)

    def once(self, names: Any, handler: Any = None, context: Any = None) -> SubscriptionToken:
        return self.events.once(names, handler, context)

    def unsubscribe(self, *args: Any) -> Any:
        """Forward to ``EventBus.unsubscribe``; returns ``self`` for chaining."""
        self.events.unsubscribe(*args)
        return self

    def publish(self, names: Any, *args: Any) -> Any:
        self.events.publish(names, *args)
        return self
