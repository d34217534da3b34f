"""Publish/subscribe primitives shared by stores and views."""

from .bus import WILDCARD, EventBus, Subscription, SubscriptionToken
from .source import EventSource

__all__ = ["EventBus", "EventSource", "Subscription", "SubscriptionToken", "WILDCARD"]
