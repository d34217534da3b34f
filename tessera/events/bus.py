"""Event bus for decoupled component communication.

Usage:
    bus = EventBus()

    # Subscribe to one or several events
    def on_saved(path):
        print(f"Saved: {path}")

    token = bus.subscribe("file.saved file.exported", on_saved)

    # Every event, whatever its name
    bus.subscribe("*", lambda name, *args: print(name, args))

    # Publish events synchronously
    bus.publish("file.saved", "/path/to/file")

    # Remove by token or by (name, handler, context)
    token.cancel()
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
import logging
from typing import Any

from ..utils import resolve_names

LOGGER = logging.getLogger(__name__)

WILDCARD = "*"

_MISSING: Any = object()


@dataclass(eq=False)
class Subscription:
    """One registered handler inside a single event bucket."""

    name: str
    handler: Callable[..., Any]
    context: Any = None
    original: Callable[..., Any] | None = None
    active: bool = True

    def matches(self, handler: Callable[..., Any], context: Any) -> bool:
        if self.context is not context:
            return False
        return self.handler is handler or self.original is handler


@dataclass(eq=False)
class SubscriptionToken:
    """Opaque handle returned by ``subscribe``/``once``.

    Cancelling the token removes exactly the entries created by the call that
    produced it.
    """

    bus: EventBus | None = None
    entries: list[Subscription] = field(default_factory=list)

    def __bool__(self) -> bool:
        return any(entry.active for entry in self.entries)

    def cancel(self) -> None:
        """Remove every still-registered entry of this token."""
        if self.bus is not None:
            self.bus.unsubscribe(self)


class EventBus:
    """Synchronous publish/subscribe dispatcher.

    Handlers registered under an exact name run first, in registration order;
    handlers registered under ``"*"`` run afterwards and receive the event name
    as their first argument. Buckets are snapshotted before dispatch, so
    handlers may subscribe, unsubscribe or publish while being invoked.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Subscription]] = {}

    def subscribe(
        self,
        names: str | Iterable[str] | Mapping[str, Callable[..., Any]],
        handler: Any = None,
        context: Any = None,
    ) -> SubscriptionToken:
        """Subscribe ``handler`` to every resolved event name.

        Args:
            names: Event name, whitespace separated names, a list of names,
                or a mapping of name -> handler.
            handler: Callable to invoke, or the context in mapping form.
            context: Value used to tell registrations of one handler apart.

        Non-callable handlers and empty name lists are ignored and yield an
        empty token.
        """
        if isinstance(names, Mapping):
            return self._batch(self._add, names, handler)
        return self._add(names, handler, context)

    def once(
        self,
        names: str | Iterable[str] | Mapping[str, Callable[..., Any]],
        handler: Any = None,
        context: Any = None,
    ) -> SubscriptionToken:
        """Subscribe ``handler`` so it runs at most once per resolved name.

        The entry is removed before ``handler`` runs, so an event republished
        from inside the handler does not reach it again.
        """
        if isinstance(names, Mapping):
            return self._batch(self._add_once, names, handler)
        return self._add_once(names, handler, context)

    def unsubscribe(
        self,
        names: Any = _MISSING,
        handler: Any = _MISSING,
        context: Any = None,
    ) -> EventBus:
        """Remove subscriptions.

        - no arguments: clear the whole bus
        - a ``SubscriptionToken``: remove the token's entries
        - names only (or a mapping only): drop the entire bucket of each name
        - names and handler: remove the first entry per bucket registered with
          this handler (or wrapped by ``once`` from it) and ``context``
        - a mapping plus a second argument: per-key removal with the second
          argument used as ``context``
        """
        if names is _MISSING:
            for bucket in self._subscribers.values():
                for entry in bucket:
                    entry.active = False
            self._subscribers.clear()
            LOGGER.debug("Cleared all event subscriptions")
            return self
        if isinstance(names, SubscriptionToken):
            for entry in names.entries:
                self._discard(entry)
            return self
        if isinstance(names, Mapping):
            if handler is _MISSING:
                self._drop_buckets(resolve_names(names))
            else:
                for name, item in names.items():
                    self._remove_matching(resolve_names(name), item, handler)
            return self
        if handler is _MISSING:
            self._drop_buckets(resolve_names(names))
            return self
        self._remove_matching(resolve_names(names), handler, context)
        return self

    def publish(self, names: Any, *args: Any) -> EventBus:
        """Publish an event to all subscribers.

        Args:
            names: Event name(s) to publish, or a mapping of name -> payload.
            *args: Positional payload passed to every handler.
        """
        if isinstance(names, Mapping):
            for name, payload in names.items():
                self._dispatch(resolve_names(name), (payload,))
            return self
        self._dispatch(resolve_names(names), args)
        return self

    def emit(self, name: str, *args: Any) -> EventBus:
        """Publish exactly one event name, without splitting it on whitespace.

        Used for derived names such as ``change:<key>`` whose key may itself
        contain spaces.
        """
        if name:
            self._dispatch([name], args)
        return self

    def has_subscribers(self, name: str | None = None) -> bool:
        """Return True when ``name`` (or any event, if omitted) has handlers."""
        if name is None:
            return any(self._subscribers.values())
        return bool(self._subscribers.get(name))

    def subscriber_count(self, name: str) -> int:
        """Return the number of entries in the bucket for ``name``."""
        return len(self._subscribers.get(name, ()))

    def _batch(
        self,
        register: Callable[[Any, Any, Any], SubscriptionToken],
        mapping: Mapping[str, Any],
        context: Any,
    ) -> SubscriptionToken:
        token = SubscriptionToken(self)
        for name, handler in mapping.items():
            token.entries.extend(register(name, handler, context).entries)
        return token

    def _add(
        self,
        names: Any,
        handler: Any,
        context: Any,
        original: Callable[..., Any] | None = None,
    ) -> SubscriptionToken:
        token = SubscriptionToken(self)
        if not callable(handler):
            return token
        for name in resolve_names(names):
            entry = Subscription(name, handler, context, original)
            self._subscribers.setdefault(name, []).append(entry)
            token.entries.append(entry)
            LOGGER.debug("Subscribed to event: %s", name)
        return token

    def _add_once(self, names: Any, handler: Any, context: Any) -> SubscriptionToken:
        token = SubscriptionToken(self)
        if not callable(handler):
            return token
        for name in resolve_names(names):
            token.entries.extend(self._wrap_once(name, handler, context).entries)
        return token

    def _wrap_once(
        self, name: str, handler: Callable[..., Any], context: Any
    ) -> SubscriptionToken:
        entries: list[Subscription] = []

        fired = False

        def once_handler(*args: Any) -> Any:
            nonlocal fired
            # An outer publish may still hold this entry in its snapshot.
            if fired:
                return None
            fired = True
            for entry in entries:
                self._discard(entry)
            return handler(*args)

        token = self._add(name, once_handler, context, original=handler)
        entries.extend(token.entries)
        return token

    def _discard(self, entry: Subscription) -> None:
        if not entry.active:
            return
        entry.active = False
        bucket = self._subscribers.get(entry.name)
        if bucket is None:
            return
        for index, item in enumerate(bucket):
            if item is entry:
                del bucket[index]
                break
        if not bucket:
            del self._subscribers[entry.name]
        LOGGER.debug("Unsubscribed from event: %s", entry.name)

    def _drop_buckets(self, names: list[str]) -> None:
        for name in names:
            bucket = self._subscribers.pop(name, None)
            if bucket is None:
                continue
            for entry in bucket:
                entry.active = False
            LOGGER.debug("Dropped all subscriptions for event: %s", name)

    def _remove_matching(self, names: list[str], handler: Any, context: Any) -> None:
        for name in names:
            for entry in list(self._subscribers.get(name, ())):
                if entry.matches(handler, context):
                    self._discard(entry)
                    break

    def _dispatch(self, names: list[str], args: tuple[Any, ...]) -> None:
        # Every bucket is copied before the first handler runs.
        wildcard = list(self._subscribers.get(WILDCARD, ()))
        plan = [
            (name, [] if name == WILDCARD else list(self._subscribers.get(name, ())))
            for name in names
        ]
        for name, exact in plan:
            for entry in exact:
                entry.handler(*args)
            for entry in wildcard:
                entry.handler(name, *args)
