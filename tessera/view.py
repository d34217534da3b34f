"""Stateful wrapper around one displayable element."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

from .adapters.base import DOMAdapter, DOMEvent
from .events import EventBus, EventSource
from .utils import IdGenerator, default_id_generator, resolve_names

LOGGER = logging.getLogger(__name__)

_MISSING: Any = object()


class StatefulView(EventSource):
    """Drive one element's state flags, content and forwarded input events.

    State flags are realized on the element as ``<state_prefix><name>``.
    Changes publish ``stateChanged`` with ``(name, enabled)`` and
    ``stateChanged:<name>`` with ``(enabled,)``; content replacement publishes
    ``contentChanged`` with ``(content, as_text)``. Bound input event types are
    republished under their own name with the adapter event as payload.

    After :meth:`destroy` the view is inert: mutators do nothing and boolean
    queries return False.

    Without ``id_generator`` ids come from the process-wide
    ``default_id_generator`` shared with every other directly built view and
    store; a ``Framework`` injects its own generator instead.
    """

    id_prefix = "vid"

    def __init__(
        self,
        adapter: DOMAdapter,
        *,
        element: Any = None,
        content_element: Any = None,
        state_prefix: str = "state-",
        dom_events: Any = None,
        id: str | None = None,
        id_generator: IdGenerator | None = None,
        id_prefix: str | None = None,
    ) -> None:
        self._adapter = adapter
        self._element = element if element is not None else adapter.create_element()
        self._content_element = content_element if content_element is not None else self._element
        self._state_prefix = state_prefix
        self._dom_events: dict[str, bool] = {}
        self._destroying = False
        ids = id_generator or default_id_generator
        self._id = id or adapter.element_id(self._element) or ids.next_id(id_prefix or self.id_prefix)
        self.events = EventBus()

        if dom_events:
            self.bind_dom_events(dom_events)

    @property
    def id(self) -> str:
        return self._id

    @property
    def is_destroyed(self) -> bool:
        return self._element is None

    def __repr__(self) -> str:
        status = "destroyed" if self.is_destroyed else "active"
        return f"{type(self).__name__}(id={self._id!r}, {status})"

    def get_element(self) -> Any:
        return self._element

    def destroy(self) -> StatefulView:
        """Tear the view down once; later calls are no-ops.

        ``destroy`` is published before anything is released, so subscribers
        still see the attached element.
        Teardown completes even when a ``destroy`` subscriber raises; the
        error then propagates to the caller.
        """
        element = self._element
        if element is None or self._destroying:
            return self

        self._destroying = True
        try:
            self.events.publish("destroy")
        finally:
            self.unbind_dom_events()
            self._adapter.detach(element)
            self.events.unsubscribe()
            self._element = self._content_element = None
        LOGGER.debug("Destroyed view %s", self._id)
        return self

    def has_state(self, name: str) -> bool:
        if self._element is None or not name:
            return False
        return self._adapter.has_flag(self._element, self._state_prefix + name)

    def set_state(self, name: str | Mapping[str, Any], enable: Any = _MISSING) -> StatefulView:
        """Set, clear or toggle state flags.

        Without ``enable`` the flag is toggled. A mapping applies each entry
        as its own call.
        """
        if isinstance(name, Mapping):
            for key, value in name.items():
                self.set_state(key, value)
            return self

        element = self._element
        if element is None or not name:
            return self

        current = self.has_state(name)
        target = not current if enable is _MISSING else bool(enable)
        if current == target:
            return self

        self._adapter.toggle_flag(element, self._state_prefix + name, target)
        LOGGER.debug("View %s state %s -> %s", self._id, name, target)
        self.events.emit("stateChanged", name, target)
        self.events.emit(f"stateChanged:{name}", target)
        return self

    def is_visible(self) -> bool:
        return self._element is not None and not self.has_state("hidden")

    def is_enabled(self) -> bool:
        return self._element is not None and not self.has_state("disabled")

    def set_visible(self, visible: Any = _MISSING) -> StatefulView:
        if visible is _MISSING:
            return self.set_state("hidden")
        return self.set_state("hidden", not visible)

    def set_enabled(self, enabled: Any = _MISSING) -> StatefulView:
        if enabled is _MISSING:
            return self.set_state("disabled")
        return self.set_state("disabled", not enabled)

    def set_content(self, content: Any, as_text: bool = False) -> StatefulView:
        """Replace the rendered content, as markup or as escaped text."""
        target = self._content_element
        if target is None:
            return self
        self._adapter.set_content(target, content, as_text)
        self.events.publish("contentChanged", content, as_text)
        return self

    def handle_event(self, event: DOMEvent) -> None:
        """Adapter callback: republish a bound input event on the view."""
        self.events.emit(event.type, event)

    def bind_dom_events(self, types: Any) -> StatefulView:
        element = self._element
        if element is None:
            return self
        for type_ in resolve_names(types):
            if self._dom_events.get(type_):
                continue
            self._adapter.bind(element, type_, self)
            self._dom_events[type_] = True
        return self

    def unbind_dom_events(self, types: Any = None) -> StatefulView:
        element = self._element
        if element is None:
            return self
        selected = resolve_names(types) if types is not None else list(self._dom_events)
        for type_ in selected:
            if not self._dom_events.pop(type_, False):
                continue
            self._adapter.unbind(element, type_, self)
        return self
