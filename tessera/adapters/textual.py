"""Textual-backed display adapter.

Views drive Textual widgets: state flags become CSS classes, content goes
through ``Static.update`` and forwarded input events are Textual events.
"""

from __future__ import annotations

import logging
from typing import Any

from rich.text import Text
from textual import events
from textual.widget import Widget
from textual.widgets import Static

from ..exceptions import AdapterError
from .base import DOMEvent, resolve_listener

LOGGER = logging.getLogger(__name__)


def event_type_name(event: events.Event) -> str:
    """Return the DOM-style type of a Textual event (``Click`` -> ``click``)."""
    handler_name = getattr(event, "handler_name", "") or ""
    if handler_name.startswith("on_"):
        return handler_name[3:]
    return type(event).__name__.lower()


class TextualEvent(DOMEvent):
    """``DOMEvent`` wrapping a native Textual event."""

    def prevent_default(self) -> None:
        super().prevent_default()
        self.detail.prevent_default()

    def stop_propagation(self) -> None:
        super().stop_propagation()
        self.detail.stop()


class ViewHost(Static):
    """Static widget that forwards its events to bound listeners."""

    DEFAULT_CSS = """
    ViewHost {
        height: auto;
    }
    ViewHost.state-hidden {
        display: none;
    }
    ViewHost.state-disabled {
        opacity: 50%;
    }
    """

    def __init__(self, content: Any = "", **kwargs: Any) -> None:
        super().__init__(content, **kwargs)
        self.forwarded: dict[str, list[tuple[Any, Any]]] = {}

    async def on_event(self, event: events.Event) -> None:
        await super().on_event(event)
        type_name = event_type_name(event)
        for _, handler in list(self.forwarded.get(type_name, ())):
            handler(TextualEvent(type=type_name, target=self, current_target=self, detail=event))


class TextualAdapter:
    """``DOMAdapter`` whose elements are Textual widgets."""

    def create_element(self) -> ViewHost:
        return ViewHost()

    def element_id(self, element: Widget) -> str | None:
        return element.id

    def bind(self, element: Widget, type: str, listener: Any) -> None:
        handler = resolve_listener(listener)
        if not isinstance(element, ViewHost):
            raise AdapterError(
                f"Cannot forward {type!r} events from {type_name(element)}; use ViewHost."
            )
        bucket = element.forwarded.setdefault(type, [])
        if any(item is listener for item, _ in bucket):
            return
        bucket.append((listener, handler))
        LOGGER.debug("Forwarding %s events from %s", type, element)

    def unbind(self, element: Widget, type: str, listener: Any) -> None:
        if not isinstance(element, ViewHost):
            return
        bucket = element.forwarded.get(type)
        if not bucket:
            return
        element.forwarded[type] = [item for item in bucket if item[0] is not listener]
        if not element.forwarded[type]:
            del element.forwarded[type]

    def has_flag(self, element: Widget, name: str) -> bool:
        return element.has_class(name)

    def toggle_flag(self, element: Widget, name: str, force: bool | None = None) -> bool:
        enable = (not element.has_class(name)) if force is None else bool(force)
        element.set_class(enable, name)
        return enable

    def set_content(self, element: Widget, content: Any, as_text: bool = False) -> None:
        if not isinstance(element, Static):
            raise AdapterError(f"Cannot set content on {type_name(element)}.")
        text = "" if content is None else str(content)
        element.update(Text(text) if as_text else text)

    def detach(self, element: Widget) -> None:
        if element.parent is not None:
            element.remove()


def type_name(element: Any) -> str:
    return type(element).__name__
