"""In-process element tree used for headless rendering and tests."""

from __future__ import annotations

import html
import logging
from typing import Any

from .base import DOMEvent, resolve_listener

LOGGER = logging.getLogger(__name__)


class Element:
    """Minimal displayable node: classes, content, children and listeners."""

    def __init__(
        self,
        tag: str = "div",
        *,
        id: str | None = None,
        classes: str | list[str] | None = None,
    ) -> None:
        self.tag = tag
        self.id = id
        if isinstance(classes, str):
            classes = classes.split()
        self.classes: list[str] = list(classes or [])
        self.content = ""
        self.parent: Element | None = None
        self.children: list[Element] = []
        self.listeners: dict[str, list[tuple[Any, Any]]] = {}

    def __repr__(self) -> str:
        return f"Element(tag={self.tag!r}, id={self.id!r}, classes={self.classes!r})"

    @property
    def class_name(self) -> str:
        return " ".join(self.classes)

    def append(self, child: Element) -> Element:
        """Attach ``child`` as the last child, moving it from its old parent."""
        if child.parent is not None:
            child.parent.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def remove(self, child: Element) -> None:
        if child in self.children:
            self.children.remove(child)
            child.parent = None

    def dispatch(self, type: str, detail: Any = None) -> DOMEvent:
        """Deliver an event to this element and bubble it to its ancestors."""
        event = DOMEvent(type=type, target=self, detail=detail)
        node: Element | None = self
        while node is not None and not event.propagation_stopped:
            event.current_target = node
            for _, handler in list(node.listeners.get(type, ())):
                handler(event)
            node = node.parent
        return event


class MemoryAdapter:
    """``DOMAdapter`` backed by :class:`Element` instances."""

    def __init__(self, tag: str = "div") -> None:
        self.tag = tag

    def create_element(self) -> Element:
        return Element(self.tag)

    def element_id(self, element: Element) -> str | None:
        return element.id or None

    def bind(self, element: Element, type: str, listener: Any) -> None:
        handler = resolve_listener(listener)
        bucket = element.listeners.setdefault(type, [])
        if any(item is listener for item, _ in bucket):
            return
        bucket.append((listener, handler))
        LOGGER.debug("Bound %s listener on %r", type, element)

    def unbind(self, element: Element, type: str, listener: Any) -> None:
        bucket = element.listeners.get(type)
        if not bucket:
            return
        for index, (item, _) in enumerate(bucket):
            if item is listener:
                del bucket[index]
                break
        if not bucket:
            del element.listeners[type]

    def has_flag(self, element: Element, name: str) -> bool:
        return name in element.classes

    def toggle_flag(self, element: Element, name: str, force: bool | None = None) -> bool:
        present = name in element.classes
        enable = (not present) if force is None else bool(force)
        if enable and not present:
            element.classes.append(name)
        elif not enable and present:
            element.classes.remove(name)
        return enable

    def set_content(self, element: Element, content: Any, as_text: bool = False) -> None:
        text = "" if content is None else str(content)
        element.content = html.escape(text) if as_text else text

    def detach(self, element: Element) -> None:
        if element.parent is not None:
            element.parent.remove(element)
