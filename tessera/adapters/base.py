"""Capability interface the views require from a display backend."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from ..exceptions import InvalidListenerError


@dataclass
class DOMEvent:
    """Input event delivered to bound listeners."""

    type: str
    target: Any
    current_target: Any = None
    detail: Any = None
    default_prevented: bool = field(default=False, init=False)
    propagation_stopped: bool = field(default=False, init=False)

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


@runtime_checkable
class DOMAdapter(Protocol):
    """Element primitives a ``StatefulView`` drives."""

    def create_element(self) -> Any: ...

    def element_id(self, element: Any) -> str | None: ...

    def bind(self, element: Any, type: str, listener: Any) -> None: ...

    def unbind(self, element: Any, type: str, listener: Any) -> None: ...

    def has_flag(self, element: Any, name: str) -> bool: ...

    def toggle_flag(self, element: Any, name: str, force: bool | None = None) -> bool: ...

    def set_content(self, element: Any, content: Any, as_text: bool = False) -> None: ...

    def detach(self, element: Any) -> None: ...


def resolve_listener(listener: Any) -> Callable[[DOMEvent], Any]:
    """Return the callable that handles events for ``listener``.

    Plain callables are used as-is; objects must expose a callable
    ``handle_event``. Anything else cannot be wired and is rejected.
    """
    if callable(listener):
        return listener
    handle_event = getattr(listener, "handle_event", None)
    if callable(handle_event):
        return handle_event
    raise InvalidListenerError(f"Invalid listener: {listener!r}")
