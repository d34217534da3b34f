"""Display backends implementing the ``DOMAdapter`` capability interface."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .base import DOMAdapter, DOMEvent, resolve_listener
from .memory import Element, MemoryAdapter

if TYPE_CHECKING:
    from .textual import TextualAdapter, ViewHost

__all__ = [
    "DOMAdapter",
    "DOMEvent",
    "Element",
    "MemoryAdapter",
    "TextualAdapter",
    "ViewHost",
    "resolve_listener",
]


def __getattr__(name: str) -> Any:
    """Lazily import the Textual backend so headless use does not load it."""
    if name in {"TextualAdapter", "ViewHost"}:
        from .textual import TextualAdapter, ViewHost

        return {"TextualAdapter": TextualAdapter, "ViewHost": ViewHost}[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
