"""Top-level package for tessera: event bus, observable store and stateful views."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .events import EventBus, Subscription, SubscriptionToken
from .exceptions import (
    AdapterError,
    ConfigValidationError,
    InvalidListenerError,
    TesseraError,
)
from .store import PropertyStore, StoreVariant
from .utils import IdGenerator
from .view import StatefulView

if TYPE_CHECKING:
    from .adapters import DOMEvent, Element, MemoryAdapter, TextualAdapter, ViewHost
    from .config import load_config
    from .framework import Framework
    from .logging_utils import configure_logging

__all__ = [
    "AdapterError",
    "ConfigValidationError",
    "DOMEvent",
    "Element",
    "EventBus",
    "Framework",
    "IdGenerator",
    "InvalidListenerError",
    "MemoryAdapter",
    "PropertyStore",
    "StatefulView",
    "StoreVariant",
    "Subscription",
    "SubscriptionToken",
    "TesseraError",
    "TextualAdapter",
    "ViewHost",
    "configure_logging",
    "load_config",
]


def __getattr__(name: str) -> Any:
    """Lazily import symbols to keep optional UI dependencies optional at import time."""
    if name == "Framework":
        from .framework import Framework

        return Framework
    if name == "load_config":
        from .config import load_config

        return load_config
    if name == "configure_logging":
        from .logging_utils import configure_logging

        return configure_logging
    if name in {"DOMEvent", "Element", "MemoryAdapter", "TextualAdapter", "ViewHost"}:
        from . import adapters

        return getattr(adapters, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
