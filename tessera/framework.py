"""Entry point wiring one adapter, one id generator and the configuration."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

from .adapters.base import DOMAdapter
from .adapters.memory import MemoryAdapter
from .config import DEFAULT_CONFIG, _deep_merge, validate_config
from .events import EventBus
from .store import PropertyStore, StoreVariant
from .utils import IdGenerator
from .view import StatefulView

LOGGER = logging.getLogger(__name__)


class Framework:
    """Factory for buses, stores and views sharing one id space."""

    def __init__(
        self,
        adapter: DOMAdapter | None = None,
        config: Mapping[str, Any] | None = None,
        id_generator: IdGenerator | None = None,
    ) -> None:
        self.adapter: DOMAdapter = adapter or MemoryAdapter()
        self.config = validate_config(_deep_merge(DEFAULT_CONFIG, dict(config or {})))
        self.ids = id_generator or IdGenerator()

    def create_bus(self) -> EventBus:
        return EventBus()

    def create_store(
        self,
        props: Mapping[str, Any] | None = None,
        *,
        variant: StoreVariant | None = None,
        **kwargs: Any,
    ) -> PropertyStore:
        kwargs.setdefault("id_prefix", self.config["stores"]["id_prefix"])
        store = PropertyStore(props, variant=variant, id_generator=self.ids, **kwargs)
        LOGGER.debug("Created store %s", store.id)
        return store

    def create_view(self, **kwargs: Any) -> StatefulView:
        kwargs.setdefault("state_prefix", self.config["views"]["state_prefix"])
        kwargs.setdefault("id_prefix", self.config["views"]["id_prefix"])
        view = StatefulView(self.adapter, id_generator=self.ids, **kwargs)
        LOGGER.debug("Created view %s", view.id)
        return view
