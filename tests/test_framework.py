"""Tests for the framework facade and shared id generation."""

from __future__ import annotations

import threading
import unittest

from tessera.adapters import MemoryAdapter
from tessera.events import EventBus
from tessera.framework import Framework
from tessera.store import StoreVariant
from tessera.utils import IdGenerator


class FrameworkTests(unittest.TestCase):
    """Validate wiring of config, adapter and ids."""

    def test_defaults(self) -> None:
        framework = Framework()
        self.assertIsInstance(framework.adapter, MemoryAdapter)
        self.assertIsInstance(framework.create_bus(), EventBus)
        self.assertEqual(framework.create_store().id, "mid1")
        self.assertEqual(framework.create_view().id, "vid2")

    def test_frameworks_have_independent_id_spaces(self) -> None:
        self.assertEqual(Framework().create_store().id, Framework().create_store().id)

    def test_config_prefixes_are_applied(self) -> None:
        framework = Framework(
            config={"views": {"state_prefix": "is-", "id_prefix": "view-"}, "stores": {"id_prefix": "store-"}}
        )
        view = framework.create_view()
        view.set_state("open", True)
        self.assertEqual(view.id, "view-1")
        self.assertEqual(view.get_element().classes, ["is-open"])
        self.assertEqual(framework.create_store({"a": 1}).id, "store-2")

    def test_explicit_arguments_override_config(self) -> None:
        framework = Framework()
        variant = StoreVariant(name="fixed", defaults=lambda: {"a": 1})
        store = framework.create_store(variant=variant, id="main")
        self.assertEqual(store.id, "main")
        self.assertEqual(store.get(), {"a": 1})
        view = framework.create_view(state_prefix="has-")
        view.set_state("focus", True)
        self.assertEqual(view.get_element().classes, ["has-focus"])


class IdGeneratorTests(unittest.TestCase):
    """Validate counter behavior under threads."""

    def test_prefix_and_sequence(self) -> None:
        ids = IdGenerator(start=9)
        self.assertEqual(ids.next_id("x"), "x10")
        self.assertEqual(ids.next_id(), "11")

    def test_unique_across_threads(self) -> None:
        ids = IdGenerator()
        results: list[str] = []
        lock = threading.Lock()

        def worker() -> None:
            for _ in range(200):
                value = ids.next_id()
                with lock:
                    results.append(value)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertEqual(len(set(results)), 800)


if __name__ == "__main__":
    unittest.main()
