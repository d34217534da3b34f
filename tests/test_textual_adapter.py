"""Tests for the Textual display adapter."""

from __future__ import annotations

import unittest

try:
    from textual.app import App, ComposeResult
    from textual.widgets import Label

    from tessera.adapters.textual import TextualAdapter, ViewHost, event_type_name
except ModuleNotFoundError:
    App = None  # type: ignore[assignment,misc]
    TextualAdapter = None  # type: ignore[assignment,misc]
    ViewHost = None  # type: ignore[assignment,misc]

from tessera.adapters.base import DOMEvent
from tessera.exceptions import AdapterError, InvalidListenerError
from tessera.view import StatefulView


if App is not None:

    class HostApp(App[None]):
        """Minimal app mounting a single view host."""

        def compose(self) -> ComposeResult:
            yield ViewHost("initial", id="host")
            yield Label("plain", id="plain")


@unittest.skipIf(App is None, "textual is not installed")
class TextualAdapterTests(unittest.IsolatedAsyncioTestCase):
    """Validate flags, content, forwarding and detach on real widgets."""

    async def test_state_flags_become_css_classes(self) -> None:
        app = HostApp()
        async with app.run_test() as pilot:
            host = app.query_one("#host", ViewHost)
            view = StatefulView(TextualAdapter(), element=host)
            self.assertEqual(view.id, "host")

            view.set_state("active", True)
            await pilot.pause()
            self.assertTrue(host.has_class("state-active"))
            self.assertTrue(view.has_state("active"))

            view.set_state("active")
            self.assertFalse(host.has_class("state-active"))

    async def test_set_content_markup_and_text(self) -> None:
        app = HostApp()
        async with app.run_test() as pilot:
            host = app.query_one("#host", ViewHost)
            view = StatefulView(TextualAdapter(), element=host)

            view.set_content("[b]bold[/b]")
            await pilot.pause()
            self.assertIn("bold", str(host.render()))

            view.set_content("[b]literal[/b]", True)
            await pilot.pause()
            self.assertIn("[b]literal[/b]", str(host.render()))

    async def test_click_is_forwarded_to_view(self) -> None:
        app = HostApp()
        async with app.run_test() as pilot:
            host = app.query_one("#host", ViewHost)
            view = StatefulView(TextualAdapter(), element=host, dom_events="click")
            received: list[DOMEvent] = []
            view.subscribe("click", received.append)

            await pilot.click("#host")
            await pilot.pause()

            self.assertEqual([event.type for event in received], ["click"])
            self.assertIs(received[0].target, host)

    async def test_destroy_removes_widget(self) -> None:
        app = HostApp()
        async with app.run_test() as pilot:
            host = app.query_one("#host", ViewHost)
            view = StatefulView(TextualAdapter(), element=host, dom_events="click")
            view.destroy()
            await pilot.pause()
            self.assertEqual(len(app.query("#host")), 0)
            self.assertEqual(host.forwarded, {})

    async def test_forwarding_requires_view_host(self) -> None:
        app = HostApp()
        async with app.run_test():
            label = app.query_one("#plain", Label)
            adapter = TextualAdapter()
            with self.assertRaises(AdapterError):
                adapter.bind(label, "click", lambda event: None)
            with self.assertRaises(InvalidListenerError):
                adapter.bind(label, "click", object())


@unittest.skipIf(App is None, "textual is not installed")
class EventTypeNameTests(unittest.TestCase):
    """Validate DOM-style naming of Textual events."""

    def test_handler_name_is_stripped(self) -> None:
        from textual import events

        self.assertEqual(event_type_name(events.Focus()), "focus")
        self.assertEqual(event_type_name(events.Blur()), "blur")


if __name__ == "__main__":
    unittest.main()
