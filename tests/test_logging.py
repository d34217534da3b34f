"""Tests for logging bootstrap behavior."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
import unittest

import structlog

from tessera.logging_utils import configure_logging
from tessera.store import PropertyStore


class ConfigureLoggingTests(unittest.TestCase):
    """Validate configure_logging() handler setup behavior."""

    def setUp(self) -> None:
        # Preserve root logger state so tests do not pollute each other.
        root = logging.getLogger()
        self._original_level = root.level
        self._original_handlers = list(root.handlers)
        self._original_textual_level = logging.getLogger("textual").level

    def tearDown(self) -> None:
        root = logging.getLogger()
        for handler in root.handlers:
            if handler not in self._original_handlers:
                handler.close()
        root.setLevel(self._original_level)
        root.handlers.clear()
        root.handlers.extend(self._original_handlers)
        logging.getLogger("textual").setLevel(self._original_textual_level)

    def _stream_handlers(self) -> list[logging.Handler]:
        return [
            h
            for h in logging.getLogger().handlers
            if isinstance(h, logging.StreamHandler)
            and not isinstance(h, logging.FileHandler)
        ]

    def test_structured_uses_structlog_formatter(self) -> None:
        configure_logging({"level": "DEBUG", "structured": True})
        formatters = [h.formatter for h in logging.getLogger().handlers]
        self.assertTrue(
            any(isinstance(f, structlog.stdlib.ProcessorFormatter) for f in formatters)
        )

    def test_plain_formatter_when_not_structured(self) -> None:
        configure_logging({"level": "DEBUG", "structured": False})
        formatters = [h.formatter for h in logging.getLogger().handlers]
        self.assertFalse(
            any(isinstance(f, structlog.stdlib.ProcessorFormatter) for f in formatters)
        )

    def test_sets_root_level(self) -> None:
        configure_logging({"level": "DEBUG", "structured": False})
        self.assertEqual(logging.getLogger().level, logging.DEBUG)

    def test_file_handler_created(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "nested" / "tessera.log"
            configure_logging(
                {
                    "level": "DEBUG",
                    "structured": False,
                    "log_to_file": True,
                    "log_file_path": str(log_path),
                }
            )
            file_handlers = [
                h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)
            ]
            self.assertEqual(len(file_handlers), 1)
            self.assertTrue(log_path.exists())
            file_handlers[0].close()

    def test_stderr_handler_filters_to_tessera(self) -> None:
        configure_logging({"level": "DEBUG", "structured": False})
        handler = self._stream_handlers()[0]

        def record(name: str) -> logging.LogRecord:
            return logging.LogRecord(
                name=name, level=logging.WARNING, pathname="", lineno=0,
                msg="x", args=(), exc_info=None,
            )

        self.assertTrue(handler.filter(record("tessera.view")))
        self.assertFalse(handler.filter(record("textual")))


    def test_third_party_logger_levels_are_left_alone(self) -> None:
        textual_logger = logging.getLogger("textual")
        textual_logger.setLevel(logging.NOTSET)
        configure_logging({"level": "DEBUG", "structured": False})
        self.assertEqual(textual_logger.level, logging.NOTSET)


class DispatchLoggingTests(unittest.TestCase):
    """Mutations are traceable at DEBUG level."""

    def test_store_change_logged(self) -> None:
        store = PropertyStore(id="prefs")
        with self.assertLogs("tessera.store", level="DEBUG") as logs:
            store.set("theme", "dark")
        self.assertTrue(any("theme" in line and "prefs" in line for line in logs.output))

    def test_subscription_logged(self) -> None:
        store = PropertyStore()
        with self.assertLogs("tessera.events.bus", level="DEBUG") as logs:
            store.subscribe("change", lambda *args: None)
        self.assertTrue(any("change" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()
