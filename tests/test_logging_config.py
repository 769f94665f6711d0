# tests/test_logging_config.py

"""Tests for the per-run logging configuration."""

import logging
import unittest
from pathlib import Path
from unittest.mock import patch

from storefront_search.config.logging_config import (
    file_log_level,
    setup_logging,
)
from storefront_search.config.settings import Settings


def _project_logger() -> logging.Logger:
    return logging.getLogger("storefront_search")


def _file_handlers() -> list[logging.FileHandler]:
    return [
        h for h in _project_logger().handlers
        if isinstance(h, logging.FileHandler)
    ]


class TestLoggingConfig(unittest.TestCase):
    """Verify logging setup behaviour."""

    def setUp(self) -> None:
        """Start every test without project handlers."""
        self._detach_handlers()

    def tearDown(self) -> None:
        self._detach_handlers()

    @staticmethod
    def _detach_handlers() -> None:
        for handler in list(_project_logger().handlers):
            handler.close()
            _project_logger().removeHandler(handler)

    def test_setup_creates_log_file(self) -> None:
        """setup_logging returns a path that exists inside logs/."""
        log_path = setup_logging()
        self.assertTrue(log_path.exists())
        self.assertEqual(log_path.parent.name, "logs")
        self.assertRegex(log_path.name, r"^run_\d{8}_\d{6}\.log$")

    def test_file_and_console_handlers(self) -> None:
        """A DEBUG file handler and a WARNING console handler."""
        setup_logging()
        files = _file_handlers()
        consoles = [
            h for h in _project_logger().handlers
            if isinstance(h, logging.StreamHandler)
            and not isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(len(files), 1)
        self.assertEqual(files[0].level, logging.DEBUG)
        self.assertEqual(len(consoles), 1)
        self.assertEqual(consoles[0].level, logging.WARNING)

    def test_file_level_from_settings(self) -> None:
        """STOREFRONT_LOG_LEVEL only affects the file handler."""
        with patch.object(Settings, "LOG_LEVEL", "info"):
            setup_logging()
        self.assertEqual(_file_handlers()[0].level, logging.INFO)
        self.assertEqual(_project_logger().level, logging.DEBUG)

    def test_unknown_level_name_falls_back_to_debug(self) -> None:
        self.assertEqual(file_log_level("WARNING"), logging.WARNING)
        self.assertEqual(file_log_level("loud"), logging.DEBUG)
        self.assertEqual(file_log_level("basic_format"), logging.DEBUG)

    def test_repeated_call_returns_open_log_file(self) -> None:
        """The second call reports the file the first call opened."""
        first = setup_logging()
        second = setup_logging()
        self.assertEqual(second, first)
        self.assertTrue(second.exists())
        self.assertEqual(Path(_file_handlers()[0].baseFilename), second)

    def test_repeated_calls_no_duplicate_handlers(self) -> None:
        """Calling setup_logging twice does not duplicate handlers."""
        setup_logging()
        count_before = len(_project_logger().handlers)
        setup_logging()
        self.assertEqual(len(_project_logger().handlers), count_before)

    def test_child_loggers_reach_file(self) -> None:
        """Records from storefront_search.* land in the run log."""
        log_path = setup_logging()
        logging.getLogger("storefront_search.search").info("run-log-line")
        for handler in _file_handlers():
            handler.flush()
        self.assertIn("run-log-line", log_path.read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()
