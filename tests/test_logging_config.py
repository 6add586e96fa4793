# tests/test_logging_config.py

"""Tests for the per-run logging configuration."""

import logging
import unittest

from src.config.logging_config import ROOT_LOGGER_NAME, setup_logging


class TestLoggingConfig(unittest.TestCase):
    """Verify logging setup behaviour."""

    def setUp(self) -> None:
        """Start every test without handlers on the listro logger."""
        logging.getLogger(ROOT_LOGGER_NAME).handlers.clear()

    def _console_handlers(self) -> list[logging.Handler]:
        return [
            h
            for h in logging.getLogger(ROOT_LOGGER_NAME).handlers
            if isinstance(h, logging.StreamHandler)
            and not isinstance(h, logging.FileHandler)
        ]

    def test_setup_creates_log_file(self) -> None:
        """setup_logging returns a path that exists on disk."""
        log_path = setup_logging()
        self.assertTrue(log_path.exists())

    def test_log_file_naming_convention(self) -> None:
        """Log file name matches run_YYYYMMDD_HHMMSS.log."""
        log_path = setup_logging()
        self.assertRegex(log_path.name, r"^run_\d{8}_\d{6}\.log$")
        self.assertEqual(log_path.parent.name, "logs")

    def test_file_handler_level_debug(self) -> None:
        """File handler captures DEBUG records."""
        setup_logging()
        file_handlers = [
            h
            for h in logging.getLogger(ROOT_LOGGER_NAME).handlers
            if isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(len(file_handlers), 1)
        self.assertEqual(file_handlers[0].level, logging.DEBUG)

    def test_console_handler_warning_by_default(self) -> None:
        """Console only shows warnings unless verbose."""
        setup_logging()
        self.assertEqual(self._console_handlers()[0].level, logging.WARNING)

    def test_console_handler_info_when_verbose(self) -> None:
        """Verbose mode lowers the console threshold to INFO."""
        setup_logging(verbose=True)
        self.assertEqual(self._console_handlers()[0].level, logging.INFO)

    def test_repeated_calls_no_duplicate_handlers(self) -> None:
        """Calling setup_logging twice does not duplicate handlers."""
        setup_logging()
        count_before = len(logging.getLogger(ROOT_LOGGER_NAME).handlers)
        setup_logging()
        count_after = len(logging.getLogger(ROOT_LOGGER_NAME).handlers)
        self.assertEqual(count_before, count_after)

    def test_gateway_logger_propagates(self) -> None:
        """Module loggers are children of the listro logger."""
        setup_logging()
        child = logging.getLogger("listro.gateway")
        self.assertTrue(child.propagate)
        self.assertEqual(child.getEffectiveLevel(), logging.DEBUG)


if __name__ == "__main__":
    unittest.main()
