import logging
import unittest
from unittest.mock import patch

from highlight_backend.app.utils.logging.logger import (
    default_logger,
    log_info,
    log_error,
    log_warning,
    log_debug,
    ERROR_WORD,
    WARNING_WORD,
)


# Tests for the logging helper functions
class TestLogHelpers(unittest.TestCase):
    """Test cases for log_info, log_error, log_warning and log_debug."""

    # the default logger is named after the service
    def test_default_logger(self):
        self.assertEqual(default_logger.name, "phrase_highlight")

        self.assertEqual(default_logger.level, logging.INFO)

    # info messages keep their markers
    @patch.object(default_logger, "info")
    def test_log_info(self, mock_info):
        log_info("[OK] Found match on page %d", 3)

        mock_info.assert_called_once_with("[OK] Found match on page %d", 3)

    # emoji markers are replaced in error messages
    @patch.object(default_logger, "error")
    def test_log_error_replaces_markers(self, mock_error):
        log_error("❌ extraction failed")

        mock_error.assert_called_once_with(f"{ERROR_WORD} extraction failed")

    # warning messages replace both markers
    @patch.object(default_logger, "warning")
    def test_log_warning_replaces_markers(self, mock_warning):
        log_warning("⚠️ [OK] placeholder used")

        mock_warning.assert_called_once_with(f"{WARNING_WORD} {WARNING_WORD} placeholder used")

    # debug messages go to the debug level
    @patch.object(default_logger, "debug")
    def test_log_debug(self, mock_debug):
        log_debug("[OK] Checking page 1")

        mock_debug.assert_called_once_with("[DEBUG] Checking page 1")

    # debug output is hidden at the default level
    def test_debug_hidden_by_default(self):
        self.assertFalse(default_logger.isEnabledFor(logging.DEBUG))
