import os
import unittest
from unittest.mock import patch

from highlight_backend.app.configs import config_singleton
from highlight_backend.app.configs.config_singleton import get_config, set_config, _parse_float


# Tests for the configuration singleton
class TestConfigSingleton(unittest.TestCase):
    """Test cases for get_config, set_config and environment loading."""

    def setUp(self):
        self._saved = dict(config_singleton._config)

    def tearDown(self):
        config_singleton._config.clear()
        config_singleton._config.update(self._saved)

    # unset keys return the default
    def test_get_config_default(self):
        self.assertEqual(get_config("not_a_key", "fallback"), "fallback")

    # None values count as unset
    def test_get_config_none_value(self):
        set_config("adjacency_gap", None)

        self.assertEqual(get_config("adjacency_gap", 10.0), 10.0)

    # set values are returned
    def test_set_config(self):
        set_config("highlight_color", "#000000")

        self.assertEqual(get_config("highlight_color"), "#000000")

    # environment values are parsed on load
    @patch.dict(os.environ, {"API_PORT": "9001", "DEBUG": "True", "FUZZY_MATCH_RATIO": "0.75",
                             "ADJACENCY_GAP": "oops"})
    def test_load_from_env(self):
        config_singleton._config.clear()

        self.assertEqual(get_config("api_port"), 9001)

        self.assertTrue(get_config("debug"))

        self.assertEqual(get_config("fuzzy_match_ratio"), 0.75)

        self.assertEqual(get_config("adjacency_gap", 10.0), 10.0)

    # numeric parsing ignores empty and malformed values
    def test_parse_float(self):
        self.assertEqual(_parse_float("1.5"), 1.5)

        self.assertIsNone(_parse_float(None))

        self.assertIsNone(_parse_float("  "))

        self.assertIsNone(_parse_float("abc"))
