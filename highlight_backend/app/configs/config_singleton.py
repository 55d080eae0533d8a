"""
Process-wide configuration for the phrase highlight service.

Values come from the environment (a local .env file is read first) and are
kept in one dictionary, so modules read settings through get_config without
importing the server or service layers. Matching-policy overrides are optional:
when a variable is unset or not a number, get_config falls back to the default
the caller passes, which is the MatchingPolicy default.
"""

import os
from typing import Any, Callable, Dict, Optional, Tuple

from dotenv import load_dotenv

load_dotenv(verbose=True)

_config: Dict[str, Any] = {}


def _parse_float(value: Optional[str]) -> Optional[float]:
    """Parse a numeric environment value, ignoring empty or malformed input."""
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _parse_bool(value: Optional[str]) -> bool:
    return (value or "false").strip().lower() == "true"


# Config key -> (environment variable, default text, parser).
_ENV_SETTINGS: Dict[str, Tuple[str, Optional[str], Callable[[Optional[str]], Any]]] = {
    # Server
    "api_host": ("API_HOST", "0.0.0.0", str),
    "api_port": ("API_PORT", "8000", int),
    "debug": ("DEBUG", "false", _parse_bool),
    # Presentation
    "highlight_color": ("HIGHLIGHT_COLOR", "#fef08a", str),
    # Matching policy overrides
    "fuzzy_match_ratio": ("FUZZY_MATCH_RATIO", None, _parse_float),
    "same_line_tolerance": ("SAME_LINE_TOLERANCE", None, _parse_float),
    "adjacency_gap": ("ADJACENCY_GAP", None, _parse_float),
    "default_fragment_height": ("DEFAULT_FRAGMENT_HEIGHT", None, _parse_float),
}


def _load_config_from_env() -> None:
    """Read every known setting from the environment into the config dictionary."""
    for key, (env_name, default, parse) in _ENV_SETTINGS.items():
        _config[key] = parse(os.getenv(env_name, default))


def get_config(key: str, default: Any = None) -> Any:
    """
    Return a configuration value.

    Args:
        key: Setting name, e.g. "api_port" or "fuzzy_match_ratio".
        default: Returned when the setting is unknown or has no value.

    Returns:
        The configured value, or default.
    """
    if not _config:
        _load_config_from_env()
    value = _config.get(key)
    return default if value is None else value


def set_config(key: str, value: Any) -> None:
    """Override a setting for the rest of the process."""
    _config[key] = value


_load_config_from_env()
