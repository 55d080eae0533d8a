"""Logging setup for the phrase highlight service.

Every module logs through the "phrase_highlight" logger via the helpers below.
Records go to stdout and to a rotating UTF-8 file under LOG_DIR. The helpers
turn emoji markers into plain [ERROR] / [WARNING] text so that every handler
can encode them.
"""

import os
import logging
import sys
from logging.handlers import RotatingFileHandler

from highlight_backend.app.utils.constant.constant import ERROR_WORD, WARNING_WORD, LOG_DIR

os.makedirs(LOG_DIR, exist_ok=True)

# Console plus a rotating file: 10 MB per file, five backups.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[
        logging.StreamHandler(stream=sys.stdout),
        RotatingFileHandler(
            os.path.join(LOG_DIR, "app.log"),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        ),
    ],
)

default_logger = logging.getLogger("phrase_highlight")
default_logger.setLevel(logging.INFO)


def _plain(message: str) -> str:
    return message.replace("❌", ERROR_WORD).replace("⚠️", WARNING_WORD)


def _relabel(message: str, ok_label: str) -> str:
    # "[OK]" prefixes are reused by engine modules; warnings, errors and debug lines carry their own label.
    return _plain(message).replace("[OK]", ok_label)


def log_info(message, *args, **kwargs):
    """Log at INFO level; "[OK]" markers are kept."""
    default_logger.info(_plain(message), *args, **kwargs)


def log_error(message, *args, **kwargs):
    """
    Log at ERROR level.

    Parameters:
        message (str): The message, possibly with %-style placeholders.
        *args: Values for the placeholders.
        **kwargs: Passed to Logger.error (e.g. exc_info).
    """
    default_logger.error(_relabel(message, ERROR_WORD), *args, **kwargs)


def log_warning(message, *args, **kwargs):
    """Log at WARNING level, e.g. for placeholder fallbacks and phrases that were not found."""
    default_logger.warning(_relabel(message, WARNING_WORD), *args, **kwargs)


def log_debug(message, *args, **kwargs):
    """Log at DEBUG level; hidden unless the default logger level is lowered."""
    default_logger.debug(_relabel(message, "[DEBUG]"), *args, **kwargs)


__all__ = ["default_logger", "log_info", "log_error", "log_warning", "log_debug"]
