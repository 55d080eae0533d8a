"""
Utilities package for the phrase highlight service.

This package contains utility functions and helpers used across the
phrase location engine and its service layers.
"""

from highlight_backend.app.utils.logging.logger import default_logger

# Export the default logger
__all__ = ["default_logger"]
