"""
Phrase highlight application package.

This package contains the phrase location engine that maps reference phrases
onto highlight rectangles inside extracted PDF text layers, together with the
PDF extraction and HTTP layers built around it.
"""

from highlight_backend.app.utils.logging.logger import default_logger

# Initialize logging
logger = default_logger

# Set version
__version__ = "1.0.0"
