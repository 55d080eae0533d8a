"""
Helper functions package.

This package contains the text, matching and geometry helpers used by the
phrase location engine.
"""
from highlight_backend.app.utils.helpers.text_utils import TextUtils
from highlight_backend.app.utils.helpers.fuzzy_matcher import FuzzyMatcher
from highlight_backend.app.utils.helpers.rect_utils import RectUtils

# Export classes and functions
__all__ = [
    "TextUtils",
    "FuzzyMatcher",
    "RectUtils",
]
