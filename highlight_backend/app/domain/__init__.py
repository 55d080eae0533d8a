"""
Domain package for the phrase highlight system.

This package defines the core domain models, interfaces and exceptions of
the phrase location engine.
"""

from highlight_backend.app.domain.exceptions import DocumentExtractionError, HighlightError
from highlight_backend.app.domain.interfaces import DocumentExtractor, PhraseLocator
from highlight_backend.app.domain.models import (
    HighlightResult,
    MatchingPolicy,
    PageContent,
    PhraseQuery,
    Rectangle,
    Reference,
    TextFragment,
)

# Export classes
__all__ = [
    "DocumentExtractionError",
    "DocumentExtractor",
    "HighlightError",
    "HighlightResult",
    "MatchingPolicy",
    "PageContent",
    "PhraseLocator",
    "PhraseQuery",
    "Rectangle",
    "Reference",
    "TextFragment",
]
