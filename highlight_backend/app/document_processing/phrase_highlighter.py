"""
PhraseHighlighter Module

This module provides the PhraseHighlighter class, the phrase location engine.
Given a phrase query and the extracted pages of a document it returns the page
and rectangles to highlight:

  1. Page selection: PageLocator visits pages in hint-biased order and picks the
     first page whose advisory full text fuzzily matches the phrase.
  2. Fragment indexing: the page's fragments are concatenated into a buffer with
     a char-to-fragment table (TextUtils.build_fragment_index).
  3. Span resolution: SpanResolver finds the phrase, or an approximate key-term
     cluster, inside that buffer and reports the touched fragments.
  4. Rectangle building: RectUtils turns the fragments into rectangles and merges
     those sharing a line.

When no page matches, the engine returns None. When a page matches but no
rectangles resolve, it returns the policy's placeholder rectangle for that page
with `approximate=True`, so callers can tell it apart from a precise match.

The engine is synchronous and stateless: it performs no I/O, holds no reference
to its inputs or results after returning, and never mutates its inputs.
"""

from typing import List, Optional, Sequence

from highlight_backend.app.document_processing.page_locator import PageLocator
from highlight_backend.app.document_processing.span_resolver import SpanResolver
from highlight_backend.app.domain.interfaces import PhraseLocator
from highlight_backend.app.domain.models import (
    HighlightResult,
    MatchingPolicy,
    PageContent,
    PhraseQuery,
    Rectangle,
    Reference,
)
from highlight_backend.app.utils.helpers.rect_utils import RectUtils
from highlight_backend.app.utils.helpers.text_utils import TextUtils
from highlight_backend.app.utils.logging.logger import log_info, log_warning
from highlight_backend.app.utils.logging.secure_logging import phrase_preview


class PhraseHighlighter(PhraseLocator):
    """
    Phrase location engine.

    Args:
        policy: Thresholds, stop words, placeholder and colour; defaults to MatchingPolicy().
    """

    def __init__(self, policy: Optional[MatchingPolicy] = None):
        self.policy = policy or MatchingPolicy()
        self.page_locator = PageLocator(self.policy)
        self.span_resolver = SpanResolver(self.policy)

    def find_phrase(
        self,
        query: PhraseQuery,
        pages: Sequence[Optional[PageContent]],
    ) -> Optional[HighlightResult]:
        """
        Locate a phrase and compute its highlight rectangles.

        Args:
            query: The phrase, identifier and optional zero-based page hint.
            pages: Page contents addressed by position; missing pages may be None.

        Returns:
            Optional[HighlightResult]: The highlight, or None when no page matches.
        """
        log_info(f"[OK] Searching for phrase '{phrase_preview(query.text)}' (id={query.identifier})")

        page = self.page_locator.locate(query, pages)
        if page is None:
            log_warning(f"[WARNING] Phrase '{phrase_preview(query.text)}' not found in any of {len(pages)} pages")
            return None

        log_info(f"[OK] Found match on page {page.page_index + 1}")
        rects = self.find_text_rects(query.text, page)

        if rects:
            log_info(f"[OK] Found {len(rects)} highlight rectangles")
            return self._result(query, page, rects, approximate=False)

        log_warning(
            f"[WARNING] Exact coordinates not found for '{phrase_preview(query.text)}' "
            f"on page {page.page_index + 1}, using placeholder region"
        )
        return self._result(query, page, [self.policy.placeholder()], approximate=True)

    def find_reference(
        self,
        reference: Reference,
        pages: Sequence[Optional[PageContent]],
    ) -> Optional[HighlightResult]:
        """Locate the phrase of a labelled reference, using the reference id as identifier."""
        return self.find_phrase(reference.to_query(), pages)

    def find_text_rects(self, phrase: str, page: PageContent) -> List[Rectangle]:
        """
        Compute the merged rectangles covering a phrase on one page.

        Args:
            phrase: The phrase to locate.
            page: The page whose fragments are searched.

        Returns:
            List[Rectangle]: Merged rectangles, or an empty list when no span resolves.
        """
        if not page.fragments:
            return []

        text, char_to_fragment = TextUtils.build_fragment_index(page.fragments)
        touched = self.span_resolver.resolve(phrase, text, char_to_fragment)
        if not touched:
            log_warning(f"[WARNING] Could not resolve phrase or its key terms on page {page.page_index + 1}")
            return []

        return RectUtils.build_rects(
            touched,
            page.fragments,
            default_height=self.policy.default_fragment_height,
            same_line_tolerance=self.policy.same_line_tolerance,
            adjacency_gap=self.policy.adjacency_gap,
        )

    def _result(
        self,
        query: PhraseQuery,
        page: PageContent,
        rects: List[Rectangle],
        approximate: bool,
    ) -> HighlightResult:
        return HighlightResult(
            identifier=query.identifier,
            phrase=query.text,
            page_index=page.page_index,
            rects=rects,
            approximate=approximate,
            color=self.policy.highlight_color,
        )
