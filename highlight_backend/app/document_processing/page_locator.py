"""
PageLocator Module

This module provides the PageLocator class, which picks the page of a document
that most likely holds a phrase. Pages are visited in a hint-biased order and
each page's advisory full text is checked with the FuzzyMatcher; the first page
that matches wins. The locator does not look for a better match afterwards and
does not disambiguate between several qualifying pages beyond the caller's hint.
"""

from typing import Iterator, List, Optional, Sequence

from highlight_backend.app.domain.models import MatchingPolicy, PageContent, PhraseQuery
from highlight_backend.app.utils.helpers.fuzzy_matcher import FuzzyMatcher
from highlight_backend.app.utils.logging.logger import log_debug


class PageLocator:
    """
    Hint-biased, first-match page selection.

    Args:
        policy: Thresholds and stop words; defaults to MatchingPolicy().
        matcher: Matcher used for the page-level check; built from policy when omitted.
    """

    def __init__(self, policy: Optional[MatchingPolicy] = None, matcher: Optional[FuzzyMatcher] = None):
        self.policy = policy or MatchingPolicy()
        self.matcher = matcher or FuzzyMatcher(self.policy)

    @staticmethod
    def search_order(page_count: int, page_hint: Optional[int] = None) -> List[int]:
        """
        Build the page visit order.

        With a hint, the hinted page comes first followed by every other page in
        ascending order; without one, pages are visited in ascending order. A hint
        outside the document is kept first and skipped by the locator like any
        other missing page.

        Args:
            page_count: Number of page slots in the document.
            page_hint: Zero-based page to visit first.

        Returns:
            List[int]: Page indices in visit order.
        """
        if page_hint is None:
            return list(range(page_count))
        return [page_hint] + [index for index in range(page_count) if index != page_hint]

    def candidate_pages(
        self,
        query: PhraseQuery,
        pages: Sequence[Optional[PageContent]],
    ) -> Iterator[PageContent]:
        """
        Yield, in visit order, every page whose full text fuzzily matches the phrase.

        Missing pages (None entries or indices outside the sequence) are skipped.
        """
        for index in self.search_order(len(pages), query.page_hint):
            if index < 0 or index >= len(pages):
                continue
            page = pages[index]
            if page is None:
                continue
            log_debug(f"[OK] Checking page {index + 1}")
            if self.matcher.matches(page.full_text, query.text):
                yield page

    def locate(
        self,
        query: PhraseQuery,
        pages: Sequence[Optional[PageContent]],
    ) -> Optional[PageContent]:
        """
        Return the first page that plausibly contains the phrase.

        Args:
            query: The phrase query.
            pages: Page contents addressed by position; missing pages may be None.

        Returns:
            Optional[PageContent]: The selected page, or None when no page matches.
        """
        return next(self.candidate_pages(query, pages), None)
