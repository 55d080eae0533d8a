"""
Core domain interfaces for the phrase highlight system.
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from highlight_backend.app.domain.models import HighlightResult, PageContent, PhraseQuery


class DocumentExtractor(ABC):
    """Interface for extracting positioned text from paginated documents."""

    @abstractmethod
    def extract_pages(self) -> List[PageContent]:
        """
        Extract the text layer of every page.

        Returns:
            List[PageContent]: One entry per page, in page order. Pages without text
            are returned with an empty fragment list.
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the document and free resources."""
        pass


class PhraseLocator(ABC):
    """Interface for engines that map a phrase query onto highlight rectangles."""

    @abstractmethod
    def find_phrase(
        self,
        query: PhraseQuery,
        pages: Sequence[Optional[PageContent]],
    ) -> Optional[HighlightResult]:
        """
        Locate a phrase in a document.

        Args:
            query: The phrase, identifier and optional page hint.
            pages: Page contents addressed by position; missing pages may be None.

        Returns:
            Optional[HighlightResult]: The highlight, or None when no page matches.
        """
        pass
