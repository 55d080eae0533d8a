"""
HighlightService Module

This module provides the HighlightService class which wires the phrase location
engine to its two entry points:
- Pages that a client has already extracted (e.g. from a PDF.js text layer).
- An uploaded PDF, which is validated, read with PDFTextExtractor and searched.

Both return a HighlightResult, or None when no page contains the phrase. A
missing phrase is an expected outcome and is never raised as an error.
"""

import asyncio
import json
import time
from typing import List, Optional, Sequence

from fastapi import UploadFile, HTTPException

from highlight_backend.app.document_processing.pdf_extractor import PDFTextExtractor
from highlight_backend.app.document_processing.phrase_highlighter import PhraseHighlighter
from highlight_backend.app.domain.models import HighlightResult, MatchingPolicy, PageContent, PhraseQuery
from highlight_backend.app.utils.logging.logger import log_info
from highlight_backend.app.utils.logging.secure_logging import log_sensitive_operation
from highlight_backend.app.utils.validation.file_validation import read_and_validate_file


class HighlightService:
    """
    Service that locates phrases in extracted pages or uploaded PDFs.

    Args:
        policy: Matching policy for the engine; defaults to MatchingPolicy.from_config().
    """

    def __init__(self, policy: Optional[MatchingPolicy] = None):
        self.highlighter = PhraseHighlighter(policy or MatchingPolicy.from_config())

    def locate(
        self,
        query: PhraseQuery,
        pages: Sequence[Optional[PageContent]],
    ) -> Optional[HighlightResult]:
        """
        Locate a phrase in already extracted pages.

        Args:
            query: The phrase query.
            pages: Page contents addressed by position.

        Returns:
            Optional[HighlightResult]: The highlight, or None when no page matches.
        """
        start_time = time.time()
        result = self.highlighter.find_phrase(query, pages)
        log_sensitive_operation(
            "Phrase Location",
            len(result.rects) if result else 0,
            time.time() - start_time,
            identifier=query.identifier,
            pages_count=len(pages),
            found=result is not None,
            approximate=bool(result and result.approximate),
        )
        return result

    async def locate_in_pdf(
        self,
        file: UploadFile,
        query: PhraseQuery,
    ) -> Optional[HighlightResult]:
        """
        Validate an uploaded PDF, extract its text layer and locate a phrase in it.

        Args:
            file: The uploaded PDF.
            query: The phrase query, with a zero-based page hint.

        Returns:
            Optional[HighlightResult]: The highlight, or None when no page matches.

        Raises:
            HTTPException: If the upload is not an acceptable PDF.
            DocumentExtractionError: If the PDF text layer cannot be read.
        """
        operation_id = f"pdf_highlight_{time.time()}"
        log_info(f"[OK] Starting PDF phrase location [operation_id={operation_id}]")

        content, error, _ = await read_and_validate_file(file, operation_id)
        if error:
            raise HTTPException(status_code=error.status_code, detail=json.loads(error.body))

        # Extraction and matching run in worker threads.
        pages = await asyncio.to_thread(self._extract_pages, content)
        return await asyncio.to_thread(self.locate, query, pages)

    @staticmethod
    def _extract_pages(content: bytes) -> List[PageContent]:
        with PDFTextExtractor(content) as extractor:
            return extractor.extract_pages()
