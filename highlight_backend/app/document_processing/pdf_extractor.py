"""
PDF Text Layer Extraction Module

This module provides PDFTextExtractor, which reads the text layer of a PDF with
PyMuPDF and converts it into the PageContent / TextFragment models consumed by
the phrase location engine. It supports:
- Flexible inputs (file paths, PyMuPDF Document objects, bytes, or file-like objects)
- Conversion of PyMuPDF's top-down word boxes into bottom-up fragment origins
- Advisory page text built with the same separator policy as the engine
- Detailed error logging through SecurityAwareErrorHandler
"""

import io
import time
from typing import List, Union, BinaryIO

import pymupdf

from highlight_backend.app.domain.exceptions import DocumentExtractionError
from highlight_backend.app.domain.interfaces import DocumentExtractor
from highlight_backend.app.domain.models import PageContent, TextFragment
from highlight_backend.app.utils.helpers.text_utils import TextUtils
from highlight_backend.app.utils.logging.logger import log_info
from highlight_backend.app.utils.logging.secure_logging import log_sensitive_operation
from highlight_backend.app.utils.system_utils.error_handling import SecurityAwareErrorHandler


class PDFTextExtractor(DocumentExtractor):
    """
    PDFTextExtractor extracts positioned text fragments from PDF documents.

    Each PyMuPDF word becomes one TextFragment. PyMuPDF reports boxes with the
    vertical axis growing downward from the page top; fragments use the PDF
    convention instead, so the origin is the word's bottom edge measured upward
    from the page bottom (page height minus y1).
    """

    def __init__(self, pdf_input: Union[str, pymupdf.Document, bytes, BinaryIO]):
        """
        Initialize a PDFTextExtractor instance using a flexible PDF input.

        Args:
            pdf_input: PDF input which can be:
                - A file path to a PDF (str)
                - A PyMuPDF Document instance
                - PDF content as bytes
                - A file-like object with PDF content

        Raises:
            DocumentExtractionError: If the input cannot be opened as a PDF.
        """
        self.file_path = None
        self.pdf_document = None

        try:
            if isinstance(pdf_input, str):
                self.pdf_document = pymupdf.open(pdf_input)
                self.file_path = pdf_input
            elif isinstance(pdf_input, pymupdf.Document):
                self.pdf_document = pdf_input
                self.file_path = "memory_document"
            elif isinstance(pdf_input, bytes):
                self.pdf_document = pymupdf.open(stream=io.BytesIO(pdf_input), filetype="pdf")
                self.file_path = "memory_buffer"
            elif hasattr(pdf_input, "read") and callable(pdf_input.read):
                self.pdf_document = pymupdf.open(stream=pdf_input.read(), filetype="pdf")
                self.file_path = getattr(pdf_input, "name", "file_object")
            else:
                raise ValueError(
                    "Invalid input! Expected a file path, PyMuPDF Document, bytes, or file-like object."
                )
        except Exception as e:
            # Log the error using the SecurityAwareErrorHandler.
            SecurityAwareErrorHandler.log_processing_error(
                e,
                "pdf_extractor_init",
                pdf_input if isinstance(pdf_input, str) else "memory_buffer",
            )
            raise DocumentExtractionError("Could not open PDF document") from e

    def __enter__(self) -> "PDFTextExtractor":
        return self

    def __exit__(self, exc_type, exc_value, tb) -> None:
        self.close()

    def extract_pages(self) -> List[PageContent]:
        """
        Extract the text layer of every page.

        Returns:
            List[PageContent]: One entry per page, in page order; pages without
            text have no fragments and an empty full text.

        Raises:
            DocumentExtractionError: If the document is closed or a page cannot be read.
        """
        if self.pdf_document is None:
            raise DocumentExtractionError("PDF document is closed")

        start_time = time.time()
        pages: List[PageContent] = []
        empty_pages = 0

        try:
            for page_num in range(len(self.pdf_document)):
                page_content = self._process_page(self.pdf_document[page_num], page_num)
                if not page_content.fragments:
                    empty_pages += 1
                pages.append(page_content)
        except Exception as e:
            SecurityAwareErrorHandler.log_processing_error(e, "pdf_text_extraction", self.file_path)
            raise DocumentExtractionError("Could not read the PDF text layer") from e

        if empty_pages:
            log_info(f"[OK] {empty_pages} pages have no text layer")

        log_sensitive_operation(
            "PDF Text Extraction",
            len(pages),
            time.time() - start_time,
            empty_pages=empty_pages,
            source=self.file_path,
        )
        return pages

    @staticmethod
    def _process_page(page: pymupdf.Page, page_num: int) -> PageContent:
        """
        Convert one page into PageContent.

        Args:
            page: A PyMuPDF Page object.
            page_num: Zero-based index of the page.

        Returns:
            PageContent: The page's fragments and advisory full text.
        """
        fragments = PDFTextExtractor._extract_page_fragments(page)
        full_text, _ = TextUtils.build_fragment_index(fragments)
        return PageContent(page_index=page_num, full_text=full_text, fragments=fragments)

    @staticmethod
    def _extract_page_fragments(page: pymupdf.Page) -> List[TextFragment]:
        """
        Extract words and their positions from a page as bottom-up fragments.

        Args:
            page: A PyMuPDF Page object.

        Returns:
            List[TextFragment]: Fragments in PyMuPDF extraction order.
        """
        page_height = page.rect.height
        fragments = []
        # get_text("words") yields (x0, y0, x1, y1, text, block_no, line_no, word_no).
        for x0, y0, x1, y1, text, *_ in page.get_text("words"):
            if not text.strip():
                continue
            fragments.append(
                TextFragment(
                    content=text,
                    origin_x=x0,
                    origin_y=page_height - y1,
                    width=x1 - x0,
                    height=(y1 - y0) or None,
                )
            )
        return fragments

    def close(self) -> None:
        """
        Close the PDF document and release associated resources.
        """
        try:
            if self.pdf_document is not None:
                self.pdf_document.close()
                self.pdf_document = None
        except Exception as e:
            SecurityAwareErrorHandler.log_processing_error(e, "pdf_document_close", self.file_path)
