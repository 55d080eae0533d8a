"""
Utility functions for validating uploaded PDF files.
This module provides functions to:
  - Validate uploaded PDF files by checking their MIME type, header (magic bytes) and size.
  - Read and validate a single uploaded PDF ensuring that its size does not exceed MAX_PDF_SIZE_BYTES (10 MB).
"""

import re
import time
from typing import Optional, Tuple, Iterable

from fastapi import UploadFile
from fastapi.responses import JSONResponse

from highlight_backend.app.utils.constant.constant import FILE_SIGNATURES, ALLOWED_MIME_TYPES, MAX_PDF_SIZE_BYTES
from highlight_backend.app.utils.logging.logger import log_info, log_warning


def get_file_signature(content: bytes) -> Optional[str]:
    """
    Determine the file type from the content's signature (magic bytes).

    Args:
        content (bytes): The first chunk of file content.

    Returns:
        Optional[str]: The file type if recognized (e.g., 'pdf'), otherwise None.
    """
    if not content or len(content) < 4:
        return None
    for file_type, signatures in FILE_SIGNATURES.items():
        for signature, offset in signatures:
            if content[offset:offset + len(signature)] == signature:
                return file_type
    return None


def validate_mime_type(content_type: Optional[str], allowed_types: Optional[Iterable[str]] = None) -> bool:
    """
    Validate a content type against the allowed PDF MIME types.

    Args:
        content_type (Optional[str]): The declared content type, possibly with parameters.
        allowed_types (Optional[Iterable[str]]): Allowed types; defaults to the PDF types.

    Returns:
        bool: True if the content type is allowed.
    """
    if not content_type:
        return False
    # Normalize the content type by splitting and stripping extra parameters.
    normalized = content_type.split(";")[0].strip().lower()
    allowed = set(allowed_types) if allowed_types is not None else ALLOWED_MIME_TYPES["pdf"]
    return normalized in allowed


def validate_pdf_file(content: bytes) -> bool:
    """
    Validate that a file is a genuine PDF by checking its header.

    Args:
        content (bytes): The file content.

    Returns:
        bool: True if content appears to be a valid PDF, False otherwise.
    """
    if get_file_signature(content) != "pdf":
        return False
    # The header must carry a plausible version, e.g. %PDF-1.7.
    match = re.search(rb"%PDF-(\d+)\.(\d+)", content[:20])
    if not match:
        return False
    major = int(match.group(1))
    return 1 <= major <= 9


async def read_and_validate_file(file: UploadFile, operation_id: str) -> Tuple[
    Optional[bytes], Optional[JSONResponse], float]:
    """
    Reads and validates a single PDF file.

    The function checks:
      - The file's MIME type (only PDFs allowed).
      - That the file size does not exceed MAX_PDF_SIZE_BYTES (10 MB).
      - That the content starts with a valid PDF header.

    Args:
        file (UploadFile): The uploaded file.
        operation_id (str): Operation identifier for logging.

    Returns:
        Tuple[Optional[bytes], Optional[JSONResponse], float]:
          - The file content as bytes if valid; otherwise, None.
          - A JSONResponse error if validation fails; otherwise, None.
          - The elapsed time for reading the file.
    """
    if not validate_mime_type(file.content_type):
        log_warning(f"[SECURITY] Unsupported file type: {file.content_type} [operation_id={operation_id}]")
        return None, JSONResponse(status_code=415, content={"detail": "Only PDF files are supported",
                                                            "operation_id": operation_id}), 0

    file_read_start = time.time()
    content = await file.read()
    file_read_time = time.time() - file_read_start
    log_info(
        f"[SECURITY] File read completed in {file_read_time:.3f}s. "
        f"Size: {len(content) / 1024:.1f}KB [operation_id={operation_id}]")

    if len(content) > MAX_PDF_SIZE_BYTES:
        log_warning(
            f"[SECURITY] PDF size exceeds limit: {len(content) / (1024 * 1024):.2f}MB "
            f"[operation_id={operation_id}]")
        return None, JSONResponse(status_code=413,
                                  content={
                                      "detail": f"PDF file size exceeds maximum allowed "
                                                f"({MAX_PDF_SIZE_BYTES // (1024 * 1024)}MB)",
                                      "operation_id": operation_id}), file_read_time

    if not validate_pdf_file(content):
        log_warning(f"[SECURITY] Invalid PDF content [operation_id={operation_id}]")
        return None, JSONResponse(status_code=415,
                                  content={"detail": "Invalid PDF header", "operation_id": operation_id}), file_read_time

    return content, None, file_read_time
