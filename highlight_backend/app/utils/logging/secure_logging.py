"""
Secure logging utilities.

This module provides logging helpers that keep document content and phrases
out of the logs while still providing useful diagnostic data.
"""
import json

from highlight_backend.app.utils.constant.constant import LOGGED_PHRASE_PREVIEW
from highlight_backend.app.utils.logging.logger import log_info


def phrase_preview(phrase: str, limit: int = LOGGED_PHRASE_PREVIEW) -> str:
    """
    Shorten a phrase for log lines.

    Parameters:
        phrase (str): The phrase to shorten.
        limit (int): Maximum number of characters kept.

    Returns:
        str: The phrase with whitespace collapsed, cut to `limit` characters with a trailing ellipsis.
    """
    flattened = " ".join((phrase or "").split())
    if len(flattened) <= limit:
        return flattened
    return flattened[:limit] + "..."


def log_sensitive_operation(operation_name: str, match_count: int, processing_time: float, **metadata) -> None:
    """
    Log an operation over document content without including the content itself.

    Parameters:
        operation_name (str): Name of the operation being performed.
        match_count (int): Number of rectangles or pages produced.
        processing_time (float): Time taken for processing.
        **metadata: Additional metadata to log; content-bearing keys are dropped.
    """
    log_info(f"[SENSITIVE] {operation_name}: produced {match_count} results in {processing_time:.2f}s")
    if metadata:
        # Keys that may carry document text.
        sensitive_keys = ["text", "content", "full_text", "fragments", "phrase", "pages"]
        sanitized_metadata = {k: v for k, v in metadata.items() if k not in sensitive_keys}
        log_info(f"[METADATA] {json.dumps(sanitized_metadata, default=str)}")
