"""
Error handling for the phrase highlight service.

Failures in the HTTP, service and extraction layers are reported through
SecurityAwareErrorHandler. Each failure gets an error id and a trace id, a
one-line sanitized log entry, and a JSON record in the detailed error log.
Clients only ever receive a generic message for the exception type plus the
error id, so document text, file paths and credentials never reach a response.
"""

import json
import os
import re
import time
import traceback
import uuid
from typing import Dict, Any, Optional

from highlight_backend.app.domain.exceptions import DocumentExtractionError
from highlight_backend.app.utils.constant.constant import (
    EMAIL_PATTERN,
    ERROR_LOG_PATH,
    ERROR_TYPE_MESSAGES,
    MAX_LOGGED_ERROR_LENGTH,
    SAFE_MESSAGE,
    SENSITIVE_KEYWORDS,
    SENSITIVE_PATTERNS,
    SERVICE_NAME,
    URL_PATTERNS,
)
from highlight_backend.app.utils.logging.logger import log_error, log_warning

# Absolute paths with at least two segments, e.g. /home/user/report.pdf.
_PATH_RE = re.compile(r'(?:\/[\w\-. ]+)+\/[\w\-. ]+')


class SecurityAwareErrorHandler:
    """
    Turns exceptions into sanitized log lines and client-safe error bodies.
    """

    @staticmethod
    def _new_trace_id() -> str:
        return f"trace_{int(time.time())}_{uuid.uuid4().hex[:8]}"

    @staticmethod
    def _status_code_for(e: Exception) -> int:
        """
        Pick the HTTP status code reported for an exception.

        Exceptions that carry their own integer `status_code` (such as
        HTTPException) keep it. Bad input maps to 400, unreadable documents to
        422, timeouts to 504 and anything else to 500.
        """
        status_code = getattr(e, "status_code", None)
        if isinstance(status_code, int):
            return status_code
        if isinstance(e, (ValueError, TypeError, KeyError)):
            return 400
        if isinstance(e, DocumentExtractionError):
            return 422
        if isinstance(e, TimeoutError):
            return 504
        return 500

    @staticmethod
    def _record_error(
            e: Exception,
            operation_type: str,
            location: str,
            context: Dict[str, Any],
    ) -> str:
        """Log the summary line and the detailed record of one failure; returns its error id."""
        error_id = str(uuid.uuid4())
        log_error(f"[ERROR] {operation_type} failed on {location} "
                  f"(ID: {error_id}, Trace: {context.get('trace_id')}): "
                  f"{SecurityAwareErrorHandler._sanitize_error_message(str(e))}")
        SecurityAwareErrorHandler._log_detailed_error(
            error_id, type(e).__name__, str(e), operation_type, traceback.format_exc(), context
        )
        return error_id

    @staticmethod
    def handle_safe_error(
            e: Exception,
            operation_type: str,
            endpoint: Optional[str] = None,
            resource_id: str = "",
            additional_info: Optional[Dict[str, Any]] = None,
            trace_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Record a request failure and build the error body returned to the client.

        Args:
            e (Exception): The exception raised while serving the request.
            operation_type (str): Operation label, e.g. "api_highlight_pdf".
            endpoint (Optional[str]): URL of the failing request.
            resource_id (str): Highlight identifier or file the request was about.
            additional_info (Optional[Dict[str, Any]]): Extra fields for the body; core keys win.
            trace_id (Optional[str]): Trace id to reuse; a new one is generated when omitted.

        Returns:
            Dict[str, Any]: Body with status, error, error_type, status_code, error_id,
            trace_id and timestamp.
        """
        trace_id = trace_id or SecurityAwareErrorHandler._new_trace_id()
        error_id = SecurityAwareErrorHandler._record_error(
            e, operation_type, resource_id or endpoint or "request",
            {"endpoint": endpoint, "resource_id": resource_id, "trace_id": trace_id},
        )

        error_type = type(e).__name__
        if SecurityAwareErrorHandler.is_error_sensitive(e):
            message = SAFE_MESSAGE
        else:
            message = ERROR_TYPE_MESSAGES.get(error_type, ERROR_TYPE_MESSAGES["Exception"])

        body = {
            "status": "error",
            "error": f"{message}. Reference ID: {error_id}",
            "error_type": error_type,
            "status_code": SecurityAwareErrorHandler._status_code_for(e),
            "error_id": error_id,
            "trace_id": trace_id,
            "timestamp": time.time(),
        }
        for key, value in (additional_info or {}).items():
            body.setdefault(key, value)
        return body

    @staticmethod
    def log_processing_error(
            e: Exception,
            operation_type: str,
            resource_id: str = "",
            trace_id: Optional[str] = None
    ) -> str:
        """
        Record a failure outside a request, e.g. while opening or reading a PDF.

        Args:
            e (Exception): The exception.
            operation_type (str): Operation label, e.g. "pdf_text_extraction".
            resource_id (str): File path or buffer label of the document involved.
            trace_id (Optional[str]): Trace id to reuse; a new one is generated when omitted.

        Returns:
            str: The trace id, so callers can correlate follow-up log lines.
        """
        trace_id = trace_id or SecurityAwareErrorHandler._new_trace_id()
        SecurityAwareErrorHandler._record_error(
            e, operation_type, resource_id or "document",
            {"resource_id": resource_id, "trace_id": trace_id},
        )
        return trace_id

    @staticmethod
    def _log_detailed_error(
            error_id: str,
            error_type: str,
            error_message: str,
            operation_type: str,
            stack_trace: str,
            additional_info: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Append one JSON line describing a failure to ERROR_LOG_PATH.

        The message is sanitized before it is written; the stack trace is kept
        for maintainers. Failing to write the file only produces a warning.
        """
        record = {
            "error_id": error_id,
            "timestamp": time.time(),
            "error_type": error_type,
            "operation_type": operation_type,
            "sanitized_message": SecurityAwareErrorHandler._sanitize_error_message(error_message),
            "stack_trace": stack_trace,
            "environment": os.environ.get("ENVIRONMENT", "development"),
            "service": SERVICE_NAME,
            "additional_info": additional_info or {},
        }
        try:
            log_dir = os.path.dirname(ERROR_LOG_PATH)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            with open(ERROR_LOG_PATH, "a", encoding="utf-8") as log_file:
                log_file.write(json.dumps(record, default=str) + "\n")
        except OSError as write_error:
            log_warning(f"[WARNING] Could not write detailed error log: {write_error}")

    @staticmethod
    def _sanitize_error_message(message: str) -> str:
        """
        Strip secrets, paths, URLs and e-mail addresses from an error message.

        Messages naming a sensitive keyword are replaced entirely. Otherwise paths
        keep only their base name, URLs and e-mail addresses are masked, and the
        result is cut to MAX_LOGGED_ERROR_LENGTH characters, since long messages
        tend to quote document text.
        """
        if not message:
            return "Error details not available"
        lowered = message.lower()
        if any(keyword in lowered for keyword in SENSITIVE_KEYWORDS):
            return "Error details redacted for security"

        message = _PATH_RE.sub(lambda match: f"[PATH]/{os.path.basename(match.group(0))}", message)
        for pattern in URL_PATTERNS:
            message = re.sub(pattern, '[URL_REDACTED]', message)
        message = re.sub(EMAIL_PATTERN, '[EMAIL]', message)
        if len(message) > MAX_LOGGED_ERROR_LENGTH:
            message = message[:MAX_LOGGED_ERROR_LENGTH] + "..."
        return message

    @staticmethod
    def is_error_sensitive(e: Exception) -> bool:
        """True when the exception message looks like it carries credentials or personal data."""
        message = str(e)
        if any(keyword in message.lower() for keyword in SENSITIVE_KEYWORDS):
            return True
        return any(re.search(pattern, message, re.IGNORECASE) for pattern in SENSITIVE_PATTERNS)
