"""
Constants for the phrase highlight service.

Grouped by concern:
1. Service identity and network settings.
2. PDF upload limits and signatures.
3. Logging, including what may be written about phrases and errors.
4. Error reporting: patterns treated as sensitive and client-facing messages.
"""

import os

# Service name reported by /status and written to the detailed error log.
SERVICE_NAME = os.environ.get("SERVICE_NAME", "phrase_highlight")

# Origins allowed by CORS, comma separated. Localhost entries are dropped in production.
ALLOWED_ORIGINS = os.environ.get(
    "ALLOWED_ORIGINS",
    "http://localhost:3000,http://localhost:8000,http://localhost:5173",
).split(",")

# Largest PDF accepted by /highlight/pdf.
MAX_PDF_SIZE_BYTES = 10 * 1024 * 1024  # 10 MB
PDF_MIME_TYPE = "application/pdf"
# Declared content types accepted for PDF uploads; browsers sometimes send octet-stream.
ALLOWED_MIME_TYPES = {
    "pdf": {PDF_MIME_TYPE, "application/x-pdf", "application/octet-stream"}
}
# Magic bytes and their offset for each accepted file type.
FILE_SIGNATURES = {"pdf": [(b"%PDF", 0)]}

# Directory that receives the rotating application log.
LOG_DIR = os.environ.get("LOG_DIR", "app/logs/app_log")
# JSON-lines file with one record per reported failure.
ERROR_LOG_PATH = os.environ.get(
    "ERROR_LOG_PATH", "app/logs/error_logs/detailed_errors.log"
)
# Plain-text replacements for emoji markers in log lines.
ERROR_WORD = "[ERROR]"
WARNING_WORD = "[WARNING]"
# Phrases are logged as an excerpt of at most this many characters.
LOGGED_PHRASE_PREVIEW = 30
# Sanitized error messages are cut to this many characters.
MAX_LOGGED_ERROR_LENGTH = 200

# Shown instead of the type message when an error looks sensitive.
SAFE_MESSAGE = "Error details have been redacted for security."
EMAIL_PATTERN = r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b"
# An error message containing any of these is never shown or logged verbatim.
SENSITIVE_KEYWORDS = [
    "password",
    "secret",
    "token",
    "credential",
    "auth",
    "api_key",
    "bearer",
    "privkey",
]
# Further patterns that mark an error message as sensitive.
SENSITIVE_PATTERNS = [
    EMAIL_PATTERN,
    r"Bearer\s+[A-Za-z0-9._-]+",
    r"traceback",
]
URL_PATTERNS = [
    r"https?://[^\s/$.?#].[^\s]*",
    r"file://[^\s]*",
    r"s3://[^\s]*",
]

# Client-facing message per exception type name; "Exception" is the fallback.
ERROR_TYPE_MESSAGES = {
    "ValueError": "Invalid value provided",
    "TypeError": "Incorrect data type",
    "KeyError": "Required key not found",
    "IndexError": "Page index out of range",
    "FileNotFoundError": "Document not found",
    "TimeoutError": "Operation timed out",
    "ValidationError": "Invalid request payload",
    "HTTPException": "Request could not be processed",
    "DocumentExtractionError": "Could not read text from the document",
    "HighlightError": "Could not compute highlight",
    "MemoryError": "Document too large to process",
    "RuntimeError": "Runtime execution error",
    "UnicodeDecodeError": "Character encoding error",
    "Exception": "An error occurred",
}
