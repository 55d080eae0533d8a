"""
This router defines endpoints for locating reference phrases in documents.
It leverages HighlightService and includes:
- Location in pages a client has already extracted (JSON)
- Location in an uploaded PDF (multipart)
- Rate limiting
- Secure error handling

A phrase that cannot be found is answered with 404 and a user-facing message;
any other failure is returned as a sanitized error body.
"""

import asyncio
from typing import Optional

from fastapi import APIRouter, File, UploadFile, Form, Request, HTTPException
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from highlight_backend.app.api.models import BLANK_PHRASE_MESSAGE, LocateRequest, NotFoundResponse
from highlight_backend.app.domain.models import HighlightResult, PhraseQuery
from highlight_backend.app.services.highlight_service import HighlightService
from highlight_backend.app.utils.system_utils.error_handling import SecurityAwareErrorHandler

# Rate limiter by client IP
limiter = Limiter(key_func=get_remote_address)
router = APIRouter()


def _result_response(result: Optional[HighlightResult], query: PhraseQuery) -> JSONResponse:
    """Serialize a highlight, or a 404 body when the phrase was not found."""
    if result is None:
        body = NotFoundResponse(
            identifier=query.identifier,
            phrase=query.text,
            message="The referenced phrase could not be found in this document.",
        )
        return JSONResponse(status_code=404, content=body.model_dump())
    return JSONResponse(status_code=200, content=result.model_dump())


@router.post("/locate")
@limiter.limit("60/minute")
async def highlight_locate(request: Request, payload: LocateRequest) -> JSONResponse:
    """
    Locate a phrase in pages the client has already extracted.

    Args:
        request: The incoming HTTP request.
        payload: Phrase, identifier, optional zero-based page hint and the page contents.

    Returns:
        JSONResponse: The HighlightResult (200), a not-found body (404) or a sanitized error.
    """
    query = payload.to_query()
    try:
        result = await asyncio.to_thread(HighlightService().locate, query, payload.pages)
    except Exception as e:
        err = SecurityAwareErrorHandler.handle_safe_error(
            e, "api_highlight_locate", endpoint=str(request.url), resource_id=query.identifier
        )
        return JSONResponse(content=err, status_code=err.get("status_code", 500))
    return _result_response(result, query)


@router.post("/pdf")
@limiter.limit("15/minute")
async def highlight_pdf(
    request: Request,
    file: UploadFile = File(...),
    phrase: str = Form(...),
    identifier: str = Form(...),
    page_number: Optional[int] = Form(None),
) -> JSONResponse:
    """
    Locate a phrase in an uploaded PDF.

    Args:
        request: The incoming HTTP request.
        file: The PDF to search.
        phrase: The phrase to locate.
        identifier: Caller-assigned highlight identifier.
        page_number: Optional one-based page to search first.

    Returns:
        JSONResponse: The HighlightResult (200), a not-found body (404) or a sanitized error.
    """
    if not phrase.strip():
        return JSONResponse(status_code=422, content={"detail": BLANK_PHRASE_MESSAGE})
    # Page numbers are one-based at the API boundary; the engine works with indices.
    page_hint = page_number - 1 if page_number and page_number > 0 else None
    query = PhraseQuery(text=phrase, identifier=identifier, page_hint=page_hint)
    try:
        result = await HighlightService().locate_in_pdf(file, query)
    except HTTPException as e:
        return JSONResponse(status_code=e.status_code, content=e.detail)
    except Exception as e:
        err = SecurityAwareErrorHandler.handle_safe_error(
            e, "api_highlight_pdf", endpoint=str(request.url), resource_id=identifier
        )
        return JSONResponse(content=err, status_code=err.get("status_code", 500))
    return _result_response(result, query)
