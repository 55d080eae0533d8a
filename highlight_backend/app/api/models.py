"""
API models for phrase highlight endpoints.

This module contains Pydantic models for API request and response validation.
"""
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from highlight_backend.app.domain.models import PageContent, PhraseQuery

BLANK_PHRASE_MESSAGE = "Phrase must contain at least one non-whitespace character"


class StatusResponse(BaseModel):
    """Response model for status endpoint."""
    status: str
    service: str
    version: str
    timestamp: float


class LocateRequest(BaseModel):
    """Request model for locating a phrase in already extracted pages."""
    phrase: str = Field(min_length=1)
    identifier: str = Field(min_length=1)
    page_hint: Optional[int] = Field(default=None, ge=0)
    pages: List[Optional[PageContent]]

    @field_validator("phrase")
    @classmethod
    def phrase_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError(BLANK_PHRASE_MESSAGE)
        return value

    def to_query(self) -> PhraseQuery:
        return PhraseQuery(text=self.phrase, identifier=self.identifier, page_hint=self.page_hint)


class NotFoundResponse(BaseModel):
    """Response model returned when no page contains the phrase."""
    status: str = "not_found"
    identifier: str
    phrase: str
    message: str
