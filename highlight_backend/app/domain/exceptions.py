"""
Domain exceptions raised by the service layers around the phrase location engine.

The engine itself never raises for an absent phrase; "not found" is an ordinary
result. These exceptions cover failures of the collaborators around it.
"""


class HighlightError(Exception):
    """Base class for phrase highlight failures."""


class DocumentExtractionError(HighlightError):
    """Raised when a document cannot be opened or its text layer cannot be read."""
