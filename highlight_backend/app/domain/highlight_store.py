"""
Caller-owned highlight state.

HighlightStore keeps the highlights a caller currently displays and which one
is active. The phrase location engine never holds one; callers create and pass
their own instance wherever they coordinate highlights.
"""

from typing import Dict, Optional, Tuple

from highlight_backend.app.domain.models import HighlightResult


class HighlightStore:
    """
    Ordered set of highlight results keyed by identifier, plus the active one.
    """

    def __init__(self):
        # Insertion-ordered mapping from identifier to result.
        self._highlights: Dict[str, HighlightResult] = {}
        self._active_id: Optional[str] = None

    @property
    def highlights(self) -> Tuple[HighlightResult, ...]:
        """Snapshot of the stored highlights in insertion order."""
        return tuple(self._highlights.values())

    @property
    def active_id(self) -> Optional[str]:
        return self._active_id

    @property
    def active(self) -> Optional[HighlightResult]:
        """The active highlight, or None."""
        if self._active_id is None:
            return None
        return self._highlights.get(self._active_id)

    def get(self, identifier: str) -> Optional[HighlightResult]:
        return self._highlights.get(identifier)

    def add(self, highlight: HighlightResult) -> None:
        """
        Store a highlight and make it active.

        A previous highlight with the same identifier is replaced, and the new
        one moves to the end of the insertion order.

        Args:
            highlight: The result to store.
        """
        self._highlights.pop(highlight.identifier, None)
        self._highlights[highlight.identifier] = highlight
        self._active_id = highlight.identifier

    def set_active(self, identifier: Optional[str]) -> None:
        """
        Mark a stored highlight as active, or clear the active highlight with None.

        Raises:
            KeyError: If identifier is not stored.
        """
        if identifier is not None and identifier not in self._highlights:
            raise KeyError(identifier)
        self._active_id = identifier

    def remove(self, identifier: str) -> None:
        """Remove a highlight; clears the active id if it pointed at it."""
        self._highlights.pop(identifier, None)
        if self._active_id == identifier:
            self._active_id = None

    def clear(self) -> None:
        self._highlights.clear()
        self._active_id = None

    def __len__(self) -> int:
        return len(self._highlights)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._highlights
