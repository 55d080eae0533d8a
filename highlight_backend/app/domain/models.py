"""
Domain models for phrase location and highlighting.

This module defines the Pydantic models that cross every boundary of the phrase
location engine: the positioned text extracted from a document, the query the
caller asks about, the rectangles the engine produces and the tunable policy
that drives its heuristics. All coordinates use the PDF convention where the
vertical axis grows upward from the bottom edge of the page.

Classes:
    TextFragment: A positioned run of text extracted from a page.
    PageContent: The advisory text and ordered fragments of one page.
    PhraseQuery: A phrase to locate, with identifier and optional page hint.
    Reference: A labelled reference that links analysis text to a phrase.
    Rectangle: An axis-aligned highlight region.
    HighlightResult: The page and rectangles found for one query.
    MatchingPolicy: Named, overridable heuristic thresholds.
"""

from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from highlight_backend.app.configs import highlight_config
from highlight_backend.app.configs.config_singleton import get_config


class TextFragment(BaseModel):
    """
    A positioned run of text as extracted from a page.

    Attributes:
        content (str): The fragment text, exactly as extracted.
        origin_x (float): Left edge of the fragment.
        origin_y (float): Baseline of the fragment, measured upward from the page bottom.
        width (float): Horizontal extent of the fragment.
        height (Optional[float]): Vertical extent; None when the source does not supply one,
            in which case MatchingPolicy.default_fragment_height applies.
    """
    content: str
    origin_x: float
    origin_y: float
    width: float
    height: Optional[float] = None

    class Config:
        frozen = True

    @classmethod
    def from_transform(
        cls,
        content: str,
        transform: Sequence[float],
        width: float,
        height: Optional[float] = None,
    ) -> "TextFragment":
        """
        Build a fragment from a text-layer item carrying an affine transform.

        Args:
            content: The item text.
            transform: Six-element matrix [scaleX, skewY, skewX, scaleY, translateX, translateY].
            width: Item width.
            height: Item height, if the source supplies one.

        Returns:
            TextFragment: A fragment whose origin is the transform translation.
        """
        if len(transform) < 6:
            raise ValueError("Text item transform must have six elements.")
        return cls(
            content=content,
            origin_x=transform[4],
            origin_y=transform[5],
            width=width,
            height=height or None,
        )


class PageContent(BaseModel):
    """
    Text content of a single page.

    `full_text` is advisory and only used for the page-level fuzzy check; the
    engine rebuilds its own concatenation from `fragments` for offset mapping.

    Attributes:
        page_index (int): Zero-based page index.
        full_text (str): Best-effort text of the whole page.
        fragments (List[TextFragment]): Fragments in extraction order.
    """
    page_index: int = Field(ge=0)
    full_text: str = ""
    fragments: List[TextFragment] = Field(default_factory=list)

    class Config:
        frozen = True


class PhraseQuery(BaseModel):
    """
    A phrase to locate.

    Attributes:
        text (str): The phrase to find.
        identifier (str): Caller-assigned id, unique per outstanding highlight.
        page_hint (Optional[int]): Zero-based page to search first.
    """
    text: str
    identifier: str
    page_hint: Optional[int] = None

    class Config:
        frozen = True


class Reference(BaseModel):
    """
    A labelled reference linking analysis text to a location in a document.

    Attributes:
        id (str): Reference identifier, reused as the highlight identifier.
        label (str): Display label such as "[1]".
        phrase (str): Phrase to locate in the document.
        page_hint (Optional[int]): Zero-based page to search first.
        description (Optional[str]): Free text shown next to the reference.
    """
    id: str
    label: str
    phrase: str
    page_hint: Optional[int] = None
    description: Optional[str] = None

    class Config:
        frozen = True

    def to_query(self) -> PhraseQuery:
        """Return the phrase query for this reference."""
        return PhraseQuery(text=self.phrase, identifier=self.id, page_hint=self.page_hint)


class Rectangle(BaseModel):
    """An axis-aligned rectangle in bottom-up page space."""
    x: float
    y: float
    width: float
    height: float

    class Config:
        frozen = True

    @property
    def right(self) -> float:
        return self.x + self.width


class HighlightResult(BaseModel):
    """
    The outcome of locating one phrase.

    Attributes:
        identifier (str): The query identifier.
        phrase (str): The query phrase.
        page_index (int): Zero-based page on which the phrase was located.
        rects (List[Rectangle]): Regions to highlight, top-to-bottom then left-to-right.
        approximate (bool): True when the rects are the placeholder region rather than a resolved span.
        color (str): Highlight colour for the presentation layer.
    """
    identifier: str
    phrase: str
    page_index: int
    rects: List[Rectangle]
    approximate: bool = False
    color: str = highlight_config.HIGHLIGHT_COLOR

    class Config:
        frozen = True


class MatchingPolicy(BaseModel):
    """
    Heuristic thresholds used by the phrase location engine.

    The defaults come from highlight_config; build a policy with different
    values to tune the engine for another document-layout family.
    """
    page_stopwords: Tuple[str, ...] = highlight_config.PAGE_STOPWORDS
    span_stopwords: Tuple[str, ...] = highlight_config.SPAN_STOPWORDS
    min_key_term_length: int = highlight_config.MIN_KEY_TERM_LENGTH
    fuzzy_match_ratio: float = highlight_config.FUZZY_MATCH_RATIO
    fuzzy_min_matched_terms: int = highlight_config.FUZZY_MIN_MATCHED_TERMS
    context_before: int = highlight_config.CONTEXT_BEFORE
    context_after: int = highlight_config.CONTEXT_AFTER
    partial_hit_ratio: float = highlight_config.PARTIAL_HIT_RATIO
    partial_span_length: int = highlight_config.PARTIAL_SPAN_LENGTH
    same_line_tolerance: float = highlight_config.SAME_LINE_TOLERANCE
    adjacency_gap: float = highlight_config.ADJACENCY_GAP
    default_fragment_height: float = highlight_config.DEFAULT_FRAGMENT_HEIGHT
    placeholder_rect: Tuple[float, float, float, float] = highlight_config.PLACEHOLDER_RECT
    highlight_color: str = highlight_config.HIGHLIGHT_COLOR

    class Config:
        frozen = True

    @classmethod
    def from_config(cls) -> "MatchingPolicy":
        """
        Build a policy from the defaults plus any overrides found in the configuration.

        Returns:
            MatchingPolicy: The configured policy.
        """
        defaults = cls()
        return cls(
            fuzzy_match_ratio=get_config("fuzzy_match_ratio", defaults.fuzzy_match_ratio),
            same_line_tolerance=get_config("same_line_tolerance", defaults.same_line_tolerance),
            adjacency_gap=get_config("adjacency_gap", defaults.adjacency_gap),
            default_fragment_height=get_config("default_fragment_height", defaults.default_fragment_height),
            highlight_color=get_config("highlight_color", defaults.highlight_color),
        )

    def placeholder(self) -> Rectangle:
        """Return the fallback rectangle used for unresolved spans."""
        x, y, width, height = self.placeholder_rect
        return Rectangle(x=x, y=y, width=width, height=height)
