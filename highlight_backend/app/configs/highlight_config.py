"""
Phrase matching policy configuration.

Every heuristic threshold used by the phrase location engine lives here as a
named default. The values are tuned for PDF.js / PyMuPDF style text layers and
can be overridden per document-layout family, either by passing a custom
MatchingPolicy or through the environment (see config_singleton).
"""

# Stop words ignored when scoring a page against a phrase.
PAGE_STOPWORDS = ("this", "that", "with", "from", "have", "been", "were", "said")

# Stop words ignored when looking for a partial span inside a page.
SPAN_STOPWORDS = ("this", "that", "with", "from")

# Minimum length of a word before it counts as a key term.
MIN_KEY_TERM_LENGTH = 4

# Fraction of phrase key terms that must be found on a page.
FUZZY_MATCH_RATIO = 0.6
# Absolute number of matched key terms that is always enough.
FUZZY_MIN_MATCHED_TERMS = 2

# Context window around a candidate key term, in normalized characters.
CONTEXT_BEFORE = 50
CONTEXT_AFTER = 100
# Fraction of key terms that must fall inside the context window.
PARTIAL_HIT_RATIO = 0.5
# Length of the approximate span highlighted after a partial match.
PARTIAL_SPAN_LENGTH = 100

# Rectangles whose y differs by less than this are on the same line.
SAME_LINE_TOLERANCE = 5.0
# Horizontal gap tolerated between two rectangles that are merged.
ADJACENCY_GAP = 10.0

# Height used for fragments whose source does not supply one.
DEFAULT_FRAGMENT_HEIGHT = 12.0

# Fallback region (x, y, width, height) used when a page matched but no span resolved.
PLACEHOLDER_RECT = (50.0, 100.0, 500.0, 30.0)

# Colour attached to highlight results.
HIGHLIGHT_COLOR = "#fef08a"
