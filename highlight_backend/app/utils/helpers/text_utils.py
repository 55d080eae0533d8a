"""
Utility functions for text normalization and fragment indexing.

This module provides the TextUtils class for:
- Canonicalizing raw text (case, whitespace, currency, thousands separators,
  punctuation) into the comparison form used by every matcher.
- Extracting key terms (numbers and significant words) from normalized text.
- Concatenating positioned text fragments into one buffer while recording which
  fragment produced each character.
"""

import re
from typing import Iterable, List, Sequence, Tuple

from highlight_backend.app.domain.models import TextFragment

# Runs of whitespace of any kind.
_WHITESPACE_RE = re.compile(r"\s+")
# "usd" followed by optional whitespace.
_USD_RE = re.compile(r"usd\s*")
# A literal dollar sign followed by optional whitespace.
_DOLLAR_RE = re.compile(r"\$\s*")
# Commas sitting between two digits, e.g. the separator in "12,800".
_THOUSANDS_RE = re.compile(r"(?<=\d),(?=\d)")
# Everything except word characters, whitespace and basic punctuation.
_DISALLOWED_RE = re.compile(r"[^\w\s.,;:!?$%()-]")
# Digit runs with an optional decimal part.
_NUMBER_RE = re.compile(r"\d+\.?\d*")

CURRENCY_TOKEN = "usd "


class TextUtils:
    """Utilities for text normalization and fragment indexing."""

    @staticmethod
    def _normalize_once(text: str) -> str:
        # Order matters: currency and digit grouping rely on "$" and "," still being present.
        text = text.lower()
        text = _WHITESPACE_RE.sub(" ", text)
        text = _USD_RE.sub(CURRENCY_TOKEN, text)
        text = _DOLLAR_RE.sub(CURRENCY_TOKEN, text)
        text = _THOUSANDS_RE.sub("", text)
        text = _DISALLOWED_RE.sub("", text)
        return text.strip()

    @staticmethod
    def normalize(text: str) -> str:
        """
        Canonicalize text for comparison.

        The pipeline lowercases, collapses whitespace, rewrites "usd" and "$" to the
        canonical "usd " token, removes thousands separators between digits, drops
        characters outside word characters, whitespace and `. , ; : ! ? $ % ( ) -`,
        and trims. Removing characters can expose a new whitespace run or digit
        group (e.g. "a * b"), so the pipeline is repeated until the text is stable;
        the result is therefore idempotent.

        Args:
            text: Raw text.

        Returns:
            str: The normalized text.
        """
        current = TextUtils._normalize_once(text or "")
        while True:
            again = TextUtils._normalize_once(current)
            if again == current:
                return current
            current = again

    @staticmethod
    def extract_key_terms(
        normalized: str,
        stopwords: Iterable[str],
        min_word_length: int = 4,
    ) -> List[str]:
        """
        Extract key terms from normalized text.

        Key terms are every number (digits with an optional decimal part) followed
        by every space-separated word of at least `min_word_length` characters that
        is not a stop word. Words keep their attached punctuation.

        Args:
            normalized: Text already passed through normalize().
            stopwords: Words to ignore.
            min_word_length: Minimum word length.

        Returns:
            List[str]: Numbers first, then words, in order of appearance.
        """
        stop = set(stopwords)
        numbers = _NUMBER_RE.findall(normalized)
        words = [
            word for word in normalized.split(" ")
            if len(word) >= min_word_length and word not in stop
        ]
        return numbers + words

    @staticmethod
    def build_fragment_index(fragments: Sequence[TextFragment]) -> Tuple[str, List[int]]:
        """
        Concatenate fragment texts into one buffer and map each character to its fragment.

        When two consecutive fragments abut without whitespace (the first does not
        end with whitespace and the next does not start with it), a single space is
        inserted and attributed to the preceding fragment. This approximates word
        separation for layouts that do not embed inter-fragment spaces.

        Args:
            fragments: Fragments in extraction order.

        Returns:
            Tuple of (text, char_to_fragment)
            - text: The concatenated buffer.
            - char_to_fragment: For every character of text, the index of its fragment.
        """
        parts: List[str] = []
        char_to_fragment: List[int] = []
        last = len(fragments) - 1

        for index, fragment in enumerate(fragments):
            content = fragment.content
            parts.append(content)
            char_to_fragment.extend([index] * len(content))

            if index < last:
                following = fragments[index + 1].content
                ends_with_space = bool(content) and content[-1].isspace()
                starts_with_space = bool(following) and following[0].isspace()
                if not ends_with_space and not starts_with_space:
                    parts.append(" ")
                    char_to_fragment.append(index)

        return "".join(parts), char_to_fragment
