"""
SpanResolver Module

This module provides the SpanResolver class, which finds a phrase inside the
concatenated text of a page and reports the fragments that carry it.

Resolution runs in layers:

  1. Exact pass: the normalized phrase is searched in the normalized page buffer.
  2. Partial pass: when the exact pass fails, the phrase's key terms are used as
     anchors. Around the first occurrence of each key term a context window is
     inspected; the first window holding enough key terms yields an approximate
     span starting at that term.
  3. Offset translation: normalization changes string length, so the normalized
     span is scaled back onto the original buffer with the uniform factor
     len(original) / len(normalized). Each offset is scaled independently and
     floored. The factor assumes normalization removed characters evenly across
     the page; where removals cluster (long runs of stripped punctuation,
     collapsed whitespace), the translated span drifts by up to the number of
     characters removed between the page start and the match.
  4. Fragment collection: the char-to-fragment table turns the original span
     into the set of fragment indices it touches.
"""

import math
from typing import List, Optional, Set, Tuple

from highlight_backend.app.domain.models import MatchingPolicy
from highlight_backend.app.utils.helpers.text_utils import TextUtils
from highlight_backend.app.utils.logging.logger import log_debug


class SpanResolver:
    """
    Resolve a phrase to the set of fragments that carry it.

    Args:
        policy: Thresholds and stop words; defaults to MatchingPolicy().
    """

    def __init__(self, policy: Optional[MatchingPolicy] = None):
        self.policy = policy or MatchingPolicy()

    def find_exact_span(self, normalized_phrase: str, normalized_text: str) -> Optional[Tuple[int, int]]:
        """
        Find the normalized phrase in the normalized buffer.

        Returns:
            Optional[Tuple[int, int]]: (start, length) in normalized characters, or None.
        """
        start = normalized_text.find(normalized_phrase)
        if start == -1:
            return None
        return start, len(normalized_phrase)

    def find_partial_span(self, normalized_phrase: str, normalized_text: str) -> Optional[Tuple[int, int]]:
        """
        Find an approximate span anchored on the phrase's key terms.

        Each key term is tried in order. For the first occurrence of a term, the
        window of `context_before` characters before and `context_after` characters
        after it is checked; when at least max(1, partial_hit_ratio * number of
        key terms) key terms occur in that window, the span starts at the term and
        covers `partial_span_length` characters (clipped to the buffer end).

        Returns:
            Optional[Tuple[int, int]]: (start, length) in normalized characters, or None.
        """
        policy = self.policy
        key_terms = TextUtils.extract_key_terms(
            normalized_phrase, policy.span_stopwords, policy.min_key_term_length
        )
        required_hits = max(1, len(key_terms) * policy.partial_hit_ratio)

        for term in key_terms:
            position = normalized_text.find(term)
            if position == -1:
                continue
            window = normalized_text[
                max(0, position - policy.context_before):
                min(len(normalized_text), position + policy.context_after)
            ]
            hits = sum(1 for candidate in key_terms if candidate in window)
            if hits >= required_hits:
                log_debug(f"[OK] Partial match anchored on a key term at offset {position} ({hits} terms in window)")
                return position, min(policy.partial_span_length, len(normalized_text) - position)

        return None

    @staticmethod
    def to_original_offsets(
        start: int,
        end: int,
        original_length: int,
        normalized_length: int,
    ) -> Tuple[int, int]:
        """
        Scale a normalized [start, end) range onto the original buffer.

        Args:
            start: Normalized start offset.
            end: Normalized end offset.
            original_length: Length of the original buffer.
            normalized_length: Length of the normalized buffer (must be positive).

        Returns:
            Tuple[int, int]: The floored original (start, end).
        """
        ratio = original_length / normalized_length
        return math.floor(start * ratio), math.floor(end * ratio)

    @staticmethod
    def collect_fragments(start: int, end: int, char_to_fragment: List[int]) -> Set[int]:
        """Fragment indices of the characters in [start, end), clipped to the table."""
        return {char_to_fragment[i] for i in range(max(0, start), min(end, len(char_to_fragment)))}

    def resolve(self, phrase: str, text: str, char_to_fragment: List[int]) -> Optional[Set[int]]:
        """
        Resolve a phrase to the fragments carrying it.

        Args:
            phrase: The phrase, as supplied by the caller.
            text: The concatenated page buffer from TextUtils.build_fragment_index.
            char_to_fragment: Fragment index of every character of text.

        Returns:
            Optional[Set[int]]: Touched fragment indices, or None when nothing resolves.
        """
        normalized_text = TextUtils.normalize(text)
        if not normalized_text:
            return None
        normalized_phrase = TextUtils.normalize(phrase)

        span = self.find_exact_span(normalized_phrase, normalized_text)
        if span is None:
            span = self.find_partial_span(normalized_phrase, normalized_text)
        if span is None:
            return None

        start, length = span
        original_start, original_end = self.to_original_offsets(
            start, start + length, len(text), len(normalized_text)
        )
        touched = self.collect_fragments(original_start, original_end, char_to_fragment)
        return touched or None
