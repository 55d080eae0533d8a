"""
Fuzzy phrase matching.

FuzzyMatcher decides whether a phrase plausibly occurs in a body of text. It
accepts exact containment after normalization and otherwise scores the overlap
of key terms (numbers and significant words) between the two texts.
"""

from typing import List, Optional

from highlight_backend.app.domain.models import MatchingPolicy
from highlight_backend.app.utils.helpers.text_utils import TextUtils


class FuzzyMatcher:
    """
    Key-term based phrase matcher.

    Args:
        policy: Thresholds and stop words; defaults to MatchingPolicy().
    """

    def __init__(self, policy: Optional[MatchingPolicy] = None):
        self.policy = policy or MatchingPolicy()

    def key_terms(self, normalized: str) -> List[str]:
        """Key terms of normalized text, using the page-level stop words."""
        return TextUtils.extract_key_terms(
            normalized, self.policy.page_stopwords, self.policy.min_key_term_length
        )

    @staticmethod
    def _term_matches(term: str, haystack_terms: List[str]) -> bool:
        # Containment in either direction tolerates truncation and suffix noise.
        return any(term in other or other in term for other in haystack_terms)

    def matches(self, haystack: str, needle: str) -> bool:
        """
        Decide whether needle plausibly occurs in haystack.

        The texts match when the normalized needle is a substring of the normalized
        haystack. Otherwise the needle's key terms are compared with the haystack's:
        the texts match when the share of matched needle terms reaches
        `fuzzy_match_ratio`, or when at least `fuzzy_min_matched_terms` terms
        matched. A needle without key terms never matches fuzzily.

        Args:
            haystack: Text to search, e.g. a full page.
            needle: Phrase to look for.

        Returns:
            bool: True if the phrase plausibly occurs in the text.
        """
        normalized_haystack = TextUtils.normalize(haystack)
        normalized_needle = TextUtils.normalize(needle)

        if normalized_needle in normalized_haystack:
            return True

        needle_terms = self.key_terms(normalized_needle)
        if not needle_terms:
            return False

        haystack_terms = self.key_terms(normalized_haystack)
        matched = sum(1 for term in needle_terms if self._term_matches(term, haystack_terms))

        ratio = matched / len(needle_terms)
        return ratio >= self.policy.fuzzy_match_ratio or matched >= self.policy.fuzzy_min_matched_terms
