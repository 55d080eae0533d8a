import unittest

import pytest

from highlight_backend.app.configs.highlight_config import PAGE_STOPWORDS, SPAN_STOPWORDS
from highlight_backend.app.domain.models import TextFragment
from highlight_backend.app.utils.helpers.text_utils import TextUtils


def _fragments(*contents):
    return [
        TextFragment(content=content, origin_x=10.0 * i, origin_y=700.0, width=8.0, height=12.0)
        for i, content in enumerate(contents)
    ]


# Tests for TextUtils.normalize
class TestTextUtilsNormalize(unittest.TestCase):
    """Test cases for normalize method."""

    # lowercases and collapses whitespace
    def test_normalize_case_and_whitespace(self):
        self.assertEqual(TextUtils.normalize("  Hello \t\n  World  "), "hello world")

    # dollar sign and USD prefix yield the same canonical form
    def test_normalize_currency_equivalence(self):
        self.assertEqual(TextUtils.normalize("$12,800"), "usd 12800")

        self.assertEqual(TextUtils.normalize("USD 12800"), "usd 12800")

        self.assertEqual(TextUtils.normalize("$ 12,800"), TextUtils.normalize("usd12800"))

    # thousands separators are removed only between digits
    def test_normalize_thousands_separator(self):
        self.assertEqual(TextUtils.normalize("1,234,567 units"), "1234567 units")

        self.assertEqual(TextUtils.normalize("apples, 3 pears"), "apples, 3 pears")

    # characters outside the allowed punctuation set are dropped
    def test_normalize_strips_special_characters(self):
        self.assertEqual(TextUtils.normalize("Revenue: €12.8bn!"), "revenue: 12.8bn!")

        self.assertEqual(TextUtils.normalize("margin (25%) - up"), "margin (25%) - up")

    # stripping a character that sat between spaces leaves a single space
    def test_normalize_collapses_spaces_exposed_by_strip(self):
        self.assertEqual(TextUtils.normalize("a * b"), "a b")

    # empty and None input
    def test_normalize_empty(self):
        self.assertEqual(TextUtils.normalize(""), "")

        self.assertEqual(TextUtils.normalize(None), "")

        self.assertEqual(TextUtils.normalize("   "), "")


@pytest.mark.parametrize(
    "raw",
    [
        "Revenue 12.8% growth",
        "$ 12,800",
        "USD   12,800.50 ($)",
        "a * b",
        "1,*2",
        "u*sd5",
        "Gain on sale of non-current assets – net",
        "    mixed unicode  spaces ",
        "",
    ],
)
def test_normalize_is_idempotent(raw):
    once = TextUtils.normalize(raw)

    assert TextUtils.normalize(once) == once


# Tests for TextUtils.extract_key_terms
class TestTextUtilsExtractKeyTerms(unittest.TestCase):
    """Test cases for extract_key_terms method."""

    # numbers come first, then long non-stop words
    def test_extract_key_terms_numbers_then_words(self):
        terms = TextUtils.extract_key_terms("revenue 12.8% growth in q2", PAGE_STOPWORDS)

        self.assertEqual(terms, ["12.8", "2", "revenue", "12.8%", "growth"])

    # page stop words are dropped
    def test_extract_key_terms_page_stopwords(self):
        terms = TextUtils.extract_key_terms("this year revenue have been said", PAGE_STOPWORDS)

        self.assertEqual(terms, ["year", "revenue"])

    # the span stop list is shorter than the page stop list
    def test_extract_key_terms_span_stopwords(self):
        terms = TextUtils.extract_key_terms("this year revenue have been said", SPAN_STOPWORDS)

        self.assertEqual(terms, ["year", "revenue", "have", "been", "said"])

    # short text without numbers has no key terms
    def test_extract_key_terms_none(self):
        self.assertEqual(TextUtils.extract_key_terms("the cat sat", PAGE_STOPWORDS), [])


# Tests for TextUtils.build_fragment_index
class TestTextUtilsBuildFragmentIndex(unittest.TestCase):
    """Test cases for build_fragment_index method."""

    # a space is inserted between abutting fragments and attributed to the first
    def test_build_fragment_index_inserts_separators(self):
        text, char_map = TextUtils.build_fragment_index(_fragments("Revenue", "12.8", "billion"))

        self.assertEqual(text, "Revenue 12.8 billion")

        self.assertEqual(char_map, [0] * 8 + [1] * 5 + [2] * 7)

        self.assertEqual(len(char_map), len(text))

    # no separator when the first fragment ends with whitespace
    def test_build_fragment_index_trailing_space(self):
        text, char_map = TextUtils.build_fragment_index(_fragments("Hello ", "world"))

        self.assertEqual(text, "Hello world")

        self.assertEqual(char_map, [0] * 6 + [1] * 5)

    # no separator when the next fragment starts with whitespace
    def test_build_fragment_index_leading_space(self):
        text, char_map = TextUtils.build_fragment_index(_fragments("Hello", " world"))

        self.assertEqual(text, "Hello world")

        self.assertEqual(char_map, [0] * 5 + [1] * 6)

    # no trailing separator after the last fragment
    def test_build_fragment_index_single_fragment(self):
        text, char_map = TextUtils.build_fragment_index(_fragments("alone"))

        self.assertEqual(text, "alone")

        self.assertEqual(char_map, [0] * 5)

    # empty input
    def test_build_fragment_index_empty(self):
        self.assertEqual(TextUtils.build_fragment_index([]), ("", []))

    # an empty fragment still gets a separator attributed to it
    def test_build_fragment_index_empty_fragment(self):
        text, char_map = TextUtils.build_fragment_index(_fragments("a", "", "b"))

        self.assertEqual(text, "a  b")

        self.assertEqual(char_map, [0, 0, 1, 2])
