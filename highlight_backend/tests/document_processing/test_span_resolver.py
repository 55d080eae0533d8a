from unittest.mock import patch

import pytest

from highlight_backend.app.document_processing.span_resolver import SpanResolver
from highlight_backend.app.domain.models import TextFragment
from highlight_backend.app.utils.helpers.text_utils import TextUtils


def _index(*contents):
    fragments = [
        TextFragment(content=content, origin_x=0, origin_y=0, width=1)
        for content in contents
    ]
    return TextUtils.build_fragment_index(fragments)


@pytest.fixture
def resolver():
    return SpanResolver()


class TestSpanResolver:

    # an exact match touches the fragments that carry it
    def test_resolve_exact(self, resolver):
        text, char_map = _index("Revenue", "12.8", "billion")

        touched = resolver.resolve("Revenue 12.8", text, char_map)

        assert {0, 1}.issubset(touched)

        assert touched == {0, 1}

    # the exact pass tolerates case and currency differences
    def test_resolve_exact_after_normalization(self, resolver):
        text, char_map = _index("Net", "sales", "USD", "12800")

        touched = resolver.resolve("usd 12800", text, char_map)

        assert touched == {2, 3}

    # a phrase worded differently resolves through its key terms
    @patch("highlight_backend.app.document_processing.span_resolver.log_debug")
    def test_resolve_partial(self, mock_log_debug, resolver):
        text, char_map = _index("Group", "revenue", "reached", "12.8", "billion", "in", "Q2")

        touched = resolver.resolve("Revenue of USD 12.8 bn", text, char_map)

        assert touched == {3, 4, 5, 6}

        mock_log_debug.assert_called_once()

    # removed characters shift the span through the uniform scale
    def test_resolve_scales_offsets(self, resolver):
        text, char_map = _index("***", "Revenue", "12.8")

        touched = resolver.resolve("Revenue 12.8", text, char_map)

        assert {1, 2}.issubset(touched)

    # no exact match and no key term on the page
    def test_resolve_not_found(self, resolver):
        text, char_map = _index("Group", "revenue", "reached", "12.8", "billion")

        assert resolver.resolve("dividend policy", text, char_map) is None

    # an empty buffer never resolves
    def test_resolve_empty_text(self, resolver):
        assert resolver.resolve("Revenue", "", []) is None

    # exact span is reported as start and length
    def test_find_exact_span(self, resolver):
        assert resolver.find_exact_span("12.8", "revenue 12.8 billion") == (8, 4)

        assert resolver.find_exact_span("13.0", "revenue 12.8 billion") is None

    # the first term whose window holds enough terms anchors the span
    def test_find_partial_span_window(self, resolver):
        text = "alpha " + "filler " * 50 + "bravo charlie"

        span = resolver.find_partial_span("alpha bravo charlie delta", text)

        assert span == (356, 13)

    # a phrase without key terms has no partial span
    def test_find_partial_span_no_terms(self, resolver):
        assert resolver.find_partial_span("in of at", "in of at the bank") is None

    # offsets are scaled independently and floored
    def test_to_original_offsets(self):
        assert SpanResolver.to_original_offsets(10, 20, 30, 15) == (20, 40)

        assert SpanResolver.to_original_offsets(1, 2, 10, 3) == (3, 6)

        assert SpanResolver.to_original_offsets(4, 9, 12, 12) == (4, 9)

    # collection clips the range to the table
    def test_collect_fragments_clipped(self):
        assert SpanResolver.collect_fragments(-3, 100, [0, 0, 1]) == {0, 1}

        assert SpanResolver.collect_fragments(2, 2, [0, 0, 1]) == set()
