"""
Utility functions for highlight rectangle construction.

This module provides the RectUtils class for:
- Converting the fragments touched by a resolved span into rectangles.
- Merging rectangles that sit on the same visual line and touch or overlap
  horizontally, so a phrase spread over several fragments is covered by as few
  rectangles as possible.

Rectangles stay in the bottom-up page space of their fragments. Flipping the
vertical axis for display is left to the rendering layer.
"""

from typing import Iterable, List, Sequence

from highlight_backend.app.configs.highlight_config import (
    ADJACENCY_GAP,
    DEFAULT_FRAGMENT_HEIGHT,
    SAME_LINE_TOLERANCE,
)
from highlight_backend.app.domain.models import Rectangle, TextFragment


class RectUtils:
    """Utilities for building and merging highlight rectangles."""

    @staticmethod
    def fragment_to_rect(
        fragment: TextFragment,
        default_height: float = DEFAULT_FRAGMENT_HEIGHT,
    ) -> Rectangle:
        """
        Map a fragment onto the rectangle it occupies.

        Args:
            fragment: The fragment.
            default_height: Height used when the fragment has none.

        Returns:
            Rectangle: The fragment's region, in the fragment's coordinate space.
        """
        return Rectangle(
            x=fragment.origin_x,
            y=fragment.origin_y,
            width=fragment.width,
            height=fragment.height or default_height,
        )

    @staticmethod
    def build_rects(
        fragment_indices: Iterable[int],
        fragments: Sequence[TextFragment],
        default_height: float = DEFAULT_FRAGMENT_HEIGHT,
        same_line_tolerance: float = SAME_LINE_TOLERANCE,
        adjacency_gap: float = ADJACENCY_GAP,
    ) -> List[Rectangle]:
        """
        Convert touched fragments into merged highlight rectangles.

        Args:
            fragment_indices: Indices of the fragments covered by a span.
            fragments: All fragments of the page.
            default_height: Height used for fragments without one.
            same_line_tolerance: Maximum y difference (exclusive) for two rects on one line.
            adjacency_gap: Maximum horizontal gap bridged when merging.

        Returns:
            List[Rectangle]: Merged rectangles in visual order.
        """
        rects = [
            RectUtils.fragment_to_rect(fragments[index], default_height)
            for index in sorted(set(fragment_indices))
        ]
        return RectUtils.merge_rects(rects, same_line_tolerance, adjacency_gap)

    @staticmethod
    def _union(current: Rectangle, following: Rectangle) -> Rectangle:
        left = min(current.x, following.x)
        return Rectangle(
            x=left,
            y=min(current.y, following.y),
            width=max(current.right, following.right) - left,
            height=max(current.height, following.height),
        )

    @staticmethod
    def merge_rects(
        rects: Sequence[Rectangle],
        same_line_tolerance: float = SAME_LINE_TOLERANCE,
        adjacency_gap: float = ADJACENCY_GAP,
    ) -> List[Rectangle]:
        """
        Merge rectangles that share a line and touch or overlap horizontally.

        Rectangles are sorted by (y, x) and folded left to right: the running
        rectangle absorbs the next one when their y values differ by less than
        `same_line_tolerance` and the next one starts no further than
        `adjacency_gap` past the running rectangle's right edge. The union takes
        the minimum x and y, the maximum right edge and the larger height.

        Args:
            rects: Rectangles to merge. The input is not modified.
            same_line_tolerance: Maximum y difference (exclusive) for two rects on one line.
            adjacency_gap: Maximum horizontal gap bridged when merging.

        Returns:
            List[Rectangle]: Merged rectangles ordered by y, then x.
        """
        if len(rects) <= 1:
            return list(rects)

        ordered = sorted(rects, key=lambda r: (r.y, r.x))
        merged: List[Rectangle] = []
        current = ordered[0]

        for following in ordered[1:]:
            same_line = abs(current.y - following.y) < same_line_tolerance
            adjacent = following.x <= current.right + adjacency_gap
            if same_line and adjacent:
                current = RectUtils._union(current, following)
            else:
                merged.append(current)
                current = following

        merged.append(current)
        return merged
