"""
Position-indexed match locator.

Finds literal, case-insensitive occurrences of a query in one page's glyph
stream and converts each occurrence into highlight rectangles, one per
visual line the occurrence spans, scaled into output pixel space.
"""

import math
from typing import List, Sequence, Tuple

from ..core import get_logger, InvalidArgument
from ..utils import find_literal_spans
from .models import GlyphPosition, MatchSpan, Rect

logger = get_logger(__name__)

# A glyph starts a new line when its baseline moves by more than this
# fraction of its own height from the line's first baseline.
LINE_BREAK_HEIGHT_RATIO = 0.5


def build_haystack(positions: Sequence[GlyphPosition]) -> Tuple[str, List[int]]:
    """
    Concatenate lower-cased glyph text, keeping a map back to glyph indices.

    For single-character glyphs haystack index i is glyph i. Glyphs that
    lower-case to several characters (ligatures, some case mappings) or to
    none still map every produced character to the glyph that emitted it.

    Args:
        positions: Glyphs of one page in reading order.

    Returns:
        Tuple of (haystack, owners) where owners[i] is the glyph index of
        haystack character i.
    """
    parts = []
    owners = []

    for index, glyph in enumerate(positions):
        lowered = glyph.text.lower()
        parts.append(lowered)
        owners.extend([index] * len(lowered))

    return "".join(parts), owners


def find_match_spans(positions: Sequence[GlyphPosition], query: str) -> List[MatchSpan]:
    """
    Locate every non-overlapping occurrence of query among the glyphs.

    Args:
        positions: Glyphs of one page in reading order.
        query: Non-empty literal query text.

    Returns:
        MatchSpan list over glyph indices, in haystack order.
    """
    haystack, owners = build_haystack(positions)

    return [
        MatchSpan(owners[start], owners[end - 1] + 1)
        for start, end in find_literal_spans(haystack, query.lower())
    ]


def _scaled(min_x: float, min_y: float, max_x: float, max_y: float, scale: float) -> Rect:
    return Rect(
        x=min_x * scale,
        y=min_y * scale,
        w=(max_x - min_x) * scale,
        h=(max_y - min_y) * scale
    )


def boxes_for_span(
    positions: Sequence[GlyphPosition],
    span: MatchSpan,
    scale: float
) -> List[Rect]:
    """
    Group a span's glyphs into line clusters and emit one box per line.

    Args:
        positions: Glyphs of one page in reading order.
        span: Glyph range of one occurrence.
        scale: Pixels per PDF unit.

    Returns:
        Rectangles in line order. Clusters with no horizontal extent are
        dropped.
    """
    rects = []
    ref_y = None
    min_x = min_y = math.inf
    max_x = max_y = -math.inf

    for glyph in positions[span.start:span.end]:
        if ref_y is None:
            ref_y = glyph.y

        if abs(glyph.y - ref_y) > glyph.height * LINE_BREAK_HEIGHT_RATIO:
            if max_x > min_x:
                rects.append(_scaled(min_x, min_y, max_x, max_y, scale))
            ref_y = glyph.y
            min_x = min_y = math.inf
            max_x = max_y = -math.inf

        min_x = min(min_x, glyph.x)
        min_y = min(min_y, glyph.y - glyph.height)
        max_x = max(max_x, glyph.x + glyph.width)
        max_y = max(max_y, glyph.y)

    if max_x > min_x:
        rects.append(_scaled(min_x, min_y, max_x, max_y, scale))

    return rects


def locate_rects(
    positions: Sequence[GlyphPosition],
    query: str,
    scale: float
) -> List[Rect]:
    """
    Compute highlight rectangles for every occurrence of query on a page.

    Args:
        positions: Glyphs of exactly one page, in visual reading order.
        query: Literal query text; matched case-insensitively.
        scale: Pixels per PDF unit, e.g. 180 / 72 for a 180 DPI render.

    Returns:
        Rectangles in match order, then line order within each match. Empty
        when the query does not occur.

    Raises:
        InvalidArgument: If query is empty or scale is not positive.
    """
    if not query:
        raise InvalidArgument("Query must not be empty")
    if not scale > 0:
        raise InvalidArgument(f"Scale must be positive, got {scale}", {"scale": scale})

    rects = []
    spans = find_match_spans(positions, query)

    for span in spans:
        rects.extend(boxes_for_span(positions, span, scale))

    logger.debug(f"{len(spans)} matches -> {len(rects)} rects over {len(positions)} glyphs")
    return rects
