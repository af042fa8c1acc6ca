"""
Search module for PDF Highlight Search.

Provides the position-indexed match locator, the concurrent page scanner,
an optional page text cache, and the service combining them with file
resolution and timing.
"""

from .models import (
    GlyphPosition,
    MatchSpan,
    Rect,
    PageHit,
    ScanTask,
    ScanOutcome,
    SearchResult,
    PageMatches,
    PageImage
)
from .locator import locate_rects, find_match_spans, boxes_for_span
from .page_cache import PageTextCache
from .scanner import scan_document, resolve_parallelism
from .service import SearchService

__all__ = [
    "GlyphPosition",
    "MatchSpan",
    "Rect",
    "PageHit",
    "ScanTask",
    "ScanOutcome",
    "SearchResult",
    "PageMatches",
    "PageImage",
    "locate_rects",
    "find_match_spans",
    "boxes_for_span",
    "PageTextCache",
    "scan_document",
    "resolve_parallelism",
    "SearchService"
]
