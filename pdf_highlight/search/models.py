"""
Data models for search functionality.

Defines dataclasses for match spans, highlight rectangles, per-page hits,
and whole-document results used throughout the search module.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Tuple

from ..engine.models import GlyphPosition


@dataclass(frozen=True)
class MatchSpan:
    """
    Half-open range [start, end) of glyph indices for one query occurrence.

    Attributes:
        start: Index of the first matched glyph.
        end: Index one past the last matched glyph.
    """
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.start >= self.end:
            raise ValueError(f"Invalid match span [{self.start}, {self.end})")


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in output pixel space."""
    x: float
    y: float
    w: float
    h: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class PageHit:
    """
    One page's scan result.

    Attributes:
        page_number: Page number (1-indexed).
        page_markdown: Full page text wrapped as a fenced block.
        occurrences: Number of query occurrences on the page (> 0).
    """
    page_number: int
    page_markdown: str
    occurrences: int


@dataclass(frozen=True)
class ScanTask:
    """Unit of work bound to one page; carries only a read-only view of the bytes."""
    page_number: int
    document: bytes = field(repr=False)


@dataclass(frozen=True)
class ScanOutcome:
    """Page-ordered hits of a completed scan plus the document's page count."""
    hits: Tuple[PageHit, ...]
    total_pages: int


@dataclass(frozen=True)
class SearchResult:
    """
    Aggregate search result over one document.

    Attributes:
        file_name: Requested file name.
        query: The original query text.
        total_pages: Number of pages in the document.
        matched_pages: Number of pages with at least one occurrence.
        pages: PageHit entries in ascending page order.
        doc_load_ms: Time spent reading the document bytes (advisory).
        scan_ms: Time spent scanning pages (advisory).
        pages_scanned: Number of pages considered; always total_pages.
        parallelism: Worker count actually used.
    """
    file_name: str
    query: str
    total_pages: int
    matched_pages: int
    pages: Tuple[PageHit, ...]
    doc_load_ms: float
    scan_ms: float
    pages_scanned: int
    parallelism: int

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["pages"] = [asdict(hit) for hit in self.pages]
        return data


@dataclass(frozen=True)
class PageMatches:
    """Highlight rectangles for one page with timing metadata."""
    file_name: str
    query: str
    page_number: int
    rects: Tuple[Rect, ...]
    doc_load_ms: float
    boxes_ms: float

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["rects"] = [rect.to_dict() for rect in self.rects]
        return data


@dataclass(frozen=True)
class PageImage:
    """Rendered page as PNG bytes with its pixel size and timings."""
    file_name: str
    page_number: int
    png: bytes = field(repr=False)
    width: int
    height: int
    dpi: int
    doc_load_ms: float
    render_ms: float
