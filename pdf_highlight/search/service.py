"""
Search service over PDFs stored under a base directory.

Resolves client-supplied file names, loads document bytes, and exposes the
three operations callers need: whole-document search, highlight rectangles
for one page, and a page image rendered in the same pixel space as the
rectangles.
"""

import time
from functools import partial
from pathlib import Path
from typing import Optional, Tuple

from ..core import get_config, get_logger, Config, InvalidArgument
from ..engine import open_document
from ..utils import resolve_pdf_path, read_document_bytes, get_document_version
from .locator import locate_rects
from .models import PageImage, PageMatches, SearchResult
from .page_cache import PageTextCache
from .scanner import resolve_parallelism, scan_document

logger = get_logger(__name__)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class SearchService:
    """
    Entry point for searching, locating, and rendering PDF pages.

    Whole-document search and per-page location are separate calls; the
    scanner's thread pool never runs the locator.
    """

    def __init__(
        self,
        config: Config = None,
        cache: Optional[PageTextCache] = None
    ):
        """
        Initialize the service.

        Args:
            config: Configuration to use. Defaults to the global config.
            cache: Page text cache. Defaults to a new cache when enabled in
                config; pass one explicitly to share it between services.
        """
        self.config = config or get_config()

        if cache is None and self.config.cache.enabled:
            cache = PageTextCache(max_entries=self.config.cache.max_entries)
        self.cache = cache

        self.base_path = Path(self.config.paths.pdf_base_path)
        self.scale = self.config.rendering.scale
        self.opener = partial(
            open_document,
            text_backend=self.config.engine.text_backend,
            fallback_backend=self.config.engine.fallback_backend,
            line_tolerance=self.config.engine.line_tolerance
        )

    def _validate_query(self, query: str) -> str:
        if query is None or not query.strip():
            raise InvalidArgument("Query must not be blank")
        if len(query) > self.config.search.max_query_length:
            raise InvalidArgument(
                f"Query longer than {self.config.search.max_query_length} characters",
                {"length": len(query)}
            )
        return query

    def _load(self, file_name: str) -> Tuple[Path, bytes]:
        filepath = resolve_pdf_path(self.base_path, file_name)
        return filepath, read_document_bytes(filepath)

    def search(self, file_name: str, query: str, parallelism: int = None) -> SearchResult:
        """
        Count query occurrences on every page of a document.

        Args:
            file_name: PDF name under the base path.
            query: Literal query text.
            parallelism: Worker count; None uses config, 0 uses all cores.

        Returns:
            SearchResult with matched pages in ascending order.

        Raises:
            InvalidArgument: For a blank query or unsafe file name.
            DocumentNotFound: If the file does not exist.
            DecodeError: If the document cannot be opened.
            AggregateScanFailure: If any page fails to extract.
        """
        query = self._validate_query(query)

        start = time.perf_counter()
        filepath, document = self._load(file_name)
        doc_load_ms = _elapsed_ms(start)

        if parallelism is None:
            parallelism = self.config.search.parallelism
        workers = resolve_parallelism(parallelism)

        document_key = (str(filepath.resolve()), get_document_version(document))

        start = time.perf_counter()
        outcome = scan_document(
            document,
            query,
            workers,
            opener=self.opener,
            cache=self.cache,
            document_key=document_key
        )
        scan_ms = _elapsed_ms(start)

        logger.info(
            f"Search '{file_name}': {len(outcome.hits)}/{outcome.total_pages} pages matched "
            f"(load {doc_load_ms}ms, scan {scan_ms}ms, {workers} workers)"
        )

        return SearchResult(
            file_name=file_name,
            query=query,
            total_pages=outcome.total_pages,
            matched_pages=len(outcome.hits),
            pages=outcome.hits,
            doc_load_ms=doc_load_ms,
            scan_ms=scan_ms,
            pages_scanned=outcome.total_pages,
            parallelism=workers
        )

    def page_matches(self, file_name: str, query: str, page_number: int) -> PageMatches:
        """
        Compute highlight rectangles for a query on one page.

        Args:
            file_name: PDF name under the base path.
            query: Literal query text.
            page_number: Page number (1-indexed).

        Returns:
            PageMatches whose rects share the pixel space of page_image().

        Raises:
            OutOfRange: If the page does not exist.
        """
        query = self._validate_query(query)

        start = time.perf_counter()
        _, document = self._load(file_name)
        doc_load_ms = _elapsed_ms(start)

        start = time.perf_counter()
        with self.opener(document) as session:
            positions = session.extract_page_glyph_positions(page_number)
        rects = locate_rects(positions, query, self.scale)
        boxes_ms = _elapsed_ms(start)

        logger.info(
            f"Matches '{file_name}' page {page_number}: {len(rects)} rects "
            f"(load {doc_load_ms}ms, boxes {boxes_ms}ms)"
        )

        return PageMatches(
            file_name=file_name,
            query=query,
            page_number=page_number,
            rects=tuple(rects),
            doc_load_ms=doc_load_ms,
            boxes_ms=boxes_ms
        )

    def page_image(self, file_name: str, page_number: int) -> PageImage:
        """
        Render one page to PNG at the configured DPI.

        Args:
            file_name: PDF name under the base path.
            page_number: Page number (1-indexed).

        Returns:
            PageImage with PNG bytes and pixel size.
        """
        dpi = self.config.rendering.dpi

        start = time.perf_counter()
        _, document = self._load(file_name)
        doc_load_ms = _elapsed_ms(start)

        start = time.perf_counter()
        with self.opener(document) as session:
            png, width, height = session.render_page(page_number, dpi)
        render_ms = _elapsed_ms(start)

        logger.info(f"Rendered '{file_name}' page {page_number} at {dpi} DPI in {render_ms}ms")

        return PageImage(
            file_name=file_name,
            page_number=page_number,
            png=png,
            width=width,
            height=height,
            dpi=dpi,
            doc_load_ms=doc_load_ms,
            render_ms=render_ms
        )
