"""
Unified decode session with text backend fallback.

Wraps the pypdf and pdfplumber backends behind one document handle opened
from immutable bytes. Plain text comes from the configured primary backend
with fallback; glyph positions and rendering always come from pdfplumber.
"""

from typing import List, Optional, Tuple

from ..core import get_config, get_logger, ConfigurationError, DecodeError, OutOfRange
from .models import GlyphPosition
from .pdfplumber_backend import PDFPlumberBackend
from .pypdf_backend import PyPDFBackend

logger = get_logger(__name__)


BACKENDS = {
    "pypdf": PyPDFBackend,
    "pdfplumber": PDFPlumberBackend
}


class DocumentSession:
    """
    One independent decode session over a document's bytes.

    A session holds parser state and must not be shared across threads;
    concurrent callers open their own session from the same bytes.
    """

    def __init__(
        self,
        data: bytes,
        text_backend: str = None,
        fallback_backend: Optional[str] = None,
        line_tolerance: float = None
    ):
        """
        Open the document with the primary text backend.

        Args:
            data: Complete PDF file contents. Never modified.
            text_backend: Name of primary backend ("pypdf" or "pdfplumber").
            fallback_backend: Name of fallback backend, or None for none.
            line_tolerance: Reading-order line tolerance for glyph sorting.

        Raises:
            DecodeError: If no backend can open the bytes.
        """
        if text_backend is None or line_tolerance is None:
            config = get_config()
            if text_backend is None:
                text_backend = config.engine.text_backend
                fallback_backend = fallback_backend or config.engine.fallback_backend
            if line_tolerance is None:
                line_tolerance = config.engine.line_tolerance

        if text_backend not in BACKENDS:
            raise ConfigurationError(f"Unknown text backend: {text_backend}")
        if fallback_backend is not None and fallback_backend not in BACKENDS:
            raise ConfigurationError(f"Unknown fallback backend: {fallback_backend}")
        if fallback_backend == text_backend:
            fallback_backend = None

        self._data = data
        self._line_tolerance = line_tolerance
        self._fallback_name = fallback_backend
        self._fallback = None
        self._layout = None

        try:
            self._primary = self._open(text_backend)
        except DecodeError as primary_error:
            if not self._fallback_name:
                raise
            logger.warning(
                f"{text_backend} could not open document, trying {self._fallback_name}: "
                f"{primary_error.message}"
            )
            try:
                self._primary = self._open(self._fallback_name)
            except DecodeError:
                raise primary_error
            self._fallback_name = None

    def _open(self, name: str):
        if name == PDFPlumberBackend.name:
            return PDFPlumberBackend(self._data, line_tolerance=self._line_tolerance)
        return BACKENDS[name](self._data)

    def _layout_backend(self) -> PDFPlumberBackend:
        if isinstance(self._primary, PDFPlumberBackend):
            return self._primary
        if self._layout is None:
            self._layout = PDFPlumberBackend(self._data, line_tolerance=self._line_tolerance)
        return self._layout

    def page_count(self) -> int:
        return self._primary.page_count()

    def extract_page_text(self, page_num: int) -> str:
        """
        Extract plain text of one page, falling back on decode failure.

        Args:
            page_num: Page number (1-indexed).

        Returns:
            Page text.

        Raises:
            OutOfRange: If page_num is outside the document.
            DecodeError: If every configured backend fails on the page.
        """
        try:
            return self._primary.extract_page_text(page_num)
        except DecodeError as primary_error:
            if not self._fallback_name:
                raise
            logger.warning(
                f"{self._primary.name} failed on page {page_num}, "
                f"trying {self._fallback_name}"
            )
            try:
                if self._fallback is None:
                    self._fallback = self._open(self._fallback_name)
                return self._fallback.extract_page_text(page_num)
            except DecodeError:
                raise primary_error

    def extract_page_glyph_positions(self, page_num: int) -> List[GlyphPosition]:
        """Glyph positions of one page in visual reading order."""
        self._check_page(page_num)
        return self._layout_backend().extract_page_glyph_positions(page_num)

    def render_page(self, page_num: int, dpi: int) -> Tuple[bytes, int, int]:
        """Render one page to PNG; returns (png_bytes, width_px, height_px)."""
        self._check_page(page_num)
        return self._layout_backend().render_page(page_num, dpi)

    def _check_page(self, page_num: int) -> None:
        total = self.page_count()
        if page_num < 1 or page_num > total:
            raise OutOfRange(page_num, total)

    def close(self) -> None:
        for backend in (self._primary, self._fallback, self._layout):
            if backend is not None:
                backend.close()

    def __enter__(self) -> "DocumentSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def open_document(data: bytes, **kwargs) -> DocumentSession:
    """
    Open an independent decode session over PDF bytes.

    Args:
        data: Complete PDF file contents.
        **kwargs: Passed to DocumentSession.

    Returns:
        A new DocumentSession, to be used as a context manager.

    Raises:
        DecodeError: If the bytes are not a readable PDF.
    """
    return DocumentSession(data, **kwargs)
