"""
pdfplumber-based decode session.

Supplies per-character positions in visual reading order and page
rendering, in addition to plain text. Slower than pypdf but the only
backend that exposes glyph geometry.
"""

import io
from typing import List, Tuple

import pdfplumber
from pdfplumber.utils import cluster_objects

from ..core import get_logger, DecodeError, OutOfRange
from .models import GlyphPosition

logger = get_logger(__name__)

DEFAULT_LINE_TOLERANCE = 3.0


class PDFPlumberBackend:
    """
    Decode session over an in-memory PDF using the pdfplumber library.

    Each instance owns its own pdfplumber document; instances are never
    shared between threads.
    """

    name = "pdfplumber"

    def __init__(self, data: bytes, line_tolerance: float = DEFAULT_LINE_TOLERANCE):
        """
        Open a pdfplumber document over the bytes.

        Args:
            data: Complete PDF file contents.
            line_tolerance: Baseline distance (PDF units) under which glyphs
                are sorted as one line.

        Raises:
            DecodeError: If the bytes cannot be parsed.
        """
        self.line_tolerance = line_tolerance

        try:
            self._pdf = pdfplumber.open(io.BytesIO(data))
        except Exception as e:
            raise DecodeError(f"pdfplumber could not open document: {e}")

        try:
            self._pages = self._pdf.pages
        except Exception as e:
            self._pdf.close()
            raise DecodeError(f"pdfplumber could not read page tree: {e}")

        logger.debug(f"pdfplumber opened document with {len(self._pages)} pages")

    def page_count(self) -> int:
        return len(self._pages)

    def _page(self, page_num: int):
        if page_num < 1 or page_num > len(self._pages):
            raise OutOfRange(page_num, len(self._pages))
        # Convert 1-indexed to 0-indexed
        return self._pages[page_num - 1]

    def extract_page_text(self, page_num: int) -> str:
        """
        Extract plain text from a specific page.

        Args:
            page_num: Page number (1-indexed).

        Returns:
            Extracted text from the page.
        """
        page = self._page(page_num)

        try:
            return page.extract_text() or ""
        except Exception as e:
            raise DecodeError(
                f"pdfplumber failed to extract page {page_num}: {e}",
                page_number=page_num
            )

    def extract_page_glyph_positions(self, page_num: int) -> List[GlyphPosition]:
        """
        Extract every character of a page with its geometry.

        Characters are grouped into lines by baseline within line_tolerance,
        lines ordered top to bottom and characters left to right.

        Args:
            page_num: Page number (1-indexed).

        Returns:
            GlyphPosition list in visual reading order.
        """
        page = self._page(page_num)

        try:
            chars = page.chars
        except Exception as e:
            raise DecodeError(
                f"pdfplumber failed to read characters of page {page_num}: {e}",
                page_number=page_num
            )

        positions = []
        for line in cluster_objects(chars, "bottom", self.line_tolerance):
            for char in sorted(line, key=lambda c: c["x0"]):
                positions.append(GlyphPosition(
                    text=char["text"],
                    x=float(char["x0"]),
                    y=float(char["bottom"]),
                    width=float(char["x1"] - char["x0"]),
                    height=float(char["bottom"] - char["top"])
                ))

        logger.debug(f"Page {page_num}: {len(positions)} glyph positions")
        return positions

    def render_page(self, page_num: int, dpi: int) -> Tuple[bytes, int, int]:
        """
        Render a page to PNG.

        Args:
            page_num: Page number (1-indexed).
            dpi: Output resolution in dots per inch.

        Returns:
            Tuple of (png_bytes, width_px, height_px).
        """
        page = self._page(page_num)

        try:
            image = page.to_image(resolution=dpi).original.convert("RGB")
            buffer = io.BytesIO()
            image.save(buffer, format="PNG")
        except Exception as e:
            raise DecodeError(
                f"Failed to render page {page_num}: {e}",
                page_number=page_num
            )

        return buffer.getvalue(), image.width, image.height

    def close(self) -> None:
        self._pdf.close()
