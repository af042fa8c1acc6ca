"""
Tests for the pdfplumber decode session.

Tests text extraction, glyph positions in reading order, and rendering
using generated PDFs.
"""

import pytest
from unittest.mock import MagicMock, PropertyMock, patch

from pdf_highlight.engine.pdfplumber_backend import PDFPlumberBackend
from pdf_highlight.core.exceptions import DecodeError, OutOfRange

from conftest import build_pdf


class TestPDFPlumberBackend:
    """Tests for PDFPlumberBackend text and page handling."""

    def test_backend_name(self, hello_pdf_bytes):
        """Test that backend has correct name identifier."""
        assert PDFPlumberBackend(hello_pdf_bytes).name == "pdfplumber"

    def test_page_count(self, three_page_pdf_bytes):
        """Test that page count matches the document."""
        assert PDFPlumberBackend(three_page_pdf_bytes).page_count() == 3

    def test_extract_page_text(self, hello_pdf_bytes):
        """Test that page text contains the drawn string."""
        assert "Hello World" in PDFPlumberBackend(hello_pdf_bytes).extract_page_text(1)

    def test_invalid_pdf_raises(self):
        """Test that invalid PDF content raises DecodeError."""
        with pytest.raises(DecodeError):
            PDFPlumberBackend(b"Not a valid PDF")

    def test_page_tree_failure_closes_document(self, hello_pdf_bytes):
        """Test that the opened document is closed when its pages cannot be read."""
        pdf = MagicMock()
        type(pdf).pages = PropertyMock(side_effect=Exception("broken page tree"))

        with patch("pdf_highlight.engine.pdfplumber_backend.pdfplumber.open", return_value=pdf):
            with pytest.raises(DecodeError):
                PDFPlumberBackend(hello_pdf_bytes)

        pdf.close.assert_called_once()

    @pytest.mark.parametrize("page", [0, 4])
    def test_out_of_range_page_raises(self, three_page_pdf_bytes, page):
        """Test that pages outside the document raise OutOfRange."""
        backend = PDFPlumberBackend(three_page_pdf_bytes)

        with pytest.raises(OutOfRange):
            backend.extract_page_glyph_positions(page)


class TestGlyphPositions:
    """Tests for glyph position extraction."""

    def test_glyphs_spell_page_text(self, hello_pdf_bytes):
        """Test that concatenated glyph text reproduces the line."""
        glyphs = PDFPlumberBackend(hello_pdf_bytes).extract_page_glyph_positions(1)

        assert "".join(g.text for g in glyphs) == "Hello World"

    def test_glyph_geometry(self, hello_pdf_bytes):
        """Test that the first glyph sits at the drawn origin with font-size height."""
        glyphs = PDFPlumberBackend(hello_pdf_bytes).extract_page_glyph_positions(1)
        first = glyphs[0]

        assert first.x == pytest.approx(100.0, abs=0.01)
        assert first.height == pytest.approx(12.0, abs=0.01)
        assert first.width > 0
        assert all(g.y == pytest.approx(first.y) for g in glyphs)

    def test_reading_order_top_to_bottom(self):
        """Test that lines drawn bottom-first are returned top-first."""
        data = build_pdf([[(100, 600, "Lower"), (100, 700, "Upper")]])
        glyphs = PDFPlumberBackend(data).extract_page_glyph_positions(1)

        assert "".join(g.text for g in glyphs) == "UpperLower"

    def test_reading_order_left_to_right(self):
        """Test that fragments on one baseline are sorted by x."""
        data = build_pdf([[(300, 700, "right"), (100, 700, "left")]])
        glyphs = PDFPlumberBackend(data).extract_page_glyph_positions(1)

        assert "".join(g.text for g in glyphs) == "leftright"

    def test_empty_page(self):
        """Test that a page without text has no glyphs."""
        data = build_pdf([[]])

        assert PDFPlumberBackend(data).extract_page_glyph_positions(1) == []


class TestRenderPage:
    """Tests for page rendering."""

    def test_render_png(self, hello_pdf_bytes):
        """Test that rendering returns PNG bytes sized for the DPI."""
        png, width, height = PDFPlumberBackend(hello_pdf_bytes).render_page(1, 72)

        assert png.startswith(b"\x89PNG")
        assert width == pytest.approx(612, abs=1)
        assert height == pytest.approx(792, abs=1)

    def test_render_out_of_range(self, hello_pdf_bytes):
        """Test that rendering a missing page raises OutOfRange."""
        with pytest.raises(OutOfRange):
            PDFPlumberBackend(hello_pdf_bytes).render_page(2, 72)
