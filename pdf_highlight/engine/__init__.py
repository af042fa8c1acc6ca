"""
PDF engine module for PDF Highlight Search.

Opens independent decode sessions over immutable document bytes with
pypdf and pdfplumber backends, exposing page count, page text, glyph
positions, and page rendering.
"""

from .models import GlyphPosition
from .pypdf_backend import PyPDFBackend
from .pdfplumber_backend import PDFPlumberBackend
from .document import DocumentSession, open_document, BACKENDS

__all__ = [
    "GlyphPosition",
    "PyPDFBackend",
    "PDFPlumberBackend",
    "DocumentSession",
    "open_document",
    "BACKENDS"
]
