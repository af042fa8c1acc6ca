"""
PDF Highlight Search Package.

Full-text search over PDF documents with concurrent per-page scanning,
pixel-space highlight rectangles for matches, and page rendering at a
matching resolution.
"""

__version__ = "1.0.0"
