"""
Data produced by the PDF engine.

Defines the per-character position record emitted for one page of a
document, in visual reading order.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class GlyphPosition:
    """
    One decoded character on a page.

    Attributes:
        text: The character(s) the glyph represents.
        x: Left edge, in PDF units.
        y: Baseline, in PDF units measured down from the top of the page.
        width: Advance width of the glyph.
        height: Glyph height.
    """
    text: str
    x: float
    y: float
    width: float
    height: float
