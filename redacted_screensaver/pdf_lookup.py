"""
PyMuPDF word lookup.

Answers "which word is at this screen point?" for a rendered PDF page, so
PDFs can stand in for the reader's document when laying out redactions.
Screen points are in pixels of the rendered image; the text layer is in
PDF points, related by the render zoom factor.
"""

import logging
from statistics import median
from typing import Optional

import fitz

from .exceptions import WordLookupError
from .models import WordBox


logger = logging.getLogger(__name__)


class PdfPageHandle:
    """
    A PDF page as rendered on screen.

    Word rectangles are read from the text layer on first use and kept
    for the lifetime of the handle.
    """

    def __init__(self, page: fitz.Page, zoom: float = 1.0):
        self.page = page
        self.zoom = zoom
        self._words: Optional[list[tuple]] = None

    @property
    def words(self) -> list[tuple]:
        if self._words is None:
            try:
                self._words = self.page.get_text("words")
            except Exception as e:
                raise WordLookupError(
                    f"Cannot read text layer of page {self.page.number + 1}: {e}"
                ) from e
        return self._words


class PdfWordLookup:
    """Word-lookup collaborator over PdfPageHandle documents."""

    def __call__(self, document: PdfPageHandle, point: tuple[int, int]) -> Optional[WordBox]:
        x = point[0] / document.zoom
        y = point[1] / document.zoom

        for word in document.words:
            x0, y0, x1, y1, text = word[:5]
            if x0 <= x <= x1 and y0 <= y <= y1:
                # Zero-area words raise ValueError, which the sampler skips
                return WordBox(
                    x=x0 * document.zoom,
                    y=y0 * document.zoom,
                    w=(x1 - x0) * document.zoom,
                    h=(y1 - y0) * document.zoom,
                    text=text,
                )
        return None


def estimate_font_size(page: fitz.Page, zoom: float = 1.0) -> Optional[float]:
    """
    Estimate the body font size of a page in rendered pixels.

    Args:
        page: PyMuPDF page object
        zoom: Render zoom factor (dpi / 72)

    Returns:
        Median span font size in pixels, or None if the page has no text
    """
    try:
        text_dict = page.get_text("dict")
    except Exception as e:
        logger.debug(f"No text dictionary for page {page.number + 1}: {e}")
        return None

    sizes = []
    for block in text_dict.get("blocks", []):
        if block.get("type") != 0:  # Text block
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                if span.get("text", "").strip():
                    sizes.append(span.get("size", 12.0))

    if not sizes:
        return None
    return median(sizes) * zoom
