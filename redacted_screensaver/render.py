"""
Projection of redaction bars onto a render surface.

Bars are padded, clipped to the surface and painted as filled black
rectangles. This is plain geometry plus a numpy-backed surface; page
rendering for the preview tool lives in page_renderer.py.
"""

from typing import Iterable, Optional, Protocol

import numpy as np

from .models import LayoutParams, WordBox


BLACK = (0, 0, 0)


class RenderSurface(Protocol):
    width: int
    height: int

    def paint_rect(self, x: float, y: float, w: float, h: float, color=BLACK) -> None:
        ...


class ImageSurface:
    """Render surface backed by a BGR (or grayscale) numpy image."""

    def __init__(self, image: np.ndarray):
        self.image = image
        self.height, self.width = image.shape[:2]

    def paint_rect(self, x: float, y: float, w: float, h: float, color=BLACK) -> None:
        x0, y0 = int(round(x)), int(round(y))
        x1, y1 = int(round(x + w)), int(round(y + h))
        if self.image.ndim == 2 and isinstance(color, tuple):
            color = color[0]
        self.image[y0:y1, x0:x1] = color


def project_box(
    box: WordBox,
    surface_width: float,
    surface_height: float,
    padding_h: float = 2,
    padding_v: float = 1
) -> Optional[tuple[float, float, float, float]]:
    """
    Pad a bar and clip it to the surface.

    Args:
        box: Bar to project
        surface_width: Surface width in pixels
        surface_height: Surface height in pixels
        padding_h: Horizontal padding per side
        padding_v: Vertical padding per side

    Returns:
        (x, y, w, h) on the surface, or None if nothing is left after clipping
    """
    rx = box.x - padding_h
    ry = box.y - padding_v
    rw = box.w + padding_h * 2
    rh = box.h + padding_v * 2

    x0 = max(0, rx)
    y0 = max(0, ry)
    x1 = min(surface_width, rx + rw)
    y1 = min(surface_height, ry + rh)

    if x1 - x0 <= 0 or y1 - y0 <= 0:
        return None
    return (x0, y0, x1 - x0, y1 - y0)


def project_redactions(
    boxes: Iterable[WordBox],
    surface_width: float,
    surface_height: float,
    padding_h: float = 2,
    padding_v: float = 1
) -> list[tuple[float, float, float, float]]:
    """Project every bar, dropping those clipped away entirely."""
    projected = []
    for box in boxes:
        rect = project_box(box, surface_width, surface_height, padding_h, padding_v)
        if rect is not None:
            projected.append(rect)
    return projected


def paint_redactions(
    surface: RenderSurface,
    boxes: Iterable[WordBox],
    params: Optional[LayoutParams] = None
) -> int:
    """
    Paint redaction bars onto a surface.

    Args:
        surface: Destination surface
        boxes: Merged redaction bars
        params: Layout parameters (for padding)

    Returns:
        Number of rectangles painted
    """
    params = params or LayoutParams()
    rects = project_redactions(
        boxes, surface.width, surface.height, params.padding_h, params.padding_v
    )
    for x, y, w, h in rects:
        surface.paint_rect(x, y, w, h, color=BLACK)
    return len(rects)

