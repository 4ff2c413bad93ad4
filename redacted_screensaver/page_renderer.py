"""
Page rendering and image output for the preview tool.

Renders PDF pages into the BGR arrays painted by ImageSurface and saves the
painted result. Kept apart from render.py so the layout engine never pulls
in PyMuPDF or OpenCV.
"""

import logging
from pathlib import Path

import cv2
import fitz
import numpy as np
from PIL import Image


logger = logging.getLogger(__name__)


def render_page_to_image(page: fitz.Page, dpi: int = 150) -> np.ndarray:
    """
    Render a PyMuPDF page to a numpy array (BGR format for OpenCV).

    Args:
        page: PyMuPDF page object
        dpi: Resolution for rendering

    Returns:
        numpy array in BGR format
    """
    zoom = dpi / 72.0
    pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)

    img = np.frombuffer(pix.samples, dtype=np.uint8).reshape(
        pix.height, pix.width, pix.n
    )

    if pix.n == 1:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)
    if pix.n == 4:
        return cv2.cvtColor(img, cv2.COLOR_RGBA2BGR)
    return cv2.cvtColor(img, cv2.COLOR_RGB2BGR)


def save_image(image: np.ndarray, output_path: Path, format: str = "PNG") -> bool:
    """
    Save a rendered page to disk.

    Args:
        image: BGR image array
        output_path: Path to save to
        format: Image format (PNG, JPEG, etc.)

    Returns:
        True if successful, False otherwise
    """
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)

        if image.ndim == 3 and image.shape[2] == 3:
            image = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)

        Image.fromarray(image).save(str(output_path), format=format)
        return True
    except (OSError, ValueError) as e:
        logger.error(f"Failed to save {output_path}: {e}")
        return False
