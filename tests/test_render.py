"""Tests for projecting and painting redaction bars."""

import numpy as np

from redacted_screensaver.models import LayoutParams, WordBox
from redacted_screensaver.render import (
    ImageSurface,
    paint_redactions,
    project_box,
    project_redactions,
)


class RecordingSurface:
    width = 100
    height = 100

    def __init__(self):
        self.calls = []

    def paint_rect(self, x, y, w, h, color=(0, 0, 0)):
        self.calls.append((x, y, w, h, color))


# ── Projection ───────────────────────────────────────────────────────

def test_padding_is_truncated_at_top_left():
    rect = project_box(WordBox(x=0, y=0, w=5, h=5), 100, 100, 2, 1)
    assert rect == (0, 0, 7, 6)


def test_padding_applied_on_all_sides_inside_surface():
    rect = project_box(WordBox(x=10, y=10, w=5, h=5), 100, 100, 2, 1)
    assert rect == (8, 9, 9, 7)


def test_clipped_at_bottom_right():
    rect = project_box(WordBox(x=96, y=95, w=10, h=10), 100, 100, 2, 1)
    assert rect == (94, 94, 6, 6)


def test_fully_outside_is_skipped():
    assert project_box(WordBox(x=150, y=10, w=5, h=5), 100, 100, 2, 1) is None
    assert project_box(WordBox(x=10, y=102, w=5, h=5), 100, 100, 2, 1) is None


def test_projection_drops_only_degenerate():
    boxes = [WordBox(x=10, y=10, w=5, h=5), WordBox(x=500, y=10, w=5, h=5)]
    assert project_redactions(boxes, 100, 100) == [(8, 9, 9, 7)]


# ── Painting ─────────────────────────────────────────────────────────

def test_paint_sends_black_rectangles():
    surface = RecordingSurface()
    count = paint_redactions(surface, [WordBox(x=0, y=0, w=5, h=5)], LayoutParams())

    assert count == 1
    assert surface.calls == [(0, 0, 7, 6, (0, 0, 0))]


def test_image_surface_fills_pixels():
    image = np.full((20, 30, 3), 255, dtype=np.uint8)
    surface = ImageSurface(image)

    painted = paint_redactions(surface, [WordBox(x=10, y=5, w=4, h=3)])

    assert painted == 1
    assert surface.width == 30 and surface.height == 20
    assert (image[4:9, 8:16] == 0).all()
    assert (image[3, 8:16] == 255).all()
    assert (image[4:9, 16] == 255).all()


def test_image_surface_grayscale():
    image = np.full((10, 10), 255, dtype=np.uint8)
    ImageSurface(image).paint_rect(2, 2, 3, 3)

    assert (image[2:5, 2:5] == 0).all()
    assert image[0, 0] == 255
