"""
Line grouping for sampled word boxes.

Clusters boxes into horizontal text lines using a vertical tolerance.
Clustering is first-fit: a box joins the first existing line whose
reference Y is close enough, even if a later line would be closer. The
first box seen on a visual row fixes that row's reference Y.
"""

import math
from typing import Iterable, Optional

from .models import Line, WordBox


DEFAULT_LINE_TOLERANCE = 5
MIN_LINE_TOLERANCE = 3
FONT_TOLERANCE_RATIO = 0.25


def calculate_line_tolerance(
    font_size: Optional[float] = None,
    default: int = DEFAULT_LINE_TOLERANCE
) -> int:
    """
    Vertical distance (pixels) within which two boxes share a line.

    Args:
        font_size: Current font size in pixels, if known
        default: Tolerance used when no font metrics are available

    Returns:
        Tolerance in pixels
    """
    if not font_size:
        return default
    return max(MIN_LINE_TOLERANCE, math.floor(font_size * FONT_TOLERANCE_RATIO))


def group_boxes_by_line(
    boxes: Iterable[WordBox],
    tolerance: float
) -> list[Line]:
    """
    Group word boxes into lines based on their Y coordinate.

    Args:
        boxes: Word boxes in any order
        tolerance: Max absolute Y difference to a line's reference Y

    Returns:
        Lines in creation order, each with boxes sorted by ascending X
    """
    lines: list[Line] = []

    for box in boxes:
        for line in lines:
            if abs(line.reference_y - box.y) <= tolerance:
                line.boxes.append(box)
                break
        else:
            lines.append(Line(reference_y=box.y, boxes=[box]))

    for line in lines:
        line.sort()

    return lines
