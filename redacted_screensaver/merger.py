"""
Merging of selected word boxes into redaction bars.

Selected words that sit next to each other on a line are covered by a
single rectangle, so a redacted phrase reads as one bar instead of a row
of separate blocks. Boxes separated by more than the gap tolerance keep
their own bars.
"""

from typing import Optional

from .line_grouper import group_boxes_by_line
from .models import WordBox


DEFAULT_MERGE_GAP_TOLERANCE = 20


def horizontal_gap(left: WordBox, right: WordBox) -> float:
    """Distance from the right edge of `left` to the left edge of `right`."""
    return right.x - left.right


def extend_box(merged: WordBox, box: WordBox) -> WordBox:
    """
    Grow `merged` rightwards to cover `box`.

    The origin stays where the seed box put it; only the right edge and
    the height can grow.
    """
    right_edge = max(merged.right, box.right)
    text = f"{merged.text} {box.text}".strip() if box.text else merged.text
    return WordBox(
        x=merged.x,
        y=merged.y,
        w=right_edge - merged.x,
        h=max(merged.h, box.h),
        text=text,
    )


def merge_line(
    boxes: list[WordBox],
    gap_tolerance: float = DEFAULT_MERGE_GAP_TOLERANCE
) -> list[WordBox]:
    """
    Merge the boxes of a single line.

    Args:
        boxes: Boxes on one line, sorted by ascending X
        gap_tolerance: Max gap (pixels) bridged by a single bar

    Returns:
        Covering rectangles, left to right
    """
    merged: list[WordBox] = []
    current: Optional[WordBox] = None

    for box in boxes:
        if current is None:
            current = box
        elif horizontal_gap(current, box) <= gap_tolerance:
            current = extend_box(current, box)
        else:
            merged.append(current)
            current = box

    if current is not None:
        merged.append(current)

    return merged


def merge_redactions(
    boxes: list[WordBox],
    tolerance: float,
    gap_tolerance: float = DEFAULT_MERGE_GAP_TOLERANCE
) -> list[WordBox]:
    """
    Merge horizontally adjacent redactions into covering rectangles.

    Args:
        boxes: Selected boxes in any order
        tolerance: Line grouping tolerance in pixels
        gap_tolerance: Max gap (pixels) bridged by a single bar

    Returns:
        Covering rectangles, grouped by line

    Merging the result again only leaves it unchanged while each bar's y
    stays within `tolerance` of its first-pass line; first-fit regrouping
    can otherwise join bars that came from different lines.
    """
    if not boxes:
        return []

    merged: list[WordBox] = []
    for line in group_boxes_by_line(boxes, tolerance):
        merged.extend(merge_line(line.boxes, gap_tolerance))
    return merged
