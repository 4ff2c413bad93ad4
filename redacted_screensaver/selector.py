"""
Random selection of words and phrases to redact.

Lines are visited in a freshly shuffled order on every call. Within a line
each word may start a redacted phrase of one to three consecutive words.
A fill pass tops the selection up to the configured minimum.
"""

import logging
from typing import Iterator, Optional

from .line_grouper import group_boxes_by_line
from .models import LayoutParams, Line, WordBox
from .random_source import RandomSource, get_default_source, shuffle_in_place


logger = logging.getLogger(__name__)


def pick_phrase_length(roll: float, probs: dict[int, float]) -> int:
    """
    Map a uniform roll onto a phrase length.

    Args:
        roll: Uniform float in [0, 1)
        probs: Phrase length -> probability

    Returns:
        Phrase length in words
    """
    lengths = sorted(probs)
    cumulative = 0.0
    for length in lengths:
        cumulative += probs[length]
        if roll < cumulative:
            return length
    return lengths[-1]


def _unselected(lines: list[Line], chosen: set[int]) -> Iterator[WordBox]:
    for line in lines:
        for box in line.boxes:
            if id(box) not in chosen:
                yield box


def select_redactions(
    boxes: list[WordBox],
    tolerance: float,
    params: Optional[LayoutParams] = None,
    random_source: Optional[RandomSource] = None
) -> list[WordBox]:
    """
    Choose the word boxes to cover on a page.

    Args:
        boxes: All sampled word boxes for the page
        tolerance: Line grouping tolerance in pixels
        params: Layout parameters
        random_source: Source of uniform floats (process source by default)

    Returns:
        Selected boxes, in selection order
    """
    if not boxes:
        return []

    params = params or LayoutParams()
    source = random_source or get_default_source()

    lines = group_boxes_by_line(boxes, tolerance)
    total = sum(len(line.boxes) for line in lines)
    cap = min(params.max_redactions, total)

    selected: list[WordBox] = []
    chosen: set[int] = set()

    def take(box: WordBox) -> None:
        selected.append(box)
        chosen.add(id(box))

    shuffled = list(lines)
    shuffle_in_place(shuffled, source)

    for line in shuffled:
        if len(selected) >= cap:
            break

        line_boxes = line.boxes
        i = 0
        while i < len(line_boxes) and len(selected) < cap:
            if source.next_float() < params.redaction_chance:
                length = pick_phrase_length(source.next_float(), params.phrase_length_probs)
                length = min(length, len(line_boxes) - i)
                for box in line_boxes[i:i + length]:
                    if len(selected) >= cap:
                        break
                    take(box)
                i += length
            else:
                i += 1

    target = min(params.min_redactions, cap)

    if len(selected) < target:
        logger.debug(
            f"Only {len(selected)} redactions after phrase pass, "
            f"filling towards {params.min_redactions}"
        )
        # Fill pass walks the original line order, not the shuffled one
        for box in list(_unselected(lines, chosen)):
            if len(selected) >= target:
                break
            if source.next_float() < params.fill_chance:
                take(box)

    if len(selected) < target and total >= params.min_redactions:
        for box in list(_unselected(lines, chosen)):
            if len(selected) >= target:
                break
            take(box)

    logger.debug(f"Selected {len(selected)} of {total} word boxes for redaction")
    return selected
