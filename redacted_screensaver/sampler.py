"""
Grid sampling of word boxes from a rendered page.

The document renderer only answers "which word is at this point?", so the
page is sampled on a grid sized from the current font, and every distinct
word box that comes back is recorded. Sampling is best-effort: a lookup
that fails is treated as empty space.
"""

import logging
import math
from typing import Any, Callable, Optional

from .exceptions import WordLookupError
from .models import LayoutParams, WordBox


logger = logging.getLogger(__name__)

# Collaborator signature: lookup(document, (x, y)) -> WordBox | None
WordLookup = Callable[[Any, tuple[int, int]], Optional[WordBox]]

MIN_STEP_X = 60
MIN_STEP_Y = 30
STEP_X_FONT_RATIO = 6
STEP_Y_FONT_RATIO = 3


def calculate_grid_steps(font_size: float) -> tuple[int, int]:
    """
    Grid spacing for a given font size.

    Args:
        font_size: Font size in pixels

    Returns:
        Tuple of (step_x, step_y) in pixels
    """
    step_x = max(MIN_STEP_X, math.floor(font_size * STEP_X_FONT_RATIO))
    step_y = max(MIN_STEP_Y, math.floor(font_size * STEP_Y_FONT_RATIO))
    return (step_x, step_y)


def _lookup_word(lookup: WordLookup, document: Any, point: tuple[int, int]) -> Optional[WordBox]:
    """Run one lookup, folding every failure into None."""
    try:
        word = lookup(document, point)
    except WordLookupError as e:
        logger.debug(f"Word lookup failed at {point}: {e}")
        return None
    except Exception as e:
        # Includes ValueError from degenerate boxes built by the collaborator
        logger.debug(f"Unexpected lookup error at {point}: {e}")
        return None

    if word is None:
        return None
    if not isinstance(word, WordBox) or not (word.w > 0 and word.h > 0):
        logger.debug(f"Malformed lookup result at {point}: {word!r}")
        return None
    return word


def sample_word_boxes(
    lookup: WordLookup,
    document: Any,
    width: int,
    height: int,
    font_size: Optional[float] = None,
    params: Optional[LayoutParams] = None
) -> list[WordBox]:
    """
    Look up words on a grid of screen points and collect distinct word boxes.

    Args:
        lookup: Word-lookup collaborator
        document: Opaque document handle passed through to the lookup
        width: Viewport width in pixels
        height: Viewport height in pixels
        font_size: Current font size in pixels (falls back to the default)
        params: Layout parameters

    Returns:
        Distinct word boxes in sampling order (rows top to bottom,
        left to right), truncated to params.max_cached_boxes
    """
    params = params or LayoutParams()
    step_x, step_y = calculate_grid_steps(font_size or params.default_font_size)

    boxes: list[WordBox] = []
    seen: set[tuple[int, int, int, int]] = set()

    for y in range(0, int(height) + 1, step_y):
        for x in range(0, int(width) + 1, step_x):
            word = _lookup_word(lookup, document, (x, y))
            if word is None:
                continue

            key = word.rounded_key
            if key in seen:
                continue
            seen.add(key)
            boxes.append(word)

    if len(boxes) > params.max_cached_boxes:
        logger.warning(
            f"Page has {len(boxes)} words, limiting to {params.max_cached_boxes}"
        )
        boxes = boxes[:params.max_cached_boxes]

    logger.debug(
        f"Sampled {len(boxes)} word boxes on a {width}x{height} grid "
        f"(step {step_x}x{step_y})"
    )
    return boxes
