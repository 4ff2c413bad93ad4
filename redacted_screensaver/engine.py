"""
Redaction layout engine.

Runs the per-page pipeline: sample word boxes (or reuse cached ones),
select redactions, merge them into bars, and paint the bars. Every step
degrades to "fewer or no redactions" instead of raising into the host.
"""

import logging
from typing import Optional

from .cache import PageBoxCache, build_cache_key
from .line_grouper import calculate_line_tolerance
from .merger import merge_redactions
from .models import LayoutParams, PageContext, PageLayout
from .random_source import RandomSource
from .render import RenderSurface, paint_redactions
from .sampler import WordLookup, sample_word_boxes
from .selector import select_redactions


logger = logging.getLogger(__name__)


class RedactionLayoutEngine:
    """
    Lays out redaction bars for the page shown under a screensaver.

    Args:
        params: Layout parameters
        cache: Page-box cache; a private one is created if omitted
        random_source: Source of uniform floats for selection
    """

    def __init__(
        self,
        params: Optional[LayoutParams] = None,
        cache: Optional[PageBoxCache] = None,
        random_source: Optional[RandomSource] = None
    ):
        self.params = params or LayoutParams()
        self.cache = cache if cache is not None else PageBoxCache()
        self.random_source = random_source

    def calculate_redactions(
        self,
        context: PageContext,
        lookup: WordLookup
    ) -> PageLayout:
        """
        Compute the redaction bars for a page.

        Args:
            context: The page being shown
            lookup: Word-lookup collaborator

        Returns:
            PageLayout with the merged bars (empty if nothing was found)
        """
        layout = PageLayout(page_id=context.page_id)

        cache_key = build_cache_key(
            context.document_id,
            context.page_id,
            context.font_size,
            context.rotation
        )
        if cache_key is None:
            logger.warning("Cannot identify the current page, skipping redactions")
            layout.error = "no cache key"
            return layout

        cached = self.cache.get(cache_key)
        if cached is not None:
            boxes = cached.boxes
            layout.from_cache = True
            logger.debug(f"Using {len(boxes)} cached boxes for {cache_key}")
        else:
            boxes = sample_word_boxes(
                lookup,
                context.document,
                context.width,
                context.height,
                context.font_size,
                self.params
            )
            if boxes:
                self.cache.put(cache_key, boxes)

        layout.sampled_count = len(boxes)

        if not boxes:
            logger.warning("No word boxes found")
            return layout

        tolerance = calculate_line_tolerance(
            context.font_size, self.params.default_line_tolerance
        )
        selected = select_redactions(boxes, tolerance, self.params, self.random_source)
        layout.redactions = merge_redactions(
            selected, tolerance, self.params.merge_gap_tolerance
        )

        logger.info(
            f"Page {context.page_id}: {len(selected)} words redacted "
            f"in {len(layout.redactions)} bars"
        )
        return layout

    def paint(self, surface: RenderSurface, layout: PageLayout) -> int:
        """
        Paint a layout onto a surface.

        Returns:
            Number of rectangles painted (0 on failure)
        """
        try:
            return paint_redactions(surface, layout.redactions, self.params)
        except Exception as e:
            logger.error(f"Failed to paint redactions: {e}", exc_info=True)
            return 0
