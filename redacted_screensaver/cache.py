"""Page-keyed cache of sampled word boxes."""

import logging
from collections import OrderedDict
from typing import Any, Dict, Optional

from .models import CachedBoxes, WordBox

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "redacted_boxes"
# Rough per-box memory estimate used for size accounting
BOX_SIZE_ESTIMATE = 100
DEFAULT_CACHE_SIZE = 4 * 1024 * 1024


def build_cache_key(
    document_id: Optional[str],
    page_id: Optional[Any],
    font_size: Optional[float],
    rotation: Optional[int]
) -> Optional[str]:
    """Build the cache key for a page and layout configuration.

    Args:
        document_id: Document identifier (usually its file path)
        page_id: Current page number or reflow position
        font_size: Font size in pixels, 0 when unknown
        rotation: Screen rotation mode

    Returns:
        Opaque key string, or None if the page cannot be identified
    """
    if not document_id or page_id is None:
        return None

    return (
        f"{CACHE_KEY_PREFIX}|{document_id}|{page_id}"
        f"|f{int(font_size or 0)}|r{int(rotation or 0)}"
    )


class PageBoxCache:
    """In-memory LRU store of sampled boxes with size accounting.

    Entries hold sampler output only, never selections, so a hit is
    interchangeable with sampling the page again.
    """

    def __init__(self, max_size: int = DEFAULT_CACHE_SIZE):
        self.max_size = max_size
        self.current_size = 0
        self._entries: "OrderedDict[str, CachedBoxes]" = OrderedDict()

    def get(self, key: str) -> Optional[CachedBoxes]:
        """Returns the cached entry for key, or None on a miss."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        self._entries.move_to_end(key)
        return entry

    def put(self, key: str, boxes: list[WordBox]) -> CachedBoxes:
        """Stores boxes under key, evicting least recently used entries."""
        entry = CachedBoxes(boxes=list(boxes), size=len(boxes) * BOX_SIZE_ESTIMATE)

        old = self._entries.pop(key, None)
        if old is not None:
            self.current_size -= old.size

        self._entries[key] = entry
        self.current_size += entry.size
        self._evict()
        return entry

    def _evict(self) -> None:
        # Never evict the entry that was just inserted
        while self.current_size > self.max_size and len(self._entries) > 1:
            key, entry = self._entries.popitem(last=False)
            self.current_size -= entry.size
            logger.debug(f"Evicted cached boxes for {key}")

    def clear(self) -> None:
        self._entries.clear()
        self.current_size = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def get_summary(self) -> Dict[str, Any]:
        """Returns cache state summary for logging and debugging."""
        return {
            "entries": len(self._entries),
            "current_size": self.current_size,
            "max_size": self.max_size,
        }

    def __repr__(self):
        return (
            f"<PageBoxCache "
            f"entries={len(self._entries)} "
            f"size={self.current_size}/{self.max_size}>"
        )
