"""Tests for cache key construction and the page-box cache."""

from redacted_screensaver.cache import PageBoxCache, build_cache_key
from redacted_screensaver.models import WordBox


def boxes(n):
    return [WordBox(x=i * 10, y=0, w=5, h=5) for i in range(n)]


# ── Keys ─────────────────────────────────────────────────────────────

def test_key_format():
    key = build_cache_key("/books/novel.epub", 12, 22, 1)
    assert key == "redacted_boxes|/books/novel.epub|12|f22|r1"


def test_key_defaults_missing_font_and_rotation():
    assert build_cache_key("doc", 3, None, None) == "redacted_boxes|doc|3|f0|r0"


def test_key_truncates_fractional_font_size():
    assert build_cache_key("doc", 3, 22.9, 0) == "redacted_boxes|doc|3|f22|r0"


def test_key_changes_with_every_component():
    base = build_cache_key("doc", 1, 20, 0)
    assert build_cache_key("other", 1, 20, 0) != base
    assert build_cache_key("doc", 2, 20, 0) != base
    assert build_cache_key("doc", 1, 21, 0) != base
    assert build_cache_key("doc", 1, 20, 90) != base


def test_key_requires_document_and_page():
    assert build_cache_key(None, 1, 20, 0) is None
    assert build_cache_key("", 1, 20, 0) is None
    assert build_cache_key("doc", None, 20, 0) is None


def test_page_zero_is_a_valid_page():
    assert build_cache_key("doc", 0, 20, 0) == "redacted_boxes|doc|0|f20|r0"


# ── Storage ──────────────────────────────────────────────────────────

def test_miss_returns_none():
    assert PageBoxCache().get("missing") is None


def test_put_then_get():
    cache = PageBoxCache()
    stored = boxes(3)
    cache.put("k", stored)

    entry = cache.get("k")
    assert entry.boxes == stored
    assert entry.size == 300
    assert "k" in cache and len(cache) == 1


def test_replacing_an_entry_updates_size():
    cache = PageBoxCache()
    cache.put("k", boxes(3))
    cache.put("k", boxes(1))

    assert cache.current_size == 100
    assert len(cache) == 1


def test_least_recently_used_is_evicted():
    cache = PageBoxCache(max_size=300)
    cache.put("a", boxes(1))
    cache.put("b", boxes(1))
    cache.get("a")  # refresh a
    cache.put("c", boxes(2))

    assert "b" not in cache
    assert "a" in cache and "c" in cache
    assert cache.current_size == 300


def test_oversized_entry_is_kept_alone():
    cache = PageBoxCache(max_size=100)
    cache.put("a", boxes(1))
    cache.put("big", boxes(5))

    assert len(cache) == 1
    assert "big" in cache


def test_clear_and_summary():
    cache = PageBoxCache(max_size=1000)
    cache.put("a", boxes(2))
    assert cache.get_summary() == {"entries": 1, "current_size": 200, "max_size": 1000}

    cache.clear()
    assert cache.get_summary()["entries"] == 0
    assert cache.current_size == 0
