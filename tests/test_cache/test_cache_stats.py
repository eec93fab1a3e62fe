"""Tests for cache entry and stats models."""

from invoicekit.cache.entry import CacheEntry, CacheStats
from invoicekit.types import RenderedDocument


class TestCacheEntry:
    def test_holds_document_by_reference(self):
        doc = RenderedDocument.uniform(1)
        entry = CacheEntry(key="k1", document=doc, size_bytes=50_000, last_accessed=1)
        assert entry.document is doc

    def test_last_accessed_is_mutable(self):
        entry = CacheEntry(key="k1", document=None, size_bytes=0, last_accessed=1)
        entry.last_accessed = 7
        assert entry.last_accessed == 7


class TestCacheStats:
    def test_defaults(self):
        stats = CacheStats()
        assert stats.hits == 0
        assert stats.misses == 0
        assert stats.entries == 0
        assert stats.evictions == 0

    def test_hit_rate_zero_when_no_requests(self):
        assert CacheStats().hit_rate == 0.0

    def test_hit_rate_calculation(self):
        stats = CacheStats(hits=3, misses=1)
        assert stats.hit_rate == 0.75
        assert stats.lookups == 4

    def test_summary(self):
        stats = CacheStats(entries=2, size_bytes=100_000, hits=2, misses=3)
        assert stats.summary() == ("97.7 KB", 2, "40.0%")

    def test_summary_empty(self):
        assert CacheStats().summary() == ("0 bytes", 0, "0.0%")
