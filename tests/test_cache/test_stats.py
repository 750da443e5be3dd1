"""Tests for the cache statistics model."""

from shardcache.cache.stats import CacheStats


class TestCacheStats:
    def test_defaults(self):
        stats = CacheStats()
        assert stats.hits == 0
        assert stats.misses == 0
        assert stats.entries == 0
        assert stats.evictions == 0
        assert stats.size_mb == 0.0

    def test_hit_rate_zero_when_no_requests(self):
        assert CacheStats().hit_rate == 0.0

    def test_hit_rate_calculation(self):
        stats = CacheStats(hits=3, misses=1)
        assert stats.hit_rate == 0.75

    def test_hit_rate_all_hits(self):
        stats = CacheStats(hits=10, misses=0)
        assert stats.hit_rate == 1.0
