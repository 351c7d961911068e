"""
Tests for the TTL response cache.
"""

from datetime import timedelta

from storefront.services.cache import CacheEntry, CacheManager

TTL = timedelta(minutes=5)


class TestCacheEntry:
    def test_live_strictly_before_ttl(self, clock):
        entry = CacheEntry(data={"a": 1}, stored_at=clock())

        assert entry.is_live(clock() + timedelta(seconds=299), TTL)
        assert not entry.is_live(clock() + TTL, TTL)


class TestCacheManager:
    def test_keys_ignore_variable_order(self):
        cache = CacheManager()

        first = cache.generate_key("query Q { x }", {"a": 1, "b": 2})
        second = cache.generate_key("query Q { x }", {"b": 2, "a": 1})

        assert first == second
        assert first.startswith("gql_")

    def test_keys_differ_by_operation_and_variables(self):
        cache = CacheManager()
        base = cache.generate_key("query Q { x }", {"a": 1})

        assert cache.generate_key("query Q { y }", {"a": 1}) != base
        assert cache.generate_key("query Q { x }", {"a": 2}) != base
        assert cache.generate_key("query Q { x }") == cache.generate_key(
            "query Q { x }", {}
        )

    async def test_get_respects_requested_ttl(self, clock):
        cache = CacheManager(clock=clock)
        await cache.set("k", {"v": 1}, TTL)

        clock.advance(minutes=2)

        assert await cache.get("k", TTL) == {"v": 1}
        assert await cache.get("k", timedelta(minutes=1)) is None

    async def test_zero_ttl_neither_stores_nor_reads(self, clock):
        cache = CacheManager(clock=clock)

        await cache.set("k", {"v": 1}, timedelta(0))
        assert len(cache) == 0

        await cache.set("k", {"v": 1}, TTL)
        assert await cache.get("k", timedelta(0)) is None

    async def test_set_replaces_entry_and_restarts_age(self, clock):
        cache = CacheManager(clock=clock)
        await cache.set("k", "old", TTL)
        clock.advance(minutes=4)
        await cache.set("k", "new", TTL)
        clock.advance(minutes=4)

        assert await cache.get("k", TTL) == "new"

    async def test_evicts_oldest_when_full(self, clock):
        cache = CacheManager(max_size=2, clock=clock)
        await cache.set("a", 1, TTL)
        clock.advance(seconds=1)
        await cache.set("b", 2, TTL)
        clock.advance(seconds=1)
        await cache.set("c", 3, TTL)

        assert len(cache) == 2
        assert await cache.get("a", TTL) is None
        assert await cache.get("c", TTL) == 3
        assert cache.get_stats().evictions == 1

    async def test_eviction_follows_write_time_not_reads(self, clock):
        cache = CacheManager(max_size=2, clock=clock)
        await cache.set("a", 1, TTL)
        clock.advance(seconds=1)
        await cache.set("b", 2, TTL)
        await cache.get("a", TTL)
        clock.advance(seconds=1)
        await cache.set("c", 3, TTL)

        assert await cache.get("a", TTL) is None
        assert await cache.get("b", TTL) == 2

    async def test_clear(self, clock):
        cache = CacheManager(clock=clock)
        await cache.set("a", 1, TTL)
        await cache.set("b", 2, TTL)

        assert await cache.clear() == 2
        assert len(cache) == 0

    async def test_stats_track_hits_and_misses(self, clock):
        cache = CacheManager(clock=clock)
        await cache.set("a", 1, TTL)
        await cache.get("a", TTL)
        await cache.get("missing", TTL)

        stats = cache.get_stats()

        assert (stats.hits, stats.misses) == (1, 1)
        assert stats.to_dict()["hit_rate"] == "50.00%"
