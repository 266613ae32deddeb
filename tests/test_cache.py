"""Tests for data/cache.py — TTL + LRU cache."""

import re
from concurrent.futures import ThreadPoolExecutor

import pytest

from data.cache import TTLCache


class TestTTLCacheBasics:
    def test_set_then_get(self, cache):
        cache.set("a", "one")
        assert cache.get("a") == "one"

    def test_get_missing(self, cache):
        assert cache.get("nope") is None

    def test_overwrite_replaces_value(self, cache):
        cache.set("a", "one")
        cache.set("a", "two")
        assert cache.get("a") == "two"
        assert cache.size() == 1

    def test_falsy_values_are_cached(self, cache):
        cache.set("empty", "")
        assert cache.get("empty") == ""
        assert cache.has("empty")

    def test_len_matches_size(self, cache):
        cache.set("a", 1)
        cache.set("b", 2)
        assert len(cache) == cache.size() == 2

    def test_clear(self, cache):
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()
        assert cache.size() == 0
        assert cache.get("a") is None

    def test_rejects_bad_config(self):
        with pytest.raises(ValueError):
            TTLCache(max_size=0)
        with pytest.raises(ValueError):
            TTLCache(default_ttl=0)


class TestTTLCacheExpiry:
    def test_expired_get_returns_none_and_removes(self, clock):
        cache = TTLCache(max_size=10, default_ttl=0.1, clock=clock)
        cache.set("x", "v")
        assert cache.size() == 1
        clock.advance(0.15)
        assert cache.get("x") is None
        assert cache.size() == 0

    def test_entry_expires_exactly_at_deadline(self, cache, clock):
        cache.set("x", "v")
        clock.advance(10.0)
        assert cache.get("x") is None

    def test_entry_alive_just_before_deadline(self, cache, clock):
        cache.set("x", "v")
        clock.advance(9.99)
        assert cache.get("x") == "v"

    def test_custom_ttl_overrides_default(self, cache, clock):
        cache.set("short", "v", ttl=1.0)
        cache.set("long", "v")
        clock.advance(2.0)
        assert cache.get("short") is None
        assert cache.get("long") == "v"

    def test_get_does_not_extend_expiry(self, cache, clock):
        cache.set("x", "v")
        clock.advance(6.0)
        assert cache.get("x") == "v"
        clock.advance(6.0)
        assert cache.get("x") is None

    def test_set_resets_expiry(self, cache, clock):
        cache.set("x", "v1")
        clock.advance(8.0)
        cache.set("x", "v2")
        clock.advance(8.0)
        assert cache.get("x") == "v2"

    def test_has_removes_expired(self, cache, clock):
        cache.set("x", "v")
        assert cache.has("x")
        clock.advance(11.0)
        assert cache.size() == 1  # not swept yet
        assert not cache.has("x")
        assert cache.size() == 0

    def test_set_sweeps_expired_entries(self, cache, clock):
        cache.set("a", 1)
        cache.set("b", 2)
        clock.advance(11.0)
        cache.set("c", 3)
        assert cache.size() == 1
        assert cache.get("c") == 3

    def test_prune_returns_count(self, cache, clock):
        cache.set("a", 1, ttl=1.0)
        cache.set("b", 2, ttl=1.0)
        cache.set("c", 3)
        clock.advance(2.0)
        assert cache.prune() == 2
        assert cache.size() == 1

    def test_expired_entries_do_not_cause_eviction(self, cache, clock):
        cache.set("a", 1, ttl=1.0)
        cache.set("b", 2)
        cache.set("c", 3)
        clock.advance(2.0)
        cache.set("d", 4)
        # "a" was swept, so nothing live had to be evicted
        assert cache.has("b") and cache.has("c") and cache.has("d")
        assert cache.stats()["evictions"] == 0


class TestTTLCacheLRU:
    def test_capacity_scenario(self, clock):
        cache = TTLCache(max_size=2, default_ttl=1.0, clock=clock)
        cache.set("a", 1)
        clock.advance(0.01)
        cache.set("b", 2)
        clock.advance(0.01)
        cache.set("c", 3)
        assert cache.size() == 2
        assert cache.get("a") is None
        assert cache.get("b") == 2
        assert cache.get("c") == 3

    def test_never_exceeds_capacity(self, cache, clock):
        for i in range(20):
            cache.set(f"k{i}", i)
            clock.advance(0.1)
            assert cache.size() <= 3

    def test_evicts_least_recently_accessed(self, cache, clock):
        cache.set("a", 1)
        clock.advance(1.0)
        cache.set("b", 2)
        clock.advance(1.0)
        cache.set("c", 3)
        clock.advance(1.0)
        cache.get("a")  # a is now the most recent
        clock.advance(1.0)
        cache.set("d", 4)
        assert cache.has("a")
        assert not cache.has("b")
        assert cache.has("c") and cache.has("d")

    def test_has_does_not_refresh_recency(self, cache, clock):
        cache.set("a", 1)
        clock.advance(1.0)
        cache.set("b", 2)
        clock.advance(1.0)
        cache.set("c", 3)
        clock.advance(1.0)
        assert cache.has("a")
        cache.set("d", 4)
        assert not cache.has("a")

    def test_overwrite_at_capacity_does_not_evict(self, cache, clock):
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)
        clock.advance(1.0)
        cache.set("a", 10)
        assert cache.size() == 3
        assert cache.get("b") == 2
        assert cache.stats()["evictions"] == 0

    def test_overwrite_refreshes_recency(self, cache, clock):
        cache.set("a", 1)
        clock.advance(1.0)
        cache.set("b", 2)
        clock.advance(1.0)
        cache.set("c", 3)
        clock.advance(1.0)
        cache.set("a", 10)
        clock.advance(1.0)
        cache.set("d", 4)
        assert cache.get("a") == 10
        assert not cache.has("b")


class TestTTLCacheInvalidation:
    def test_invalidate_exact_key(self, cache):
        cache.set("notes/a.md", "a")
        cache.set("notes/a.md.bak", "b")
        assert cache.invalidate("notes/a.md") == 1
        assert not cache.has("notes/a.md")
        assert cache.has("notes/a.md.bak")

    def test_invalidate_missing_key(self, cache):
        assert cache.invalidate("missing") == 0

    def test_pattern_matching_one_key(self, cache):
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.invalidate_pattern(re.compile(r"^a$")) == 1
        assert cache.size() == 1
        assert cache.get("b") == 2

    def test_pattern_matching_nothing(self, cache):
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.invalidate_pattern(r"^zzz") == 0
        assert cache.size() == 2

    def test_pattern_string_uses_search(self, cache):
        cache.set("dir/one.md", 1)
        cache.set("dir/two.md", 2)
        cache.set("other.txt", 3)
        assert cache.invalidate_pattern(r"\.md$") == 2
        assert cache.get("other.txt") == 3

    def test_pattern_leaves_recency_of_others(self, cache, clock):
        cache.set("a", 1)
        clock.advance(1.0)
        cache.set("b", 2)
        clock.advance(1.0)
        cache.set("c", 3)
        cache.invalidate_pattern(r"^c$")
        cache.set("c2", 3)
        cache.set("d", 4)
        # "a" is still the oldest and goes first
        assert not cache.has("a")
        assert cache.has("b")

    def test_malformed_pattern_raises_before_touching_entries(self, cache):
        cache.set("a", 1)
        with pytest.raises(re.error):
            cache.invalidate_pattern("(unclosed")
        assert cache.get("a") == 1

    def test_invalidate_prefix(self, cache):
        cache.set("/ctx/patterns/x.md", 1)
        cache.set("/ctx/patterns/y.md", 2)
        cache.set("/ctx/STATE.md", 3)
        assert cache.invalidate_prefix("/ctx/patterns/") == 2
        assert cache.size() == 1


class TestTTLCacheStats:
    def test_hits_and_misses(self, cache):
        cache.set("a", 1)
        cache.get("a")
        cache.get("a")
        cache.get("b")
        stats = cache.stats()
        assert stats["hits"] == 2
        assert stats["misses"] == 1
        assert stats["size"] == 1
        assert stats["max_size"] == 3

    def test_expirations_counted(self, cache, clock):
        cache.set("a", 1)
        clock.advance(11.0)
        cache.get("a")
        assert cache.stats()["expirations"] == 1

    def test_evictions_counted(self, clock):
        cache = TTLCache(max_size=1, default_ttl=10.0, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.stats()["evictions"] == 1


class TestTTLCacheThreads:
    def test_concurrent_operations_stay_consistent(self):
        cache = TTLCache(max_size=8, default_ttl=600.0)
        workers, rounds = 8, 500

        def hammer(worker: int) -> int:
            gets = 0
            for i in range(rounds):
                key = f"w{worker}:{i % 20}"
                cache.set(key, i)
                cache.get(key)
                cache.get(f"w{(worker + 1) % workers}:{i % 20}")
                gets += 2
                if i % 50 == 0:
                    cache.invalidate_pattern(rf"^w{worker}:")
                assert cache.size() <= cache.max_size
            return gets

        with ThreadPoolExecutor(max_workers=workers) as pool:
            total_gets = sum(pool.map(hammer, range(workers)))

        stats = cache.stats()
        assert cache.size() <= cache.max_size
        assert stats["size"] == cache.size()
        assert stats["hits"] + stats["misses"] == total_gets
        assert stats["expirations"] == 0
        assert stats["evictions"] > 0
