"""Tests for the response cache."""

from __future__ import annotations

import pytest

from groupme_api.core.cache import CacheEntry, ResponseCache

URL = "GET https://api.groupme.com/v3/groups?page=1&access_token=abc"


class TestResponseCache:
    """Tests for ResponseCache."""

    def test_disabled_by_default(self):
        """A new cache stores nothing until enabled."""
        cache = ResponseCache()

        assert cache.enabled is False
        assert cache.put(URL, "body") == "body"
        assert cache.is_cached(URL) is False
        assert cache.get(URL) is None
        assert len(cache) == 0

    def test_put_and_get_within_ttl(self, cache, clock):
        """A stored body is served until the TTL elapses."""
        assert cache.put(URL, '{"a": 1}') == '{"a": 1}'
        clock.advance(59)

        assert cache.is_cached(URL) is True
        assert cache.get(URL) == '{"a": 1}'

    def test_expired_after_ttl(self, cache, clock):
        """Entries are stale once timestamp + ttl is not in the future."""
        cache.put(URL, "body")
        clock.advance(60)

        assert cache.is_cached(URL) is False
        assert cache.get(URL) is None

    def test_get_does_not_purge(self, cache, clock):
        """Reading a stale entry leaves it in the store."""
        cache.put(URL, "body")
        clock.advance(120)

        assert cache.get(URL) is None
        assert len(cache) == 1

    def test_purge_expired(self, cache, clock):
        """purge_expired removes only entries older than the TTL."""
        cache.put(URL, "old")
        clock.advance(61)
        cache.put(URL + "&page=2", "new")

        assert cache.purge_expired() == 1
        assert len(cache) == 1
        assert cache.get(URL + "&page=2") == "new"

    def test_purge_keeps_entry_exactly_at_ttl(self, cache, clock):
        """An entry whose age equals the TTL is stale but not purged."""
        cache.put(URL, "body")
        clock.advance(60)

        assert cache.is_cached(URL) is False
        assert cache.purge_expired() == 0

    def test_clear(self, cache):
        """clear removes every entry and resets statistics."""
        cache.put(URL, "a")
        cache.get(URL)
        cache.clear()

        assert len(cache) == 0
        assert cache.stats()["hits"] == 0

    def test_configure_disables_lookups(self, cache):
        """Disabling the cache hides existing entries."""
        cache.put(URL, "body")
        cache.configure(False)

        assert cache.is_cached(URL) is False

    def test_configure_changes_ttl(self, cache, clock):
        """A longer TTL keeps existing entries fresh longer."""
        cache.put(URL, "body")
        cache.configure(True, ttl_seconds=600)
        clock.advance(300)

        assert cache.is_cached(URL) is True
        assert cache.ttl_seconds == 600

    def test_fingerprint_is_deterministic(self):
        """Same identity, same key; the token is part of the identity."""
        other_token = URL.replace("abc", "xyz")

        assert ResponseCache.fingerprint(URL) == ResponseCache.fingerprint(URL)
        assert ResponseCache.fingerprint(URL) != ResponseCache.fingerprint(other_token)
        assert len(ResponseCache.fingerprint(URL)) == 32

    def test_different_tokens_do_not_share_entries(self, cache):
        cache.put(URL, "body")

        assert cache.is_cached(URL.replace("abc", "xyz")) is False

    def test_stats(self, cache):
        """Hits and misses are counted."""
        cache.put(URL, "body")
        cache.get(URL)
        cache.get("GET other")

        stats = cache.stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate_percent"] == pytest.approx(50.0)
        assert stats["size"] == 1


class TestCacheEntry:
    """Tests for CacheEntry."""

    def test_is_fresh(self):
        entry = CacheEntry(key="k", timestamp=100.0, body="b")

        assert entry.is_fresh(ttl=10, now=109.9) is True
        assert entry.is_fresh(ttl=10, now=110.0) is False
