"""In-memory response cache with TTL support.

Raw response bodies are stored under a fingerprint of the full request
identity. The identity includes the request URL with its ``access_token``
query parameter, so responses fetched with different tokens never share an
entry and rotating the token makes every existing entry unreachable.
"""

from __future__ import annotations

import hashlib
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .logger import get_logger

logger = get_logger("cache")


@dataclass
class CacheEntry:
    """A cached response body.

    Attributes:
        key: Fingerprint of the request identity.
        timestamp: Unix timestamp when the body was stored.
        body: Raw response body.
    """

    key: str
    timestamp: float
    body: Any

    def is_fresh(self, ttl: float, now: float) -> bool:
        """Check whether the entry is still within its TTL."""
        return self.timestamp + ttl > now


class ResponseCache:
    """Keyed, time-bounded store of raw response bodies.

    Features:
    - Runtime enable/disable and TTL changes
    - Read-through use: ``put`` always returns the body it was given
    - Explicit purge of expired entries (nothing is evicted on read)
    - Cache statistics tracking

    Example:
        ```python
        cache = ResponseCache(enabled=True, ttl_seconds=60)
        body = cache.get(url)
        if body is None:
            body = cache.put(url, fetch(url))
        ```
    """

    def __init__(
        self,
        enabled: bool = False,
        ttl_seconds: float = 300,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the response cache.

        Args:
            enabled: Whether bodies are stored and served.
            ttl_seconds: Seconds a stored body stays fresh.
            clock: Callable returning the current Unix time.
        """
        self._store: dict[str, CacheEntry] = {}
        self._enabled = enabled
        self._ttl = ttl_seconds
        self._clock = clock
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def configure(self, enabled: bool, ttl_seconds: float = 300) -> None:
        """Enable or disable caching and set the TTL.

        Args:
            enabled: If True, response bodies will be cached.
            ttl_seconds: Seconds a cached body stays fresh.
        """
        with self._lock:
            self._enabled = enabled
            self._ttl = ttl_seconds
        logger.info(
            "Response caching %s (ttl=%ss)",
            "enabled" if enabled else "disabled",
            ttl_seconds,
        )

    @staticmethod
    def fingerprint(identity: str) -> str:
        """Create the cache key for a request identity.

        Args:
            identity: Full request identity, e.g. ``"GET https://...?access_token=..."``.

        Returns:
            Hex digest used as the store key.
        """
        return hashlib.md5(identity.encode("utf-8"), usedforsecurity=False).hexdigest()

    def is_cached(self, identity: str) -> bool:
        """Check if a fresh body is stored for a request identity.

        Args:
            identity: Request identity.

        Returns:
            True if caching is enabled and a fresh entry exists.
        """
        if not self._enabled:
            return False
        with self._lock:
            entry = self._store.get(self.fingerprint(identity))
            return entry is not None and entry.is_fresh(self._ttl, self._clock())

    def get(self, identity: str) -> Any | None:
        """Get a cached body if available and fresh.

        Stale entries are left in place; use ``purge_expired`` to drop them.

        Args:
            identity: Request identity.

        Returns:
            Cached body or None if not found/expired.
        """
        with self._lock:
            if self.is_cached(identity):
                self._hits += 1
                return self._store[self.fingerprint(identity)].body
            self._misses += 1
            return None

    def put(self, identity: str, body: Any) -> Any:
        """Store a body if caching is enabled.

        Args:
            identity: Request identity.
            body: Raw response body.

        Returns:
            ``body`` unchanged, whether or not it was stored.
        """
        if self._enabled:
            key = self.fingerprint(identity)
            with self._lock:
                self._store[key] = CacheEntry(key=key, timestamp=self._clock(), body=body)
        return body

    def purge_expired(self) -> int:
        """Remove entries older than the TTL.

        Returns:
            Number of entries removed.
        """
        with self._lock:
            now = self._clock()
            expired = [
                key for key, entry in self._store.items() if entry.timestamp + self._ttl < now
            ]
            for key in expired:
                del self._store[key]

        if expired:
            logger.debug("Purged %d expired cache entries", len(expired))
        return len(expired)

    def clear(self) -> None:
        """Remove all entries and reset statistics."""
        with self._lock:
            self._store.clear()
            self._hits = 0
            self._misses = 0
        logger.debug("Response cache cleared")

    def __len__(self) -> int:
        return len(self._store)

    def stats(self) -> dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with cache statistics
        """
        total = self._hits + self._misses
        hit_rate = (self._hits / total * 100) if total > 0 else 0.0

        return {
            "enabled": self._enabled,
            "size": len(self._store),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate_percent": round(hit_rate, 2),
            "ttl_seconds": self._ttl,
        }
