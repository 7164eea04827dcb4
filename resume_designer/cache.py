"""Single-value TTL cache with an injectable clock."""

from __future__ import annotations

import logging
import time
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheEntry(Generic[T]):
    """A cached value and the clock reading at which it was stored."""

    def __init__(self, value: T, created_at: float):
        self.value = value
        self.created_at = created_at
        self.hits = 0

    def age(self, now: float) -> float:
        return now - self.created_at

    def touch(self):
        """Record a cache hit."""
        self.hits += 1


class TTLCache(Generic[T]):
    """
    Holds one value for ``ttl_seconds``.

    The clock is injected so tests can move time forward deterministically.
    Concurrent refreshes are not de-duplicated: two callers that observe an
    expired entry at the same moment will both call the loader.
    """

    def __init__(self, ttl_seconds: float = 300, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl_seconds
        self._clock = clock
        self._entry: Optional[CacheEntry[T]] = None
        self._hits = 0
        self._misses = 0
        self._refreshes = 0
        self._failures = 0

    def is_fresh(self) -> bool:
        if self._entry is None:
            return False
        return self._entry.age(self._clock()) < self.ttl

    def get(self) -> Optional[T]:
        """Return the cached value if present and not expired."""
        if not self.is_fresh():
            self._misses += 1
            return None
        assert self._entry is not None
        self._entry.touch()
        self._hits += 1
        return self._entry.value

    def set(self, value: T) -> None:
        self._entry = CacheEntry(value, self._clock())

    def invalidate(self) -> None:
        """Drop the cached value; the next read goes to the loader."""
        self._entry = None

    async def get_or_refresh(self, loader: Callable[[], Awaitable[T]], fallback: T) -> T:
        """
        Return the cached value, calling ``loader`` on a miss or expiry.

        Never raises: if the loader fails, the still-fresh cached value is
        returned, otherwise ``fallback``.
        """
        cached = self.get()
        if cached is not None:
            return cached

        self._refreshes += 1
        try:
            value = await loader()
        except Exception as e:
            self._failures += 1
            logger.warning(f"Cache refresh failed: {e}")
            if self.is_fresh():
                assert self._entry is not None
                return self._entry.value
            return fallback

        self.set(value)
        return value

    def stats(self) -> Dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dictionary with cache stats
        """
        total_requests = self._hits + self._misses
        return {
            "hits": self._hits,
            "misses": self._misses,
            "refreshes": self._refreshes,
            "failures": self._failures,
            "hit_rate": self._hits / total_requests if total_requests > 0 else 0.0,
            "fresh": self.is_fresh(),
        }
