"""In-memory result cache for search payloads."""

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from ..constants import DEFAULT_CACHE_MAX_ENTRIES, DEFAULT_CACHE_TTL
from .search_models import CacheKey, SearchPayload

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """Cached payload with its creation time."""

    key: CacheKey
    payload: SearchPayload
    timestamp: float


class ResultCache:
    """Time- and size-bounded cache of search payloads.

    Entries older than ``ttl`` read as misses but keep their slot until the
    insertion-order (FIFO) eviction removes them. Re-putting a key replaces its
    payload and timestamp without moving it in the eviction order.
    """

    def __init__(
        self,
        max_entries: int = DEFAULT_CACHE_MAX_ENTRIES,
        ttl: float = DEFAULT_CACHE_TTL,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize result cache.

        Args:
            max_entries: Maximum number of entries held
            ttl: Age in seconds at which an entry becomes stale
            clock: Time source returning seconds
        """
        self.max_entries = max_entries
        self.ttl = ttl
        self._clock = clock
        self._entries: "OrderedDict[CacheKey, CacheEntry]" = OrderedDict()
        self._hits = 0
        self._misses = 0

    def get(self, key: CacheKey) -> Optional[SearchPayload]:
        """Get cached payload.

        Args:
            key: Cache key

        Returns:
            Cached payload if present and fresh, None otherwise
        """
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            logger.debug(f"Cache miss for {key}")
            return None

        if self._clock() - entry.timestamp >= self.ttl:
            self._misses += 1
            logger.debug(f"Cache entry for {key} is stale")
            return None

        self._hits += 1
        logger.debug(f"Cache hit for {key}")
        return entry.payload

    def put(self, key: CacheKey, payload: SearchPayload) -> None:
        """Store payload in cache.

        Args:
            key: Cache key
            payload: Payload to cache
        """
        self._entries[key] = CacheEntry(key=key, payload=payload, timestamp=self._clock())

        if len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted oldest cache entry {evicted}")

    def clear(self) -> None:
        """Remove every entry."""
        self._entries.clear()

    def stats(self) -> Dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary of cache statistics
        """
        now = self._clock()
        stale = sum(1 for e in self._entries.values() if now - e.timestamp >= self.ttl)
        return {
            "entries": len(self._entries),
            "stale_entries": stale,
            "max_entries": self.max_entries,
            "ttl": self.ttl,
            "hits": self._hits,
            "misses": self._misses,
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


__all__ = ["CacheEntry", "ResultCache"]
