"""In-memory TTL cache with an LRU size bound.

Entries expire after a per-entry TTL and the store never holds more than
``max_size`` entries once ``set`` returns. When a new key arrives at capacity
the least recently accessed entry is evicted. Expired entries are removed
lazily: on access through ``get``/``has`` and by the sweep that runs at the
start of every ``set``.
"""

import re
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import structlog

log = structlog.get_logger(__name__)

V = TypeVar("V")


@dataclass
class CacheEntry(Generic[V]):
    value: V
    expires_at: float
    last_accessed: float


class TTLCache(Generic[V]):
    """Expiring, size-bounded cache with least-recently-used eviction.

    Entries are kept in recency order (oldest access first), so eviction pops
    the head instead of scanning. Every operation holds the instance lock for
    its whole critical section.
    """

    def __init__(
        self,
        max_size: int = 1000,
        default_ttl: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        if default_ttl <= 0:
            raise ValueError(f"default_ttl must be positive, got {default_ttl}")
        self.max_size = max_size
        self.default_ttl = default_ttl
        self._clock = clock
        self._store: OrderedDict[str, CacheEntry[V]] = OrderedDict()
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._expirations = 0

    def set(self, key: str, value: V, ttl: float | None = None) -> None:
        """Store a value. ``ttl`` (seconds) overrides the default for this entry."""
        with self._lock:
            self._prune_locked()
            now = self._clock()
            if key not in self._store and len(self._store) >= self.max_size:
                self._evict_lru_locked()
            self._store[key] = CacheEntry(
                value=value,
                expires_at=now + (ttl if ttl is not None else self.default_ttl),
                last_accessed=now,
            )
            self._store.move_to_end(key)

    def get(self, key: str) -> V | None:
        """Get a cached value, or None if expired/missing."""
        with self._lock:
            now = self._clock()
            entry = self._live_entry_locked(key, now)
            if entry is None:
                self._misses += 1
                return None
            # max() keeps recency monotonic if the clock ever steps backwards
            entry.last_accessed = max(entry.last_accessed, now)
            self._store.move_to_end(key)
            self._hits += 1
            return entry.value

    def has(self, key: str) -> bool:
        """True if the key is present and unexpired. Does not count as an access."""
        with self._lock:
            return self._live_entry_locked(key, self._clock()) is not None

    def invalidate(self, key: str) -> int:
        """Remove exactly ``key``. Returns the number of entries removed (0 or 1)."""
        with self._lock:
            return 1 if self._store.pop(key, None) is not None else 0

    def invalidate_pattern(self, pattern: str | re.Pattern[str]) -> int:
        """Remove every key the regex matches (``search`` semantics).

        A string pattern must be a valid regular expression; a malformed one
        raises ``re.error`` before any entry is touched.
        """
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        with self._lock:
            matched = [k for k in self._store if regex.search(k)]
            for k in matched:
                del self._store[k]
        if matched:
            log.debug("cache_invalidated", pattern=regex.pattern, count=len(matched))
        return len(matched)

    def invalidate_prefix(self, prefix: str) -> int:
        """Remove every key starting with ``prefix``."""
        with self._lock:
            matched = [k for k in self._store if k.startswith(prefix)]
            for k in matched:
                del self._store[k]
        return len(matched)

    def clear(self) -> None:
        """Clear all entries."""
        with self._lock:
            self._store.clear()

    def size(self) -> int:
        """Entry count, including expired entries that have not been swept yet."""
        with self._lock:
            return len(self._store)

    def __len__(self) -> int:
        return self.size()

    def prune(self) -> int:
        """Remove expired entries. Returns count of removed entries."""
        with self._lock:
            return self._prune_locked()

    def stats(self) -> dict[str, Any]:
        with self._lock:
            return {
                "size": len(self._store),
                "max_size": self.max_size,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
                "expirations": self._expirations,
            }

    # ── Internals (caller holds the lock) ──

    def _live_entry_locked(self, key: str, now: float) -> CacheEntry[V] | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        if entry.expires_at <= now:
            del self._store[key]
            self._expirations += 1
            return None
        return entry

    def _prune_locked(self) -> int:
        now = self._clock()
        expired = [k for k, e in self._store.items() if e.expires_at <= now]
        for k in expired:
            del self._store[k]
        self._expirations += len(expired)
        return len(expired)

    def _evict_lru_locked(self) -> None:
        key, _ = self._store.popitem(last=False)
        self._evictions += 1
        log.debug("cache_evicted", key=key, max_size=self.max_size)
