"""
LRU Cache - Bounded TTL Cache with Least-Recently-Used Eviction.

Provides the in-process store used by every cache partition.

Design Notes:
    - Count-bounded (max_size entries), not byte-bounded
    - Per-entry TTL with lazy expiry on access
    - Full expiry sweep before every insert
    - LRU victim chosen by smallest last_accessed (first seen wins on ties)
    - Thread-safe with reentrant lock
    - Injectable clock for deterministic tests
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Protocol

logger = logging.getLogger(__name__)

# Rough per-entry memory estimate used by get_stats()
ENTRY_SIZE_ESTIMATE_BYTES = 200

# Entries expiring within this window are reported by get_expiring_soon()
EXPIRING_SOON_THRESHOLD_SECONDS = 60.0

DEFAULT_MAX_SIZE = 1000


class CacheProtocol(Protocol):
    """Protocol for cache implementations."""

    def get(self, key: str, default: Any = None) -> Any:
        """Get value from cache."""
        ...

    def set(self, key: str, data: Any, ttl_seconds: Optional[float] = None) -> None:
        """Set value in cache with optional TTL."""
        ...

    def delete(self, key: str) -> bool:
        """Remove a cache entry."""
        ...

    def has(self, key: str) -> bool:
        """Check for a live entry without touching statistics."""
        ...

    def clear(self) -> None:
        """Clear all cache entries."""
        ...


@dataclass
class CacheEntry:
    """A single cache entry with metadata."""

    data: Any
    created_at: float
    ttl_seconds: float
    hit_count: int = 0
    last_accessed: float = 0.0

    def is_expired(self, now: float) -> bool:
        """Check if entry has outlived its TTL."""
        return now - self.created_at > self.ttl_seconds

    def remaining(self, now: float) -> float:
        """Seconds left before the entry expires."""
        return self.ttl_seconds - (now - self.created_at)


@dataclass
class CacheStats:
    """Cache statistics."""

    size: int = 0
    max_size: int = DEFAULT_MAX_SIZE
    hit_rate: float = 0.0
    total_hits: int = 0
    total_misses: int = 0
    memory_usage: int = 0
    evictions: int = 0
    expirations: int = 0


@dataclass
class ExpiringEntry:
    """Key of an entry close to expiry and its remaining lifetime."""

    key: str
    ttl_remaining: float


class LRUCache:
    """
    TTL-aware cache bounded by entry count with LRU eviction.

    The internal OrderedDict is kept in recency order: every successful
    get() and every set() moves the key to the end.

    Example:
        cache = LRUCache(ttl_seconds=600, max_size=500)
        cache.set("inc_1", {"title": "DB timeout"})
        cache.get("inc_1")  # -> {"title": "DB timeout"}
    """

    def __init__(
        self,
        ttl_seconds: float,
        max_size: int = DEFAULT_MAX_SIZE,
        key_prefix: Optional[str] = None,
        clock: Callable[[], float] = time.time,
        log_access: bool = False,
    ) -> None:
        """
        Initialize cache.

        Args:
            ttl_seconds: Default lifetime of entries
            max_size: Maximum number of entries
            key_prefix: Cosmetic namespace label, not applied to keys
            clock: Time source returning seconds
            log_access: Log hits and misses at DEBUG level
        """
        self.default_ttl_seconds = ttl_seconds
        self.max_size = max_size or DEFAULT_MAX_SIZE
        self.key_prefix = key_prefix
        self.log_access = log_access
        self._clock = clock
        self._cache: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._expirations = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get value from cache.

        Args:
            key: Cache key
            default: Returned when the key is absent or expired

        Returns:
            Cached value or default
        """
        with self._lock:
            entry = self._cache.get(key)
            now = self._clock()

            if entry is None:
                self._misses += 1
                if self.log_access:
                    logger.debug(f"Cache MISS: {key}")
                return default

            if entry.is_expired(now):
                del self._cache[key]
                self._expirations += 1
                self._misses += 1
                if self.log_access:
                    logger.debug(f"Cache EXPIRED: {key}")
                return default

            entry.hit_count += 1
            entry.last_accessed = now
            self._hits += 1
            self._cache.move_to_end(key)

            if self.log_access:
                logger.debug(f"Cache HIT: {key}")

            return entry.data

    def set(
        self,
        key: str,
        data: Any,
        ttl_seconds: Optional[float] = None,
    ) -> None:
        """
        Set value in cache.

        Sweeps expired entries, evicts the least recently used entry when
        the cache is full, then stores the value as most recently used.

        Args:
            key: Cache key
            data: Value to cache (stored as-is, not copied)
            ttl_seconds: TTL in seconds (uses default if None)
        """
        ttl = ttl_seconds if ttl_seconds is not None else self.default_ttl_seconds

        with self._lock:
            self._sweep_expired()

            if key in self._cache:
                del self._cache[key]
            elif len(self._cache) >= self.max_size:
                self._evict_lru()

            now = self._clock()
            self._cache[key] = CacheEntry(
                data=data,
                created_at=now,
                ttl_seconds=ttl,
                last_accessed=now,
            )

            if self.log_access:
                logger.debug(f"Cache SET: {key} (TTL={ttl}s)")

    def has(self, key: str) -> bool:
        """Check if key exists and is not expired."""
        with self._lock:
            entry = self._cache.get(key)
            return entry is not None and not entry.is_expired(self._clock())

    def delete(self, key: str) -> bool:
        """
        Delete a cache entry.

        Returns:
            True if entry was removed, False if not found
        """
        with self._lock:
            return self._cache.pop(key, None) is not None

    def invalidate_pattern(self, pattern: str) -> int:
        """
        Delete all entries whose key contains pattern.

        Returns:
            Number of entries removed
        """
        with self._lock:
            keys_to_remove = [k for k in self._cache if pattern in k]
            for key in keys_to_remove:
                del self._cache[key]

            if keys_to_remove:
                logger.debug(
                    f"Cache INVALIDATED {len(keys_to_remove)} entries matching '{pattern}'"
                )

            return len(keys_to_remove)

    def clear(self) -> None:
        """Clear all entries and reset counters."""
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0
            self._evictions = 0
            self._expirations = 0

    def cleanup(self) -> int:
        """
        Remove every expired entry.

        Returns:
            Number of entries removed
        """
        with self._lock:
            return self._sweep_expired()

    def resize(
        self,
        ttl_seconds: Optional[float] = None,
        max_size: Optional[int] = None,
    ) -> None:
        """
        Change default TTL and/or capacity.

        Existing entries keep the TTL they were stored with. Shrinking the
        capacity evicts least recently used entries until within bounds.

        Raises:
            ValueError: If max_size is below 1
        """
        if max_size is not None and max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")

        with self._lock:
            if ttl_seconds is not None:
                self.default_ttl_seconds = ttl_seconds
            if max_size is not None:
                self.max_size = max_size
                while len(self._cache) > self.max_size:
                    self._evict_lru()

    def get_stats(self) -> CacheStats:
        """Get cache statistics."""
        with self._lock:
            total = self._hits + self._misses
            size = len(self._cache)
            return CacheStats(
                size=size,
                max_size=self.max_size,
                hit_rate=(self._hits / total) * 100 if total > 0 else 0.0,
                total_hits=self._hits,
                total_misses=self._misses,
                memory_usage=size * ENTRY_SIZE_ESTIMATE_BYTES,
                evictions=self._evictions,
                expirations=self._expirations,
            )

    def keys(self) -> List[str]:
        """All keys, expired ones included, least recently used first."""
        with self._lock:
            return list(self._cache.keys())

    def get_expiring_soon(
        self,
        threshold_seconds: float = EXPIRING_SOON_THRESHOLD_SECONDS,
    ) -> List[ExpiringEntry]:
        """
        Entries that will expire within threshold_seconds.

        Returns:
            Live entries sorted by remaining TTL, soonest first
        """
        with self._lock:
            now = self._clock()
            expiring = []
            for key, entry in self._cache.items():
                remaining = entry.remaining(now)
                if 0 < remaining < threshold_seconds:
                    expiring.append(ExpiringEntry(key=key, ttl_remaining=remaining))

        return sorted(expiring, key=lambda e: e.ttl_remaining)

    def _sweep_expired(self) -> int:
        """Remove expired entries (internal, must hold lock)."""
        now = self._clock()
        expired = [k for k, e in self._cache.items() if e.is_expired(now)]
        for key in expired:
            del self._cache[key]
        self._expirations += len(expired)
        return len(expired)

    def _evict_lru(self) -> None:
        """Evict the entry with the oldest last_accessed (internal, must hold lock)."""
        victim: Optional[str] = None
        oldest = 0.0

        for key, entry in self._cache.items():
            if victim is None or entry.last_accessed < oldest:
                victim = key
                oldest = entry.last_accessed

        if victim is not None:
            del self._cache[victim]
            self._evictions += 1
            logger.debug(f"Cache EVICTED (LRU): {victim}")
