"""
Caching Layer.

Provides the in-process response cache:
    - LRUCache: TTL-based cache bounded by entry count with LRU eviction
    - ResponseCacheManager: Named partitions with cross-partition invalidation
    - cached: Wrapper adding cache-check/populate to a fetch function
    - CacheWarmer: Best-effort preloading of partitions
    - make_key: Deterministic composite keys
"""

from response_cache.caching.cached import cached
from response_cache.caching.keys import CacheKeyError, make_key
from response_cache.caching.lru_cache import (
    CacheEntry,
    CacheProtocol,
    CacheStats,
    ExpiringEntry,
    LRUCache,
)
from response_cache.caching.response_cache_manager import ResponseCacheManager
from response_cache.caching.warmer import CacheWarmer, SearchQuery, WarmUpResult

__all__ = [
    "CacheEntry",
    "CacheKeyError",
    "CacheProtocol",
    "CacheStats",
    "CacheWarmer",
    "ExpiringEntry",
    "LRUCache",
    "ResponseCacheManager",
    "SearchQuery",
    "WarmUpResult",
    "cached",
    "make_key",
]
