"""
Response Cache Manager - Named Cache Partitions.

Holds one LRUCache per data domain (incidents, searches, similar incidents,
exports), each with its own TTL and capacity, and encodes the invalidation
rules between them.

Design Notes:
    - Constructed explicitly and passed to callers (no global instance)
    - Partitions created lazily on first use, never removed (only cleared)
    - First configuration for a partition wins; use reconfigure() to change it
    - Changing an incident also invalidates its similar-incidents entry
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Dict, List, Optional

from response_cache.caching.keys import make_key
from response_cache.caching.lru_cache import CacheStats, LRUCache
from response_cache.config.models import (
    EXPORTS,
    INCIDENTS,
    SEARCHES,
    SIMILAR,
    CacheSettings,
    PartitionConfig,
)

logger = logging.getLogger(__name__)


class ResponseCacheManager:
    """
    Registry of independently configured cache partitions.

    Usage:
        cache = ResponseCacheManager()

        incident = cache.get_cached_incident(incident_id)
        if incident is None:
            incident = store.get_incident(incident_id)
            cache.cache_incident(incident_id, incident)

        # after a successful write
        cache.invalidate_incident(incident_id)
    """

    def __init__(
        self,
        settings: Optional[CacheSettings] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize manager.

        Args:
            settings: Partition defaults (built-in defaults if None)
            clock: Time source handed to every partition
        """
        self.settings = settings or CacheSettings()
        self._clock = clock
        self._caches: Dict[str, LRUCache] = {}
        self._lock = threading.RLock()

    def get_or_create(
        self,
        name: str,
        config: Optional[PartitionConfig] = None,
    ) -> LRUCache:
        """
        Get a partition, creating it on first use.

        The configuration is only honored when the partition is created.
        A later call with a different configuration is ignored.

        Args:
            name: Partition name
            config: TTL/size for a new partition (settings default if None)

        Returns:
            The partition's cache
        """
        with self._lock:
            cache = self._caches.get(name)
            if cache is not None:
                if config is not None and not self._matches(cache, config):
                    logger.warning(
                        f"Partition '{name}' already exists "
                        f"(ttl={cache.default_ttl_seconds}s, max_size={cache.max_size}), "
                        f"ignoring ttl={config.ttl_seconds}s, max_size={config.max_size}"
                    )
                return cache

            config = config or self.settings.partition(name)
            cache = LRUCache(
                ttl_seconds=config.ttl_seconds,
                max_size=config.max_size,
                key_prefix=config.key_prefix,
                clock=self._clock,
                log_access=self.settings.log_access,
            )
            self._caches[name] = cache
            logger.debug(
                f"Created cache partition '{name}' "
                f"(ttl={config.ttl_seconds}s, max_size={config.max_size})"
            )
            return cache

    def reconfigure(self, name: str, config: PartitionConfig) -> LRUCache:
        """
        Apply a new TTL/size to a partition, creating it if needed.

        Existing entries are kept; shrinking evicts least recently used ones.
        """
        with self._lock:
            cache = self._caches.get(name)
            if cache is None:
                return self.get_or_create(name, config)

            cache.resize(ttl_seconds=config.ttl_seconds, max_size=config.max_size)
            cache.key_prefix = config.key_prefix
            logger.info(
                f"Reconfigured cache partition '{name}' "
                f"(ttl={config.ttl_seconds}s, max_size={config.max_size})"
            )
            return cache

    def partitions(self) -> List[str]:
        """Names of all created partitions."""
        with self._lock:
            return list(self._caches.keys())

    # =========================================================================
    # Typed accessors
    # =========================================================================

    def cache_incident(self, incident_id: str, data: Any) -> None:
        self.get_or_create(INCIDENTS).set(incident_id, data)

    def get_cached_incident(self, incident_id: str) -> Any:
        return self.get_or_create(INCIDENTS).get(incident_id)

    def cache_search_results(
        self,
        query: str,
        filters: Optional[Dict[str, Any]],
        data: Any,
    ) -> None:
        """
        Cache search results under query + filters.

        Raises:
            CacheKeyError: If filters are not serializable
        """
        key = make_key(query=query, filters=filters or {})
        self.get_or_create(SEARCHES).set(key, data)

    def get_cached_search_results(
        self,
        query: str,
        filters: Optional[Dict[str, Any]],
    ) -> Any:
        key = make_key(query=query, filters=filters or {})
        return self.get_or_create(SEARCHES).get(key)

    def cache_similar_incidents(self, incident_id: str, data: Any) -> None:
        self.get_or_create(SIMILAR).set(incident_id, data)

    def get_cached_similar_incidents(self, incident_id: str) -> Any:
        return self.get_or_create(SIMILAR).get(incident_id)

    def cache_export_data(
        self,
        format: str,
        filters: Optional[Dict[str, Any]],
        data: Any,
    ) -> None:
        """
        Cache exported knowledge under format + filters.

        Raises:
            CacheKeyError: If filters are not serializable
        """
        key = make_key(format=format, filters=filters or {})
        self.get_or_create(EXPORTS).set(key, data)

    def get_cached_export_data(
        self,
        format: str,
        filters: Optional[Dict[str, Any]],
    ) -> Any:
        key = make_key(format=format, filters=filters or {})
        return self.get_or_create(EXPORTS).get(key)

    # =========================================================================
    # Invalidation
    # =========================================================================

    def invalidate_type(self, name: str) -> None:
        """Clear one partition. Unknown names are ignored."""
        with self._lock:
            cache = self._caches.get(name)
        if cache is not None:
            cache.clear()
            logger.info(f"Cache invalidated for type: {name}")

    def invalidate_incident(self, incident_id: str) -> None:
        """Drop an incident and its similar-incidents results."""
        with self._lock:
            incidents = self._caches.get(INCIDENTS)
            similar = self._caches.get(SIMILAR)
        if incidents is not None:
            incidents.delete(incident_id)
        if similar is not None:
            similar.delete(incident_id)
        logger.debug(f"Cache invalidated for incident: {incident_id}")

    def invalidate_all(self) -> None:
        """Clear every partition."""
        with self._lock:
            caches = list(self._caches.values())
        for cache in caches:
            cache.clear()
        logger.info("All caches invalidated")

    # =========================================================================
    # Maintenance and statistics
    # =========================================================================

    def cleanup(self) -> Dict[str, int]:
        """
        Remove expired entries from every partition.

        Returns:
            Number of entries removed per partition
        """
        with self._lock:
            caches = dict(self._caches)
        return {name: cache.cleanup() for name, cache in caches.items()}

    def get_stats(self) -> Dict[str, CacheStats]:
        """Statistics of every created partition."""
        with self._lock:
            caches = dict(self._caches)
        return {name: cache.get_stats() for name, cache in caches.items()}

    def warm_up(self) -> None:
        """Hook for preloading common data; nothing is loaded by default."""
        logger.info("Cache warm-up completed")

    @staticmethod
    def _matches(cache: LRUCache, config: PartitionConfig) -> bool:
        return (
            cache.default_ttl_seconds == config.ttl_seconds
            and cache.max_size == config.max_size
        )
