"""
Cached Incident Store - Cache-Aside Wrapper for Incident Stores.

Wraps any IncidentStore so reads go through the ResponseCacheManager and
writes invalidate what they make stale.

Design Notes:
    - Decorator/Wrapper pattern
    - Reads: check partition, fetch from store on miss, populate
    - Writes: invalidate only after the store call succeeded
    - Tracks cache hits/misses and store fetch timings via MetricsCollector
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from response_cache.caching.response_cache_manager import ResponseCacheManager
from response_cache.config.models import EXPORTS, SEARCHES
from response_cache.interfaces.incident_store import IncidentStore
from response_cache.interfaces.metrics_collector import MetricsCollector

logger = logging.getLogger(__name__)

CACHED_OPERATIONS = (
    "get_incident",
    "search_incidents",
    "get_similar_incidents",
    "export_knowledge",
)


@dataclass
class SimilarResults:
    """Similar incidents cached for one incident."""

    items: List[Dict[str, Any]] = field(default_factory=list)
    # True when the store returned fewer items than asked for
    complete: bool = False


class CachedIncidentStore:
    """
    Caching wrapper for IncidentStore implementations.

    Usage:
        store = CachedIncidentStore(backend, ResponseCacheManager())

        # First call: cache miss, fetches from backend
        store.get_incident("inc_1")

        # Second call: cache hit
        store.get_incident("inc_1")

        # Write: goes to backend, then drops incident + similar entries
        store.update_incident_status("inc_1", "resolved")
    """

    def __init__(
        self,
        store: IncidentStore,
        cache: Optional[ResponseCacheManager] = None,
        metrics_collector: Optional[MetricsCollector] = None,
    ) -> None:
        """
        Initialize cached store.

        Args:
            store: Underlying incident store to wrap
            cache: Cache manager (creates one if None)
            metrics_collector: Optional metrics collector for tracking
        """
        self.store = store
        self.cache = cache or ResponseCacheManager()
        self.metrics = metrics_collector

        self._cache_hits: Dict[str, int] = {}
        self._cache_misses: Dict[str, int] = {}

    # =========================================================================
    # Reads
    # =========================================================================

    def get_incident(self, incident_id: str) -> Optional[Dict[str, Any]]:
        """
        Get an incident, from cache when possible.

        Unknown incidents (None from the store) are not cached.
        """
        return self._read_through(
            "get_incident",
            lookup=lambda: self.cache.get_cached_incident(incident_id),
            fetch=lambda: self.store.get_incident(incident_id),
            populate=lambda data: self.cache.cache_incident(incident_id, data),
        )

    def search_incidents(
        self,
        query: str,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        filters = filters or {}
        return self._read_through(
            "search_incidents",
            lookup=lambda: self.cache.get_cached_search_results(query, filters),
            fetch=lambda: self.store.search_incidents(query, filters),
            populate=lambda data: self.cache.cache_search_results(query, filters, data),
        )

    def get_similar_incidents(
        self,
        incident_id: str,
        limit: int = 5,
    ) -> List[Dict[str, Any]]:
        """
        Similar incidents for an incident.

        Cached per incident id; a cached list longer than limit is truncated,
        a shorter one triggers a refetch unless it already held every match.
        """
        cached = self.cache.get_cached_similar_incidents(incident_id)
        # Other handlers may share the partition with plain payloads
        if isinstance(cached, SimilarResults) and (
            len(cached.items) >= limit or cached.complete
        ):
            self._record_hit("get_similar_incidents")
            return list(cached.items[:limit])

        self._record_miss("get_similar_incidents")
        start = time.perf_counter()
        items = self.store.get_similar_incidents(incident_id, limit)
        self._record_fetch_time("get_similar_incidents", time.perf_counter() - start)
        self.cache.cache_similar_incidents(
            incident_id,
            SimilarResults(items=items, complete=len(items) < limit),
        )
        return items

    def export_knowledge(
        self,
        format: str = "json",
        filters: Optional[Dict[str, Any]] = None,
    ) -> str:
        filters = filters or {}
        return self._read_through(
            "export_knowledge",
            lookup=lambda: self.cache.get_cached_export_data(format, filters),
            fetch=lambda: self.store.export_knowledge(format, filters),
            populate=lambda data: self.cache.cache_export_data(format, filters, data),
        )

    # =========================================================================
    # Writes
    # =========================================================================

    def update_incident_status(self, incident_id: str, status: str) -> Dict[str, Any]:
        result = self.store.update_incident_status(incident_id, status)
        self._invalidate_after_write(incident_id)
        return result

    def add_solution(self, incident_id: str, solution: Dict[str, Any]) -> Dict[str, Any]:
        result = self.store.add_solution(incident_id, solution)
        self._invalidate_after_write(incident_id)
        return result

    def extract_lessons(self, incident_id: str, lessons: Dict[str, Any]) -> Dict[str, Any]:
        result = self.store.extract_lessons(incident_id, lessons)
        self._invalidate_after_write(incident_id)
        return result

    # =========================================================================
    # Statistics
    # =========================================================================

    def get_cache_stats(self) -> Dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dict with per-partition stats and per-operation hit/miss counts
        """
        return {
            "partitions": {
                name: {
                    "size": stats.size,
                    "max_size": stats.max_size,
                    "hit_rate": stats.hit_rate,
                    "hits": stats.total_hits,
                    "misses": stats.total_misses,
                    "evictions": stats.evictions,
                    "expirations": stats.expirations,
                }
                for name, stats in self.cache.get_stats().items()
            },
            "operations": {
                op: {
                    "hits": self._cache_hits.get(op, 0),
                    "misses": self._cache_misses.get(op, 0),
                }
                for op in CACHED_OPERATIONS
            },
        }

    def _read_through(
        self,
        operation: str,
        lookup: Callable[[], Any],
        fetch: Callable[[], Any],
        populate: Callable[[Any], None],
    ) -> Any:
        cached = lookup()
        if cached is not None:
            self._record_hit(operation)
            logger.debug(f"Cache HIT for {operation}")
            return cached

        self._record_miss(operation)
        logger.debug(f"Cache MISS for {operation}")

        start = time.perf_counter()
        result = fetch()
        self._record_fetch_time(operation, time.perf_counter() - start)
        if result is not None:
            populate(result)
        return result

    def _invalidate_after_write(self, incident_id: str) -> None:
        # Search and export results embed incident state, so they go stale too
        self.cache.invalidate_incident(incident_id)
        self.cache.invalidate_type(SEARCHES)
        self.cache.invalidate_type(EXPORTS)

    def _record_hit(self, operation: str) -> None:
        self._cache_hits[operation] = self._cache_hits.get(operation, 0) + 1
        if self.metrics:
            self.metrics.record_count("cache_hit", 1, tags={"operation": operation})

    def _record_miss(self, operation: str) -> None:
        self._cache_misses[operation] = self._cache_misses.get(operation, 0) + 1
        if self.metrics:
            self.metrics.record_count("cache_miss", 1, tags={"operation": operation})

    def _record_fetch_time(self, operation: str, duration: float) -> None:
        if self.metrics:
            self.metrics.record_timing(
                "store_fetch_seconds", duration, tags={"operation": operation}
            )
