"""
Cache Warmer - Best-Effort Preloading.

Loads frequently requested data through caller-supplied loaders and stores
it in the manager's partitions. A failing item is logged and skipped; the
rest of the batch continues.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from response_cache.caching.response_cache_manager import ResponseCacheManager

logger = logging.getLogger(__name__)


@dataclass
class SearchQuery:
    """A search to preload."""

    query: str
    filters: Optional[Dict[str, Any]] = None


@dataclass
class WarmUpResult:
    """Outcome of a warm-up batch."""

    warmed: List[Any] = field(default_factory=list)
    failed: List[Tuple[Any, Exception]] = field(default_factory=list)

    @property
    def success_rate(self) -> float:
        """Calculate success rate (0.0 to 1.0)."""
        total = len(self.warmed) + len(self.failed)
        if total == 0:
            return 1.0
        return len(self.warmed) / total

    @property
    def has_failures(self) -> bool:
        """Check if any item failed to load."""
        return len(self.failed) > 0


class CacheWarmer:
    """Preloads incidents and search results into a ResponseCacheManager."""

    def __init__(self, manager: ResponseCacheManager) -> None:
        self.manager = manager

    def warm_incidents(
        self,
        incident_ids: Iterable[str],
        loader: Callable[[str], Any],
    ) -> WarmUpResult:
        """
        Load incidents and cache them.

        Args:
            incident_ids: Incidents to preload
            loader: Fetches one incident from the source of truth

        Returns:
            WarmUpResult with warmed ids and failures
        """
        ids = list(incident_ids)
        logger.info(f"Warming up {len(ids)} incidents...")
        result = WarmUpResult()

        for incident_id in ids:
            try:
                self.manager.cache_incident(incident_id, loader(incident_id))
                result.warmed.append(incident_id)
            except Exception as e:
                result.failed.append((incident_id, e))
                logger.error(f"Failed to warm incident: {incident_id}: {e}")

        self._log_result("incident warm-up", result)
        return result

    def warm_search_queries(
        self,
        queries: Iterable[SearchQuery],
        loader: Callable[[str, Dict[str, Any]], Any],
    ) -> WarmUpResult:
        """
        Run searches and cache their results.

        Args:
            queries: Searches to preload
            loader: Runs one search against the source of truth

        Returns:
            WarmUpResult with warmed queries and failures
        """
        items = list(queries)
        logger.info(f"Warming up {len(items)} search queries...")
        result = WarmUpResult()

        for item in items:
            filters = item.filters or {}
            try:
                data = loader(item.query, filters)
                self.manager.cache_search_results(item.query, filters, data)
                result.warmed.append(item)
            except Exception as e:
                result.failed.append((item, e))
                logger.error(f"Failed to warm search query: {item.query}: {e}")

        self._log_result("search warm-up", result)
        return result

    @staticmethod
    def _log_result(operation: str, result: WarmUpResult) -> None:
        if result.has_failures:
            logger.warning(
                f"{operation} completed with {len(result.failed)} failures "
                f"({result.success_rate:.1%} success rate)"
            )
        else:
            logger.info(f"{operation} completed: {len(result.warmed)} entries")
