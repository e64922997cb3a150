"""
Response Cache - In-Process Caching for the Incident Knowledge Base.

Sits between request/tool handlers and the incident store. Handlers ask
the cache first, fetch from the store on a miss and populate the cache;
writes invalidate the affected partitions.

Main Components:
    - caching: LRUCache, ResponseCacheManager, cached wrapper, CacheWarmer
    - config: Pydantic settings and YAML loader
    - interfaces: Protocols for the incident store and metrics
    - adapters: Cached store wrapper, in-memory store and metrics

Example:
    >>> from response_cache import ResponseCacheManager
    >>> cache = ResponseCacheManager()
    >>> cache.cache_incident("inc_1", {"title": "DB timeout"})
    >>> cache.get_cached_incident("inc_1")
    {'title': 'DB timeout'}
"""

import logging

from response_cache.caching import (
    CacheKeyError,
    CacheStats,
    LRUCache,
    ResponseCacheManager,
    cached,
)
from response_cache.config import CacheSettings, PartitionConfig, load_config

__version__ = "0.1.0"

__all__ = [
    "CacheKeyError",
    "CacheSettings",
    "CacheStats",
    "LRUCache",
    "PartitionConfig",
    "ResponseCacheManager",
    "cached",
    "configure_logging",
    "load_config",
]


def configure_logging(
    level: int = logging.INFO,
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
) -> None:
    """
    Configure logging for the response cache.

    Call this at application startup to see log messages.
    By default, only WARNING and above are visible.

    Args:
        level: Logging level (default: INFO)
        format: Log message format

    Example:
        >>> import response_cache
        >>> response_cache.configure_logging(logging.DEBUG)
    """
    logging.basicConfig(
        level=level,
        format=format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("response_cache").setLevel(level)
