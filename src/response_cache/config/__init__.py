"""
Configuration Package - Models and Loaders.

Configuration Structure:
    - CacheSettings: Root configuration object
    - PartitionConfig: TTL and capacity of one named partition

Design Principles:
    - Type-safe via Pydantic
    - Validation on load (fail fast)
    - Support for profiles (e.g. short-lived caches for development)
"""

from response_cache.config.loader import ConfigLoader, load_config
from response_cache.config.models import (
    EXPORTS,
    INCIDENTS,
    SEARCHES,
    SIMILAR,
    CacheSettings,
    PartitionConfig,
)

__all__ = [
    "CacheSettings",
    "ConfigLoader",
    "EXPORTS",
    "INCIDENTS",
    "PartitionConfig",
    "SEARCHES",
    "SIMILAR",
    "load_config",
]
