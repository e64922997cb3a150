"""
Adapters Package - Infrastructure Implementations.

Concrete implementations of the protocols in the interfaces package.

Stores:
    - InMemoryIncidentStore: Fake incident data for development/testing
    - CachedIncidentStore: Cache-aside wrapper around any IncidentStore

Metrics:
    - InMemoryMetricsCollector: Simple in-memory collection
"""

from response_cache.adapters.cached_incident_store import (
    CachedIncidentStore,
    SimilarResults,
)
from response_cache.adapters.metrics_collector import InMemoryMetricsCollector
from response_cache.adapters.mock_store import InMemoryIncidentStore

__all__ = [
    "CachedIncidentStore",
    "InMemoryIncidentStore",
    "InMemoryMetricsCollector",
    "SimilarResults",
]
