"""
Interfaces Layer - Abstract Protocols for Dependencies.

Protocols:
    - IncidentStore: Source of truth the cache sits in front of
    - MetricsCollector: Metrics sink for cache hits and misses

Design Principles:
    - Use typing.Protocol (not ABC) for Pythonic interfaces
    - The cache never calls the store itself; callers do
"""

from response_cache.interfaces.incident_store import IncidentStore
from response_cache.interfaces.metrics_collector import MetricsCollector

__all__ = ["IncidentStore", "MetricsCollector"]
