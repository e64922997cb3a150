"""
Pytest Configuration and Shared Fixtures.

This module contains fixtures available to all tests.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from response_cache.adapters.cached_incident_store import CachedIncidentStore
from response_cache.adapters.metrics_collector import InMemoryMetricsCollector
from response_cache.adapters.mock_store import InMemoryIncidentStore
from response_cache.caching.lru_cache import LRUCache
from response_cache.caching.response_cache_manager import ResponseCacheManager


class FakeClock:
    """Manually advanced time source (seconds)."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Controllable clock shared by caches under test."""
    return FakeClock()


@pytest.fixture
def lru_cache(clock: FakeClock) -> LRUCache:
    """Small cache with a 60 second TTL."""
    return LRUCache(ttl_seconds=60, max_size=3, clock=clock)


@pytest.fixture
def manager(clock: FakeClock) -> ResponseCacheManager:
    """Manager with default partition settings."""
    return ResponseCacheManager(clock=clock)


@pytest.fixture
def incident_store() -> InMemoryIncidentStore:
    """Fake incident store with the mock incidents."""
    return InMemoryIncidentStore()


@pytest.fixture
def metrics_collector() -> InMemoryMetricsCollector:
    """Create metrics collector for testing."""
    return InMemoryMetricsCollector()


@pytest.fixture
def cached_store(
    incident_store: InMemoryIncidentStore,
    manager: ResponseCacheManager,
    metrics_collector: InMemoryMetricsCollector,
) -> CachedIncidentStore:
    """Cache-aside wrapper around the fake store."""
    return CachedIncidentStore(incident_store, manager, metrics_collector)


@pytest.fixture
def sample_config_path() -> Path:
    """Path to sample configuration file."""
    return Path(__file__).parent / "fixtures" / "sample_config.yaml"
