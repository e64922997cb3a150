"""
Integration Tests - Incident Handlers with the Response Cache.

Exercises the full path a request or tool handler takes: settings from
YAML, a manager shared by the cached store and the warmer, reads, writes
and expiry.
"""

from __future__ import annotations

from pathlib import Path

from response_cache.adapters.cached_incident_store import CachedIncidentStore
from response_cache.adapters.metrics_collector import InMemoryMetricsCollector
from response_cache.adapters.mock_store import InMemoryIncidentStore
from response_cache.caching.response_cache_manager import ResponseCacheManager
from response_cache.caching.warmer import CacheWarmer, SearchQuery
from response_cache.config.loader import load_config


class TestIncidentCacheFlow:
    """End-to-end cache behavior."""

    def test_incident_lifecycle(self, clock) -> None:
        """
        SCENARIO: Read, re-read, expire, update an incident
        EXPECTED: Store hit only on first read, after expiry and after write
        """
        backend = InMemoryIncidentStore()
        manager = ResponseCacheManager(clock=clock)
        store = CachedIncidentStore(backend, manager)

        store.get_incident("inc_4")
        clock.advance(599)
        store.get_incident("inc_4")
        assert backend.calls["get_incident"] == 1

        clock.advance(2)
        store.get_incident("inc_4")
        assert backend.calls["get_incident"] == 2

        store.update_incident_status("inc_4", "investigating")
        incident = store.get_incident("inc_4")

        assert incident["status"] == "investigating"
        assert backend.calls["get_incident"] == 3

    def test_configured_partitions_and_warm_up(
        self, clock, sample_config_path: Path
    ) -> None:
        """
        SCENARIO: Settings from YAML, caches warmed before traffic
        EXPECTED: Warmed reads never reach the store, capacity from config
        """
        backend = InMemoryIncidentStore()
        manager = ResponseCacheManager(load_config(sample_config_path), clock=clock)
        metrics = InMemoryMetricsCollector()
        store = CachedIncidentStore(backend, manager, metrics)

        warmer = CacheWarmer(manager)
        warmer.warm_incidents(["inc_1", "inc_2"], backend.get_incident)
        warmer.warm_search_queries(
            [SearchQuery("timeout", {"category": "Backend"})],
            backend.search_incidents,
        )
        calls_after_warm_up = dict(backend.calls)

        store.get_incident("inc_1")
        store.get_incident("inc_2")
        results = store.search_incidents("timeout", {"category": "Backend"})

        assert dict(backend.calls) == calls_after_warm_up
        assert [r["id"] for r in results] == ["inc_1"]
        assert metrics.total("cache_hit") == 3
        assert manager.get_stats()["incidents"].max_size == 10

    def test_capacity_and_cleanup_under_load(self, clock) -> None:
        """
        SCENARIO: Many distinct searches, then time passes
        EXPECTED: Partition never exceeds capacity; cleanup empties it
        """
        manager = ResponseCacheManager(clock=clock)
        store = CachedIncidentStore(InMemoryIncidentStore(), manager)

        for i in range(250):
            store.search_incidents(f"query {i}")
            clock.advance(0.1)
            assert manager.get_stats()["searches"].size <= 200

        clock.advance(301)
        removed = manager.cleanup()

        assert removed["searches"] == 200
        assert manager.get_stats()["searches"].evictions == 50
