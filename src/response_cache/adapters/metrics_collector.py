"""
In-Memory Metrics Collector.

Stores cache metrics in memory; suitable for tests and for exposing
hit/miss counters on a health endpoint.
"""

from __future__ import annotations

from datetime import datetime
from threading import Lock
from typing import Any, Dict, List, Optional


class InMemoryMetricsCollector:
    """Thread-safe in-memory metrics collector."""

    def __init__(self) -> None:
        self._metrics: Dict[str, List[Dict[str, Any]]] = {}
        self._lock = Lock()

    def record_timing(
        self,
        name: str,
        duration_seconds: float,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        """Record a timing metric."""
        with self._lock:
            self._record(name, "timing", duration_seconds, tags)

    def record_count(
        self,
        name: str,
        value: int,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        """Record a count metric."""
        with self._lock:
            self._record(name, "count", value, tags)

    def record_gauge(
        self,
        name: str,
        value: float,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        """Record a gauge metric."""
        with self._lock:
            self._record(name, "gauge", value, tags)

    def total(self, name: str, tags: Optional[Dict[str, str]] = None) -> float:
        """
        Sum of recorded values for a metric.

        Args:
            name: Metric name
            tags: Only count samples carrying all of these tags
        """
        wanted = tags or {}
        with self._lock:
            return sum(
                sample["value"]
                for sample in self._metrics.get(name, [])
                if all(sample["tags"].get(k) == v for k, v in wanted.items())
            )

    def get_metrics(self) -> Dict[str, Any]:
        """Summary per metric: sample count, total and last value."""
        with self._lock:
            summary = {}
            for name, samples in self._metrics.items():
                if samples:
                    values = [s["value"] for s in samples]
                    summary[name] = {
                        "count": len(values),
                        "total": sum(values),
                        "last": values[-1],
                    }
            return summary

    def clear(self) -> None:
        """Clear all metrics."""
        with self._lock:
            self._metrics.clear()

    def _record(
        self,
        name: str,
        metric_type: str,
        value: float,
        tags: Optional[Dict[str, str]],
    ) -> None:
        self._metrics.setdefault(name, []).append(
            {
                "type": metric_type,
                "value": value,
                "tags": tags or {},
                "timestamp": datetime.now().isoformat(),
            }
        )
