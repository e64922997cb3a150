"""
Metrics Collector Protocol.

Defines the abstract interface for operational metrics such as cache
hits, misses and store fetch timings.

Design Notes:
    - Non-blocking metric recording
    - Tag/label support for dimensionality
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class MetricsCollector(Protocol):
    """Abstract interface for metrics collection."""

    def record_timing(
        self,
        name: str,
        duration_seconds: float,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        """Record a timing metric (histogram)."""
        ...

    def record_count(
        self,
        name: str,
        value: int,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        """Record a count metric (counter)."""
        ...

    def record_gauge(
        self,
        name: str,
        value: float,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        """Record a gauge metric (current value)."""
        ...

    def get_metrics(self) -> Dict[str, Any]:
        """Get all collected metrics."""
        ...
