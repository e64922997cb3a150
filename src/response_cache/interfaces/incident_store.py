"""
Incident Store Protocol.

Defines the interface of the external store holding incidents,
solutions and lessons learned. Reads are cacheable; writes must be
followed by cache invalidation.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class IncidentStore(Protocol):
    """Abstract interface for the incident source of truth."""

    def get_incident(self, incident_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch one incident.

        Returns:
            Incident record, or None if it does not exist
        """
        ...

    def search_incidents(
        self,
        query: str,
        filters: Dict[str, Any],
    ) -> List[Dict[str, Any]]:
        """Full-text search with optional category/severity/status filters."""
        ...

    def get_similar_incidents(
        self,
        incident_id: str,
        limit: int = 5,
    ) -> List[Dict[str, Any]]:
        """Incidents similar to the given one, best match first."""
        ...

    def export_knowledge(
        self,
        format: str,
        filters: Dict[str, Any],
    ) -> str:
        """Export the knowledge base in the requested format."""
        ...

    def update_incident_status(
        self,
        incident_id: str,
        status: str,
    ) -> Dict[str, Any]:
        """Change the status of an incident."""
        ...

    def add_solution(
        self,
        incident_id: str,
        solution: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Attach a solution to an incident."""
        ...

    def extract_lessons(
        self,
        incident_id: str,
        lessons: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Record lessons learned for an incident."""
        ...
