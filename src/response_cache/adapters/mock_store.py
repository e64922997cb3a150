"""
In-Memory Incident Store.

A fake source of truth for development and testing. Holds incidents in a
dict and counts calls per operation so tests can tell cache hits from
store round-trips.
"""

from __future__ import annotations

import copy
import csv
import io
import json
from collections import Counter
from typing import Any, Dict, List, Optional

SEARCHABLE_FIELDS = ("title", "description")
FILTER_FIELDS = ("category", "severity", "status")
EXPORT_FIELDS = ("id", "title", "category", "severity", "status")


class InMemoryIncidentStore:
    """Fake incident store for development and testing."""

    MOCK_INCIDENTS = [
        ("inc_1", "Database connection timeout", "Backend", "high",
         ["database", "timeout", "connection"]),
        ("inc_2", "Database pool exhausted", "Backend", "critical",
         ["database", "connection", "pool"]),
        ("inc_3", "Login page blank in Safari", "Frontend", "medium",
         ["browser", "login"]),
        ("inc_4", "Disk full on worker nodes", "Infrastructure", "high",
         ["disk", "storage"]),
        ("inc_5", "Slow search responses", "Backend", "low",
         ["search", "timeout"]),
    ]

    def __init__(self, incidents: Optional[List[Dict[str, Any]]] = None) -> None:
        """
        Initialize store.

        Args:
            incidents: Initial records (MOCK_INCIDENTS if None)
        """
        if incidents is None:
            incidents = [
                {
                    "id": incident_id,
                    "title": title,
                    "description": title,
                    "category": category,
                    "severity": severity,
                    "status": "open",
                    "tags": tags,
                    "solutions": [],
                    "lessons": [],
                }
                for incident_id, title, category, severity, tags in self.MOCK_INCIDENTS
            ]
        self._incidents: Dict[str, Dict[str, Any]] = {
            record["id"]: copy.deepcopy(record) for record in incidents
        }
        self.calls: Counter = Counter()

    def get_incident(self, incident_id: str) -> Optional[Dict[str, Any]]:
        self.calls["get_incident"] += 1
        record = self._incidents.get(incident_id)
        return copy.deepcopy(record) if record is not None else None

    def search_incidents(
        self,
        query: str,
        filters: Dict[str, Any],
    ) -> List[Dict[str, Any]]:
        self.calls["search_incidents"] += 1
        return self._matching(query, filters)

    def _matching(self, query: str, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        needle = query.lower()
        results = []
        for record in self._incidents.values():
            if needle and not any(
                needle in str(record.get(f, "")).lower() for f in SEARCHABLE_FIELDS
            ):
                continue
            if any(
                filters.get(f) is not None and record.get(f) != filters[f]
                for f in FILTER_FIELDS
            ):
                continue
            results.append(copy.deepcopy(record))

        limit = filters.get("limit")
        return results[:limit] if limit else results

    def get_similar_incidents(
        self,
        incident_id: str,
        limit: int = 5,
    ) -> List[Dict[str, Any]]:
        """Rank other incidents by shared tags, same category as tie-breaker."""
        self.calls["get_similar_incidents"] += 1
        source = self._incidents.get(incident_id)
        if source is None:
            return []

        source_tags = set(source.get("tags", []))
        scored = []
        for record in self._incidents.values():
            if record["id"] == incident_id:
                continue
            shared = sorted(source_tags & set(record.get("tags", [])))
            score = len(shared) / max(len(source_tags), 1)
            if record.get("category") == source.get("category"):
                score += 0.1
            if shared:
                scored.append(
                    {
                        "id": record["id"],
                        "title": record["title"],
                        "category": record["category"],
                        "severity": record["severity"],
                        "similarity_score": round(min(score, 1.0), 2),
                        "matching_signals": shared,
                    }
                )

        scored.sort(key=lambda s: s["similarity_score"], reverse=True)
        return scored[:limit]

    def export_knowledge(self, format: str, filters: Dict[str, Any]) -> str:
        self.calls["export_knowledge"] += 1
        records = self._matching("", filters)

        if format == "json":
            return json.dumps(records, sort_keys=True)
        if format == "csv":
            buffer = io.StringIO()
            writer = csv.DictWriter(buffer, fieldnames=EXPORT_FIELDS, extrasaction="ignore")
            writer.writeheader()
            writer.writerows(records)
            return buffer.getvalue()
        if format == "markdown":
            return "\n".join(
                f"- **{r['title']}** ({r['category']}, {r['severity']}, {r['status']})"
                for r in records
            )
        raise ValueError(f"Unsupported export format: {format}")

    def update_incident_status(self, incident_id: str, status: str) -> Dict[str, Any]:
        self.calls["update_incident_status"] += 1
        record = self._require(incident_id)
        record["status"] = status
        return copy.deepcopy(record)

    def add_solution(self, incident_id: str, solution: Dict[str, Any]) -> Dict[str, Any]:
        self.calls["add_solution"] += 1
        record = self._require(incident_id)
        record["solutions"].append(copy.deepcopy(solution))
        return copy.deepcopy(record)

    def extract_lessons(self, incident_id: str, lessons: Dict[str, Any]) -> Dict[str, Any]:
        self.calls["extract_lessons"] += 1
        record = self._require(incident_id)
        record["lessons"].append(copy.deepcopy(lessons))
        return copy.deepcopy(record)

    def _require(self, incident_id: str) -> Dict[str, Any]:
        record = self._incidents.get(incident_id)
        if record is None:
            raise KeyError(f"Incident not found: {incident_id}")
        return record
