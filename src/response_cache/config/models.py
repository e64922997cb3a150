"""
Configuration Models - Pydantic Models for Type-Safe Config.

All configuration is validated at load time using Pydantic.
"""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator

INCIDENTS = "incidents"
SEARCHES = "searches"
SIMILAR = "similar"
EXPORTS = "exports"


class PartitionConfig(BaseModel):
    """Configuration for a single cache partition."""

    ttl_seconds: float = Field(gt=0)
    max_size: int = Field(default=1000, ge=1)
    key_prefix: Optional[str] = None


def _default_partitions() -> Dict[str, PartitionConfig]:
    return {
        INCIDENTS: PartitionConfig(ttl_seconds=10 * 60, max_size=500, key_prefix="incident"),
        SEARCHES: PartitionConfig(ttl_seconds=5 * 60, max_size=200, key_prefix="search"),
        SIMILAR: PartitionConfig(ttl_seconds=15 * 60, max_size=300, key_prefix="similar"),
        EXPORTS: PartitionConfig(ttl_seconds=30 * 60, max_size=50, key_prefix="export"),
    }


class CacheSettings(BaseModel):
    """Root configuration object."""

    version: str = "1.0"
    log_access: bool = False
    partitions: Dict[str, PartitionConfig] = Field(
        default_factory=_default_partitions,
    )

    @field_validator("partitions")
    @classmethod
    def _keep_default_partitions(
        cls, value: Dict[str, PartitionConfig]
    ) -> Dict[str, PartitionConfig]:
        """Partitions missing from the config keep their defaults."""
        merged = _default_partitions()
        merged.update(value)
        return merged

    def partition(self, name: str) -> PartitionConfig:
        """
        Configuration for a named partition.

        Unknown names fall back to a 5 minute TTL with the default size.
        """
        config = self.partitions.get(name)
        if config is None:
            return PartitionConfig(ttl_seconds=5 * 60)
        return config
