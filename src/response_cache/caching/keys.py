"""
Cache Key Generation.

Builds deterministic keys from several logical inputs (query + filters,
format + filters, call arguments). Dict keys are sorted at every nesting
level, so semantically identical filter objects map to the same key.
"""

from __future__ import annotations

import json
from typing import Any


class CacheKeyError(ValueError):
    """Raised when key parts cannot be serialized into a cache key."""
    pass


def make_key(**parts: Any) -> str:
    """
    Create a canonical cache key from named parts.

    Args:
        **parts: JSON-serializable values (dicts, lists, str, numbers, bool, None)

    Returns:
        Compact JSON string with sorted keys

    Raises:
        CacheKeyError: If a part is not serializable

    Example:
        >>> make_key(query="db", filters={"b": 2, "a": 1})
        '{"filters":{"a":1,"b":2},"query":"db"}'
    """
    try:
        return json.dumps(
            parts,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
        )
    except (TypeError, ValueError) as e:
        raise CacheKeyError(f"Cannot build cache key from {sorted(parts)}: {e}") from e
