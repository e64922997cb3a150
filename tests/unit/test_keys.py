"""
Unit Tests for make_key.

Test Aspects Covered:
    ✅ Business Logic: Canonical, order-independent keys
    ✅ Error Handling: Unserializable parts
"""

from __future__ import annotations

from datetime import datetime

import pytest

from response_cache.caching.keys import CacheKeyError, make_key


class TestMakeKey:
    """Tests for cache key generation."""

    def test_same_parts_same_key(self) -> None:
        """Identical parts give identical keys."""
        assert make_key(query="db", filters={"a": 1}) == make_key(query="db", filters={"a": 1})

    def test_nested_order_independent(self) -> None:
        """Key order inside nested dicts does not matter."""
        first = make_key(filters={"a": {"x": 1, "y": 2}, "b": [1, 2]})
        second = make_key(filters={"b": [1, 2], "a": {"y": 2, "x": 1}})
        assert first == second

    def test_list_order_matters(self) -> None:
        """Lists are ordered data and keep their order."""
        assert make_key(tags=[1, 2]) != make_key(tags=[2, 1])

    def test_different_values_different_keys(self) -> None:
        """Different parameter values produce different keys."""
        assert make_key(query="a") != make_key(query="b")

    def test_canonical_form(self) -> None:
        """Keys are compact JSON with sorted keys."""
        assert make_key(query="db", filters={"b": 2, "a": 1}) == (
            '{"filters":{"a":1,"b":2},"query":"db"}'
        )

    def test_unicode_kept_readable(self) -> None:
        """Non-ASCII text is not escaped."""
        assert "数据库" in make_key(query="数据库")

    @pytest.mark.parametrize(
        "bad_value",
        [object(), datetime(2024, 1, 1), {1: "a", "b": 2}],
    )
    def test_unserializable_raises_cache_key_error(self, bad_value) -> None:
        """Values without a canonical JSON form raise CacheKeyError."""
        with pytest.raises(CacheKeyError):
            make_key(filters=bad_value)

    def test_circular_reference_raises(self) -> None:
        """Self-referencing structures raise CacheKeyError."""
        data: dict = {}
        data["self"] = data
        with pytest.raises(CacheKeyError):
            make_key(filters=data)

    def test_cache_key_error_is_value_error(self) -> None:
        """CacheKeyError can be handled as ValueError."""
        assert issubclass(CacheKeyError, ValueError)
