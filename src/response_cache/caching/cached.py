"""
Caching Wrapper for Fetch Functions.

Wraps a function with a cache-check / call-through / populate sequence.
Works with plain functions and coroutine functions.

Example:
    @cached(ttl_seconds=60)
    def load_incident(incident_id: str) -> dict:
        return store.get_incident(incident_id)

    class IncidentRepository:
        @cached(ttl_seconds=60)
        def load(self, incident_id: str) -> dict:
            ...

    # or without decorator syntax
    load = cached(manager.get_or_create("incidents"))(store.get_incident)
"""

from __future__ import annotations

import functools
import inspect
import logging
from typing import Any, Callable, Optional, TypeVar

from response_cache.caching.keys import make_key
from response_cache.caching.lru_cache import CacheProtocol, LRUCache

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

_MISSING = object()

DEFAULT_TTL_SECONDS = 5 * 60


def cached(
    cache: Optional[CacheProtocol] = None,
    *,
    ttl_seconds: Optional[float] = None,
    max_size: int = 100,
    key_prefix: str = "func",
    should_cache: Optional[Callable[..., bool]] = None,
) -> Callable[[F], F]:
    """
    Build a wrapper that caches a function's results by its arguments.

    Args:
        cache: Cache to store results in (a private LRUCache if None)
        ttl_seconds: TTL of stored results (cache default if None)
        max_size: Capacity of the private cache
        key_prefix: Prefix of the generated keys
        should_cache: Predicate on the call arguments; False bypasses the cache

    Returns:
        Decorator. The wrapped function exposes the cache as ``.cache``.

    Notes:
        Exceptions raised by the wrapped function propagate and are not cached.
        Arguments must be JSON-serializable, otherwise CacheKeyError is raised.
        On methods the leading self/cls is left out of the key, so all
        instances share one entry per argument list.
    """
    store = cache if cache is not None else LRUCache(
        ttl_seconds=ttl_seconds if ttl_seconds is not None else DEFAULT_TTL_SECONDS,
        max_size=max_size,
        key_prefix=key_prefix,
    )

    def decorator(func: F) -> F:
        name = getattr(func, "__qualname__", repr(func))
        skip = 1 if _takes_receiver(func) else 0

        def _key(args: tuple, kwargs: dict) -> str:
            key_args = list(args[skip:])
            return f"{key_prefix}:{name}:{make_key(args=key_args, kwargs=kwargs)}"

        def _bypass(args: tuple, kwargs: dict) -> bool:
            return should_cache is not None and not should_cache(*args, **kwargs)

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                if _bypass(args, kwargs):
                    return await func(*args, **kwargs)

                key = _key(args, kwargs)
                hit = store.get(key, _MISSING)
                if hit is not _MISSING:
                    logger.debug(f"Cached call HIT: {name}")
                    return hit

                result = await func(*args, **kwargs)
                store.set(key, result, ttl_seconds)
                return result

            async_wrapper.cache = store  # type: ignore[attr-defined]
            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if _bypass(args, kwargs):
                return func(*args, **kwargs)

            key = _key(args, kwargs)
            hit = store.get(key, _MISSING)
            if hit is not _MISSING:
                logger.debug(f"Cached call HIT: {name}")
                return hit

            result = func(*args, **kwargs)
            store.set(key, result, ttl_seconds)
            return result

        wrapper.cache = store  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]

    return decorator


def _takes_receiver(func: Callable[..., Any]) -> bool:
    """True when func is a method whose first parameter is self or cls."""
    try:
        params = list(inspect.signature(func).parameters)
    except (TypeError, ValueError):
        return False
    return bool(params) and params[0] in ("self", "cls")
