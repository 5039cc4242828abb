"""Function memoization backed by a persistent LRU cache.

The wrapper keeps the latest cache snapshot in its closure and replaces it on
every call, so `cache_snapshot()` hands out values that later calls never
change. Not thread-safe: concurrent callers must serialize access themselves.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from snaplru import cache as lru

logger = logging.getLogger("snaplru.memo")

R = TypeVar("R")

_MISSING = object()


@dataclass(frozen=True, slots=True)
class CacheInfo:
    hits: int
    misses: int
    capacity: int
    size: int


def make_key(args: tuple[Any, ...], kwargs: dict[str, Any]) -> tuple[Any, ...]:
    """Build the cache key for one call: positional args plus sorted kwargs."""
    return (args, tuple(sorted(kwargs.items())))


def memoize(
    capacity: int, *, trigger: lru.Trigger = "count"
) -> Callable[[Callable[..., R]], Callable[..., R]]:
    """Decorate a function so its results are cached with LRU eviction.

    Arguments must be hashable. Adds `cache_info()`, `cache_clear()` and
    `cache_snapshot()` to the wrapper.
    """

    def decorator(fn: Callable[..., R]) -> Callable[..., R]:
        state: dict[str, Any] = {
            "cache": lru.empty(capacity, trigger=trigger),
            "hits": 0,
            "misses": 0,
        }

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> R:
            key = make_key(args, kwargs)
            cache, value = lru.get(key, state["cache"], _MISSING)
            if value is not _MISSING:
                state["cache"] = cache
                state["hits"] += 1
                return value  # type: ignore[return-value]

            state["misses"] += 1
            result = fn(*args, **kwargs)
            state["cache"], evicted = lru.insert_with_victim(key, result, state["cache"])
            if evicted is not None:
                logger.debug("%s: evicted cached call %r", fn.__qualname__, evicted)
            return result

        def cache_info() -> CacheInfo:
            return CacheInfo(
                hits=state["hits"],
                misses=state["misses"],
                capacity=capacity,
                size=lru.size(state["cache"]),
            )

        def cache_clear() -> None:
            state["cache"] = lru.empty(capacity, trigger=trigger)
            state["hits"] = 0
            state["misses"] = 0

        def cache_snapshot() -> lru.LRUCache:
            return state["cache"]

        wrapper.cache_info = cache_info  # type: ignore[attr-defined]
        wrapper.cache_clear = cache_clear  # type: ignore[attr-defined]
        wrapper.cache_snapshot = cache_snapshot  # type: ignore[attr-defined]
        return wrapper

    return decorator
