"""Persistent LRU cache store.

Every update returns a new :class:`LRUCache` and leaves its argument intact.
Recency is tracked with a cache-wide logical clock: each write or successful
lookup stamps the entry with the current clock value, and eviction removes the
entry carrying the smallest stamp.

Two eviction triggers are supported:

``"count"`` (default)
    The cache is full when the key being inserted is new and the table already
    holds ``capacity`` entries.

``"clock"``
    The cache is full once ``clock >= capacity``. Repeated overwrites of one key
    advance the clock, so later inserts may evict an unrelated entry while the
    table is below capacity. Kept for consumers that depend on that behaviour.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Generic, Literal, TypeVar

logger = logging.getLogger("snaplru.cache")

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
T = TypeVar("T")

Trigger = Literal["count", "clock"]
TRIGGERS: tuple[Trigger, ...] = ("count", "clock")


@dataclass(frozen=True, slots=True)
class Entry(Generic[V]):
    value: V
    stamp: int


@dataclass(frozen=True, slots=True, repr=False)
class LRUCache(Generic[K, V]):
    """Immutable snapshot of an LRU cache.

    Build one with :func:`empty` and derive new snapshots with :func:`insert`
    and :func:`get` (or the equivalent methods). Older snapshots stay valid.
    """

    capacity: int
    clock: int = 0
    trigger: Trigger = "count"
    _items: dict[K, Entry[V]] = field(default_factory=dict)

    # Snapshots hold arbitrary values, so they are never hashable.
    __hash__ = None  # type: ignore[assignment]

    @property
    def items(self) -> Mapping[K, Entry[V]]:
        """Read-only view of the entry table, iterating in :func:`keys` order."""
        return MappingProxyType({k: self._items[k] for k in _ordered_keys(self._items)})

    def insert(self, key: K, value: V) -> LRUCache[K, V]:
        return insert(key, value, self)

    def get(self, key: K, default: T | None = None) -> tuple[LRUCache[K, V], V | T | None]:
        return get(key, self, default)

    def to_dict(self) -> dict[K, V]:
        return to_dict(self)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __iter__(self) -> Iterator[K]:
        return iter(keys(self))

    def __repr__(self) -> str:
        return (
            f"LRUCache(capacity={self.capacity}, clock={self.clock}, "
            f"trigger={self.trigger!r}, size={len(self._items)})"
        )


def empty(capacity: int, *, trigger: Trigger = "count") -> LRUCache:
    """Return an empty cache.

    Any integer capacity is accepted. With ``capacity <= 0`` every insert
    attempts an eviction first, so the cache holds at most one entry.
    """

    if trigger not in TRIGGERS:
        raise ValueError(f"unknown eviction trigger: {trigger!r}")
    return LRUCache(capacity=capacity, clock=0, trigger=trigger, _items={})


def select_victim(items: Mapping[K, Entry[V]]) -> K | None:
    """Return the least recently used key, or None for an empty table.

    Scans every entry. Equal stamps resolve to the smallest key.
    """

    if not items:
        return None
    if len(items) == 1:
        return next(iter(items))
    victim, _ = min(items.items(), key=lambda kv: (kv[1].stamp, kv[0]))
    return victim


def _is_full(key: K, cache: LRUCache[K, V]) -> bool:
    if cache.trigger == "clock":
        return cache.clock >= cache.capacity
    return key not in cache._items and len(cache._items) >= cache.capacity


def insert_with_victim(key: K, value: V, cache: LRUCache[K, V]) -> tuple[LRUCache[K, V], K | None]:
    """Insert ``key -> value`` and report which key (if any) was evicted."""

    table = dict(cache._items)
    victim = None
    if _is_full(key, cache):
        victim = select_victim(table)
        if victim is not None:
            evicted = table.pop(victim)
            logger.debug(
                "Evicted %r (stamp=%d, clock=%d) to make room for %r",
                victim,
                evicted.stamp,
                cache.clock,
                key,
            )

    table[key] = Entry(value, cache.clock)
    new = LRUCache(
        capacity=cache.capacity,
        clock=cache.clock + 1,
        trigger=cache.trigger,
        _items=table,
    )
    return new, victim


def insert(key: K, value: V, cache: LRUCache[K, V]) -> LRUCache[K, V]:
    """Return a new cache with ``key -> value`` written at the current clock."""

    new, _ = insert_with_victim(key, value, cache)
    return new


def get(
    key: K, cache: LRUCache[K, V], default: T | None = None
) -> tuple[LRUCache[K, V], V | T | None]:
    """Look up ``key``, promoting it to most recently used on a hit.

    On a miss the input cache itself is returned (clock untouched) together
    with ``default``.
    """

    entry = cache._items.get(key)
    if entry is None:
        return cache, default

    table = dict(cache._items)
    table[key] = Entry(entry.value, cache.clock)
    new = LRUCache(
        capacity=cache.capacity,
        clock=cache.clock + 1,
        trigger=cache.trigger,
        _items=table,
    )
    return new, entry.value


def size(cache: LRUCache) -> int:
    """Number of stored entries (not the clock value)."""
    return len(cache._items)


def member(key: K, cache: LRUCache[K, V]) -> bool:
    return key in cache._items


def _lru_keys(items: Mapping[K, Entry[V]]) -> list[K]:
    return sorted(items, key=lambda k: items[k].stamp)


def _ordered_keys(items: Mapping[K, Entry[V]]) -> list[K]:
    # Keys that cannot be compared (e.g. memoized calls with mixed argument
    # types) fall back to least-recently-used order.
    try:
        return sorted(items)
    except TypeError:
        return _lru_keys(items)


def keys(cache: LRUCache[K, V]) -> list[K]:
    """Stored keys in ascending order.

    If the keys are not mutually comparable, they come back from least to most
    recently used instead.
    """
    return _ordered_keys(cache._items)


def lru_order(cache: LRUCache[K, V]) -> list[K]:
    """Stored keys from least to most recently used."""
    return _lru_keys(cache._items)


def to_dict(cache: LRUCache[K, V]) -> dict[K, V]:
    """Project the table to ``key -> value`` in :func:`keys` order."""
    return {k: cache._items[k].value for k in _ordered_keys(cache._items)}
