from __future__ import annotations
import time
from typing import Any, Callable, Dict, NamedTuple, Optional

from .errors import ConfigurationError


class CacheEntry(NamedTuple):
    value: Any
    inserted_at: float


class TTLCache:
    """
    Process-local key -> value store with a fixed time-to-live.

    Expiry is lazy: a stale entry is dropped by the `get` that finds it.
    With `max_items` set the store is bounded and, when full, a new key
    evicts the entry with the oldest insertion time (not LRU). Ties go to
    whichever of them was inserted first. Safe for single-loop asyncio use.
    """
    def __init__(
        self,
        ttl_seconds: float,
        max_items: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ConfigurationError(f"ttl_seconds must be positive, got {ttl_seconds!r}")
        if max_items is not None and max_items <= 0:
            raise ConfigurationError(f"max_items must be positive or None, got {max_items!r}")
        self._ttl = ttl_seconds
        self._max = max_items
        self._clock = clock
        self._store: Dict[str, CacheEntry] = {}

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def max_items(self) -> Optional[int]:
        return self._max

    def get(self, key: str) -> Optional[Any]:
        entry = self._store.get(key)
        if entry is None:
            return None
        if self._clock() - entry.inserted_at > self._ttl:
            self._store.pop(key, None)
            return None
        return entry.value

    def set(self, key: str, value: Any) -> None:
        if key in self._store:
            # re-append so mapping order follows insertion time
            del self._store[key]
        elif self._max is not None and len(self._store) >= self._max:
            self._evict_oldest()
        self._store[key] = CacheEntry(value, self._clock())

    def clear(self) -> None:
        self._store.clear()

    def _evict_oldest(self) -> None:
        # min() keeps the first of equal timestamps, i.e. insertion order
        oldest = min(self._store, key=lambda k: self._store[k].inserted_at)
        self._store.pop(oldest, None)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None  # purges a stale key too

    def __len__(self) -> int:
        return len(self._store)
