"""In-memory TTL cache used by the market data services."""

import time
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class MemoryCache(Generic[T]):
    """
    Key-value store whose entries expire `ttl_seconds` after they were set.

    Expiry is checked lazily on read; there is no background eviction and no
    size bound. The clock is injectable so tests can advance time.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self._ttl = ttl_seconds
        self._clock = clock
        # key -> (value, stored_at)
        self._store: dict[str, tuple[T, float]] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: str) -> Optional[T]:
        """Return the cached value, or None if missing or expired."""
        entry = self._store.get(key)
        if entry is None:
            return None
        value, stored_at = entry
        if self._clock() - stored_at > self._ttl:
            del self._store[key]
            return None
        return value

    def set(self, key: str, value: T) -> None:
        self._store[key] = (value, self._clock())

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def clear(self) -> None:
        self._store.clear()

    def size(self) -> int:
        """Number of stored entries, including expired ones not yet read."""
        return len(self._store)

    def __len__(self) -> int:
        return self.size()
