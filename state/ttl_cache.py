"""
TTL Cache

Keyed in-memory store for lookup results with a fixed freshness window.
An entry is fresh while less than CACHE_TTL_SECONDS have passed since it was
stored; at exactly 600 seconds it counts as stale.

Design:
- Expiry is checked lazily on read; a stale entry stays in memory until a
  later put() for the same key overwrites it
- One lock guards the whole store, so get/put are linearizable across threads
- Values handed out are deep copies; the cached object is never shared
- The clock is injected so tests can move time without sleeping
"""

from copy import deepcopy
from dataclasses import dataclass
from typing import Callable, Generic, Hashable, Optional, TypeVar
import threading
import time

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

# Entries older than this are ignored on read
CACHE_TTL_SECONDS = 600


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    """A cached value and the monotonic instant it was stored."""
    stored_at: float
    value: V


class TTLCache(Generic[K, V]):
    """Thread-safe keyed cache whose entries are usable for CACHE_TTL_SECONDS.

    Args:
        name: Label used in diagnostics (e.g. "commodity", "system")
        clock: Zero-argument callable returning monotonic seconds

    Example:
        cache: TTLCache[str, Commodity] = TTLCache("commodity")
        cache.put("Gold", commodity)
        cache.get("Gold")  # copy of commodity, until 600s have elapsed
    """

    def __init__(self, name: str = "cache", clock: Callable[[], float] = time.monotonic):
        self.name = name
        self._clock = clock
        self._entries: dict[K, CacheEntry[V]] = {}
        self._lock = threading.Lock()

    def _is_fresh(self, entry: CacheEntry[V], now: float) -> bool:
        return now - entry.stored_at < CACHE_TTL_SECONDS

    def get(self, key: K) -> Optional[V]:
        """Return a copy of the value for key, or None if absent or stale."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or not self._is_fresh(entry, self._clock()):
                return None
            return deepcopy(entry.value)

    def put(self, key: K, value: V) -> None:
        """Insert or overwrite the entry for key, stamped with the current instant."""
        entry = CacheEntry(stored_at=self._clock(), value=deepcopy(value))
        with self._lock:
            self._entries[key] = entry

    def __len__(self) -> int:
        """Number of entries held, stale ones included."""
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: K) -> bool:
        """True if an entry is held for key, fresh or not."""
        with self._lock:
            return key in self._entries

    def stats(self) -> dict:
        """Entry counts for debugging."""
        with self._lock:
            now = self._clock()
            fresh = sum(1 for e in self._entries.values() if self._is_fresh(e, now))
            return {
                "name": self.name,
                "entries": len(self._entries),
                "fresh": fresh,
                "stale": len(self._entries) - fresh,
            }
