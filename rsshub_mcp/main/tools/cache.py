"""Small TTL cache for the bulk catalog endpoints.

Entries hold the decoded JSON payload, not model instances. The payload is
deep-copied on the way in and on every hit, so nothing a caller does to a
returned object can reach what is cached.
"""

from __future__ import annotations

import copy
import time
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable, Dict, Optional

NAMESPACES_KEY = "namespaces"
RADAR_RULES_KEY = "radar_rules"


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    stored_at: float

    def is_fresh(self, ttl_secs: float, now: float) -> bool:
        return now - self.stored_at <= ttl_secs


class TTLCache:
    """Key/value store guarded by a single lock.

    The lock only covers the dictionary lookup and the assignment; callers
    perform their network fetch between ``get`` and ``put`` without holding it.
    Two concurrent misses on the same key may therefore both fetch, and the
    last ``put`` wins.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = Lock()

    def get(self, key: str, ttl_secs: float) -> Optional[Any]:
        """Return the cached value for *key* if it is younger than *ttl_secs*."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or not entry.is_fresh(ttl_secs, self._clock()):
                return None
            value = entry.value
        return copy.deepcopy(value)

    def put(self, key: str, value: Any) -> None:
        entry = CacheEntry(value=copy.deepcopy(value), stored_at=self._clock())
        with self._lock:
            self._entries[key] = entry
