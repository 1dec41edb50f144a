"""Bounded store of normalized AQI records, keyed by city.

Entries live for a fixed TTL and are only checked for expiry when read;
nothing sweeps in the background. The store keeps keys in an OrderedDict in
the order they were last written or read, so when a put pushes it past
capacity the first key is the one dropped.

State is per process and lost on restart.
"""

import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable

from services.models import AqiRecord

CACHE_TTL_SECONDS = 5 * 60
MAX_CACHE_ENTRIES = 100


def city_key(city: str) -> str:
    """Normalized cache key: trimmed and lowercased."""
    return city.strip().lower()


@dataclass
class _Entry:
    record: AqiRecord
    expires_at: float
    last_accessed: float


class CacheStore:
    def __init__(
        self,
        max_entries: int = MAX_CACHE_ENTRIES,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._max_entries = max_entries
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._store: OrderedDict[str, _Entry] = OrderedDict()

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    @property
    def ttl_ms(self) -> int:
        return int(self._ttl_seconds * 1000)

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: str) -> bool:
        # Membership probe only: no expiry check, no touch
        return key in self._store

    def get(self, key: str) -> AqiRecord | None:
        entry = self._store.get(key)
        if entry is None:
            return None

        now = self._clock()
        if entry.expires_at <= now:
            del self._store[key]
            return None

        entry.last_accessed = now
        self._store.move_to_end(key)
        return entry.record

    def put(self, key: str, record: AqiRecord) -> None:
        now = self._clock()
        self._store.pop(key, None)
        self._store[key] = _Entry(record=record, expires_at=now + self._ttl_seconds, last_accessed=now)
        if len(self._store) > self._max_entries:
            self._store.popitem(last=False)

    def clear(self) -> None:
        self._store.clear()


cache = CacheStore()
