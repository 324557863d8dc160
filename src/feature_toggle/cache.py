"""Fixed-TTL cache for feature flag results."""

import time
from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class CacheEntry:
    """A cached value and the clock reading taken when it was stored."""

    value: Any
    stored_at: float


class FeatureFlagCache:
    """In-memory cache where every entry shares one TTL.

    Entries are only checked when read: an expired entry is deleted by the
    ``get`` that finds it and ``None`` is returned. There is no background
    sweep and no size limit.
    """

    def __init__(self, ttl: float = 60.0, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @property
    def ttl(self) -> float:
        return self._ttl

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at > self._ttl:
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = CacheEntry(value=value, stored_at=self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        # Raw presence: expired entries count until a get() removes them.
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
