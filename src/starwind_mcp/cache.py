"""In-memory TTL cache with lazy expiration.

Each resolver owns one ``Cache`` instance; entries live for the lifetime of the
process and are never persisted. Expired entries are evicted when read and there
is no background sweep. The cache is not locked: concurrent misses for the same
key may both fetch and both write, and the later write wins.

Cache operations never raise for missing or expired keys; callers treat
``None`` as a miss.
"""

from __future__ import annotations

import math
import time
from typing import TYPE_CHECKING, Any

import structlog

from starwind_mcp.models.cache import CacheEntry, CacheInfo

if TYPE_CHECKING:
    from collections.abc import Callable

log = structlog.get_logger()


class Cache:
    """Key/value store with per-entry expiration implementing CacheProtocol."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Any | None:
        """Return cached data, or ``None`` on miss. Evicts the entry if expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() > entry.expires_at:
            del self._entries[key]
            log.debug("cache_entry_expired", key=key)
            return None
        return entry.data

    def set(self, key: str, data: Any, ttl_seconds: float) -> None:
        """Store ``data`` under ``key``, replacing any existing entry."""
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        now = self._clock()
        self._entries[key] = CacheEntry(data=data, created_at=now, expires_at=now + ttl_seconds)

    def get_info(self, key: str) -> CacheInfo | None:
        """Return age and remaining TTL in whole seconds, or ``None`` if absent."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        now = self._clock()
        return CacheInfo(
            age=math.floor(now - entry.created_at),
            remaining_ttl=max(0, math.floor(entry.expires_at - now)),
        )

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
