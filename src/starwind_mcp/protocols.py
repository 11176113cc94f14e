"""Protocol interfaces for swappable components.

Resolvers and AppState reference these protocols, not the concrete
implementations. This allows:
- Tests to use lightweight fakes (e.g. a fetcher that counts calls)
- Future backends (e.g. a shared cache) to be swapped without changing tool code
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from starwind_mcp.models.cache import CacheInfo


class CacheProtocol(Protocol):
    """Interface for a per-resolver TTL cache."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, data: Any, ttl_seconds: float) -> None: ...

    def get_info(self, key: str) -> CacheInfo | None: ...

    def clear(self) -> None: ...


class RateLimiterProtocol(Protocol):
    """Interface for a sliding-window call counter."""

    max_calls_per_minute: int

    def can_make_call(self) -> bool: ...

    def record_call(self) -> None: ...

    def remaining_calls(self) -> int: ...

    def reset_time_seconds(self) -> int: ...

    def reset(self) -> None: ...


class FetcherProtocol(Protocol):
    """Interface for the HTTP fetcher."""

    async def fetch_text(self, url: str) -> str: ...

    async def fetch_json(self, url: str) -> Any: ...
