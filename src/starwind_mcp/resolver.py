"""Remote fetch + fallback resolution.

Every remote resource (docs, doc pages, llms.txt data, the Pro manifest, the
component list) goes through the same decision sequence:

  1. Cache hit            → serve cached data, ``source="cache"``
  2. Quota exhausted      → raise RateLimitedError
  3. Record call + fetch  → parse, cache, ``source="network"``
  4. Fetch/parse failure  → serve the fallback if one is defined, otherwise
                            re-raise as StarwindError

Each tool owns its own RemoteResolver so TTLs and request budgets stay
independent per endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import structlog

from starwind_mcp.errors import ErrorCode, RateLimitedError, StarwindError
from starwind_mcp.models.tools import RateLimitInfo

if TYPE_CHECKING:
    from collections.abc import Callable

    from starwind_mcp.models.cache import CacheInfo
    from starwind_mcp.models.tools import Source
    from starwind_mcp.protocols import CacheProtocol, FetcherProtocol, RateLimiterProtocol

T = TypeVar("T")


@dataclass(frozen=True)
class Resolution(Generic[T]):
    """Resolved payload plus provenance."""

    data: T
    source: Source
    url: str
    cache_info: CacheInfo | None = None


class RemoteResolver:
    """Cache → rate limit → fetch → fallback orchestration for one tool."""

    def __init__(
        self,
        name: str,
        cache: CacheProtocol,
        rate_limiter: RateLimiterProtocol,
        fetcher: FetcherProtocol,
    ) -> None:
        self.name = name
        self.cache = cache
        self.rate_limiter = rate_limiter
        self.fetcher = fetcher

    async def resolve(
        self,
        key: str,
        url: str,
        *,
        ttl_seconds: int,
        as_json: bool = False,
        parse: Callable[[Any], T] | None = None,
        fallback: T | None = None,
    ) -> Resolution[T]:
        """Resolve ``key`` from cache or network.

        ``parse`` converts the raw fetched body into the cached value; a
        ``ValueError`` (including pydantic ``ValidationError``) from it counts as
        an upstream failure. When ``fallback`` is given it is served on any
        fetch or parse failure and is never cached. An exhausted budget always
        raises RateLimitedError.
        """
        log = structlog.get_logger().bind(resolver=self.name, key=key)

        cached = self.cache.get(key)
        if cached is not None:
            log.info("cache_hit")
            return Resolution(
                data=cached,
                source="cache",
                url=url,
                cache_info=self.cache.get_info(key),
            )

        if not self.rate_limiter.can_make_call():
            reset_after = self.rate_limiter.reset_time_seconds()
            log.warning("rate_limited", reset_after_seconds=reset_after)
            raise RateLimitedError(reset_after, self.rate_limiter.max_calls_per_minute)

        self.rate_limiter.record_call()
        log.info("cache_miss_fetching", url=url)

        try:
            if as_json:
                raw = await self.fetcher.fetch_json(url)
            else:
                raw = await self.fetcher.fetch_text(url)
            data = parse(raw) if parse is not None else raw
        except (StarwindError, ValueError) as exc:
            if fallback is not None:
                log.warning("fetch_failed_using_fallback", url=url, error=str(exc))
                return Resolution(data=fallback, source="fallback", url=url)
            if isinstance(exc, StarwindError):
                raise
            raise StarwindError(
                code=ErrorCode.UPSTREAM_FETCH_FAILED,
                message=f"Unexpected content from {url}: {exc}",
                suggestion="The remote document format may have changed. Try again later.",
                recoverable=True,
            ) from exc

        self.cache.set(key, data, ttl_seconds)
        return Resolution(
            data=data,
            source="network",
            url=url,
            cache_info=self.cache.get_info(key),
        )

    def rate_limit_info(self) -> RateLimitInfo:
        return RateLimitInfo(
            requests_remaining=self.rate_limiter.remaining_calls(),
            reset_after_seconds=self.rate_limiter.reset_time_seconds(),
        )

    def reset(self) -> None:
        """Drop all cached entries and recorded calls."""
        self.cache.clear()
        self.rate_limiter.reset()
