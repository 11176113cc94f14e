"""Application state container.

AppState is created once at server startup (inside the MCP server lifespan
context manager) and injected into every tool handler by the tool registry.

Each tool that talks to the network owns its own RemoteResolver (cache + rate
limiter) so TTLs and request budgets never interfere. Tests build a fresh
AppState per case, or call ``reset()`` to clear every cache and limiter.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from starwind_mcp.cache import Cache
from starwind_mcp.fetcher import Fetcher
from starwind_mcp.rate_limiter import RateLimiter
from starwind_mcp.resolver import RemoteResolver

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from starwind_mcp.config import Settings
    from starwind_mcp.protocols import FetcherProtocol


@dataclass
class AppState:
    """Holds all shared runtime state. Passed to every tool handler."""

    settings: Settings
    fetcher: FetcherProtocol

    # starwind_docs: llms.txt, llms-full.txt and per-topic pages
    docs: RemoteResolver
    # fetch_llm_data: raw llms.txt / llms-full.txt
    llm_data: RemoteResolver
    # search_starwind_pro_blocks: the Pro manifest
    pro_blocks: RemoteResolver
    # starwind_add: the known component list
    components: RemoteResolver

    http_client: httpx.AsyncClient | None = None

    def reset(self) -> None:
        for resolver in (self.docs, self.llm_data, self.pro_blocks, self.components):
            resolver.reset()


def _resolver(
    name: str,
    max_calls_per_minute: int,
    fetcher: FetcherProtocol,
    clock: Callable[[], float],
) -> RemoteResolver:
    return RemoteResolver(
        name,
        cache=Cache(clock=clock),
        rate_limiter=RateLimiter(max_calls_per_minute, clock=clock),
        fetcher=fetcher,
    )


def build_app_state(
    settings: Settings,
    http_client: httpx.AsyncClient,
    *,
    fetcher: FetcherProtocol | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> AppState:
    """Wire one resolver per network-facing tool around a shared fetcher."""
    shared_fetcher = fetcher if fetcher is not None else Fetcher(http_client)
    return AppState(
        settings=settings,
        fetcher=shared_fetcher,
        docs=_resolver("docs", settings.docs.max_calls_per_minute, shared_fetcher, clock),
        llm_data=_resolver(
            "llm_data", settings.llm_data.max_calls_per_minute, shared_fetcher, clock
        ),
        pro_blocks=_resolver(
            "pro_blocks", settings.pro_blocks.max_calls_per_minute, shared_fetcher, clock
        ),
        components=_resolver(
            "components", settings.components.max_calls_per_minute, shared_fetcher, clock
        ),
        http_client=http_client,
    )
