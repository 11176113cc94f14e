"""Unit tests for AppState wiring."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from starwind_mcp.fetcher import Fetcher
from starwind_mcp.state import build_app_state

if TYPE_CHECKING:
    from starwind_mcp.config import Settings
    from tests.conftest import FakeClock


async def test_each_tool_gets_its_own_budget(settings: Settings, clock: FakeClock) -> None:
    async with httpx.AsyncClient() as client:
        state = build_app_state(settings, client, clock=clock)

    assert isinstance(state.fetcher, Fetcher)
    assert state.http_client is client
    assert state.docs.rate_limiter.max_calls_per_minute == 10
    assert state.llm_data.rate_limiter.max_calls_per_minute == 3
    assert state.pro_blocks.rate_limiter.max_calls_per_minute == 3
    assert state.components.rate_limiter.max_calls_per_minute == 3

    resolvers = [state.docs, state.llm_data, state.pro_blocks, state.components]
    assert len({id(r.cache) for r in resolvers}) == 4
    assert len({id(r.rate_limiter) for r in resolvers}) == 4


async def test_reset_clears_caches_and_limiters(settings: Settings, clock: FakeClock) -> None:
    async with httpx.AsyncClient() as client:
        state = build_app_state(settings, client, clock=clock)

    for resolver in (state.docs, state.llm_data, state.pro_blocks, state.components):
        resolver.cache.set("k", "v", 60)
        resolver.rate_limiter.record_call()

    state.reset()

    for resolver in (state.docs, state.llm_data, state.pro_blocks, state.components):
        assert resolver.cache.get("k") is None
        assert resolver.rate_limiter.remaining_calls() == resolver.rate_limiter.max_calls_per_minute
