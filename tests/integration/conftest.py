"""Integration test fixtures.

Provides a fully wired AppState around a real httpx client (mocked with respx
in the tests), a manually advanced clock shared by every cache and rate
limiter, and a helper that drives the stdio server in a subprocess. Content
fixtures come from tests/conftest.py.
"""

from __future__ import annotations

import json
import os
import subprocess
import sys
from typing import TYPE_CHECKING

import httpx
import pytest

from starwind_mcp.state import build_app_state

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable
    from pathlib import Path

    from starwind_mcp.config import Settings
    from starwind_mcp.state import AppState
    from tests.conftest import FakeClock

_INITIALIZE = {
    "jsonrpc": "2.0",
    "id": 1,
    "method": "initialize",
    "params": {
        "protocolVersion": "2025-06-18",
        "capabilities": {},
        "clientInfo": {"name": "pytest", "version": "0"},
    },
}
_INITIALIZED = {"jsonrpc": "2.0", "method": "notifications/initialized"}


def _run_mcp_exchange(env: dict[str, str], messages: list[dict]) -> dict[int, dict]:
    """Send ``messages`` to a stdio server process; return responses keyed by id."""
    proc = subprocess.Popen(
        [sys.executable, "-m", "starwind_mcp.server"],
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        env=env,
    )

    assert proc.stdin is not None
    assert proc.stdout is not None
    assert proc.stderr is not None

    for message in messages:
        proc.stdin.write(json.dumps(message) + "\n")
    proc.stdin.flush()

    # Keep stdin open until every request is answered: closing it ends the
    # receive loop and drops responses from handlers still in flight.
    expected_ids = frozenset(msg["id"] for msg in messages if "id" in msg)
    responses: dict[int, dict] = {}
    while set(responses) < expected_ids:
        line = proc.stdout.readline()
        if not line:  # server exited before answering every request
            break
        if line.strip():
            response = json.loads(line)
            if response.get("id") is not None:
                responses[response["id"]] = response

    proc.stdin.close()
    proc.stderr.read()  # drain for reliable process shutdown
    proc.wait(timeout=10)
    proc.stdout.close()
    proc.stderr.close()

    return responses


@pytest.fixture()
def subprocess_env(tmp_path: Path) -> dict[str, str]:
    """Baseline env dict for subprocess-based MCP integration tests.

    Forces stdio transport (overriding any local starwind-mcp.yaml) and points
    every remote URL at an unroutable address so no test touches the network.
    """
    env = os.environ.copy()
    env["STARWIND_MCP__SERVER__TRANSPORT"] = "stdio"
    env["STARWIND_MCP__LOGGING__LEVEL"] = "WARNING"
    env["STARWIND_MCP__DOCS__BASE_URL"] = "http://127.0.0.1:1"
    env["STARWIND_MCP__DOCS__LLMS_TXT_URL"] = "http://127.0.0.1:1/llms.txt"
    env["STARWIND_MCP__DOCS__LLMS_FULL_TXT_URL"] = "http://127.0.0.1:1/llms-full.txt"
    env["STARWIND_MCP__COMPONENTS__LLMS_TXT_URL"] = "http://127.0.0.1:1/llms.txt"
    env["STARWIND_MCP__PRO_BLOCKS__MANIFEST_URL"] = "http://127.0.0.1:1/manifest.json"
    return env


@pytest.fixture()
def mcp_exchange(subprocess_env: dict[str, str]) -> Callable[[list[dict]], dict[int, dict]]:
    """Run requests (ids from 2) against a freshly initialised stdio server."""

    def _exchange(requests: list[dict]) -> dict[int, dict]:
        return _run_mcp_exchange(subprocess_env, [_INITIALIZE, _INITIALIZED, *requests])

    return _exchange


@pytest.fixture()
async def app_state(settings: Settings, clock: FakeClock) -> AsyncGenerator[AppState, None]:
    """Full AppState wired for integration tests."""
    async with httpx.AsyncClient() as client:
        yield build_app_state(settings, client, clock=clock)
