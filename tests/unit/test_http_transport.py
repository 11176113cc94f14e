"""Tests for the Streamable HTTP transport security layer.

Requests go through httpx's ASGI transport so no real server is started. The
inner app is a trivial 200-OK responder that only runs when every check
passes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from starwind_mcp.config import Settings
from starwind_mcp.server import create_server
from starwind_mcp.transport import (
    MCP_PATH,
    SUPPORTED_PROTOCOL_VERSIONS,
    MCPSecurityMiddleware,
    build_http_app,
)

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send


async def _ok_app(scope: Scope, receive: Receive, send: Send) -> None:
    await send({"type": "http.response.start", "status": 200, "headers": []})
    await send({"type": "http.response.body", "body": b"ok"})


async def _get(app: ASGIApp, headers: dict[str, str] | None = None) -> httpx.Response:
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://localhost",
    ) as client:
        return await client.get(MCP_PATH, headers=headers)


# ---------------------------------------------------------------------------
# Bearer authentication
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "headers",
    [None, {"Authorization": "Bearer anything"}],
)
async def test_auth_disabled_ignores_authorization(headers: dict[str, str] | None) -> None:
    app = MCPSecurityMiddleware(_ok_app, auth_enabled=False)
    assert (await _get(app, headers)).status_code == 200


@pytest.mark.parametrize(
    ("headers", "status"),
    [
        ({"Authorization": "Bearer starwind-key"}, 200),
        ({"Authorization": "Bearer other-key"}, 401),
        ({"Authorization": "starwind-key"}, 401),
        (None, 401),
    ],
)
async def test_auth_enabled(headers: dict[str, str] | None, status: int) -> None:
    app = MCPSecurityMiddleware(_ok_app, auth_enabled=True, auth_key="starwind-key")
    assert (await _get(app, headers)).status_code == status


# ---------------------------------------------------------------------------
# Origin and protocol version
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("origin", "status"),
    [
        ("http://localhost:4321", 200),
        ("https://localhost", 200),
        ("http://127.0.0.1:8080", 200),
        ("https://starwind.dev", 403),
        ("http://localhost.attacker.example", 403),
        ("http://10.0.0.5", 403),
    ],
)
async def test_origin(origin: str, status: int) -> None:
    app = MCPSecurityMiddleware(_ok_app, auth_enabled=False)
    assert (await _get(app, {"Origin": origin})).status_code == status


async def test_missing_origin_allowed() -> None:
    app = MCPSecurityMiddleware(_ok_app, auth_enabled=False)
    assert (await _get(app)).status_code == 200


@pytest.mark.parametrize("version", sorted(SUPPORTED_PROTOCOL_VERSIONS))
async def test_supported_protocol_version(version: str) -> None:
    app = MCPSecurityMiddleware(_ok_app, auth_enabled=False)
    assert (await _get(app, {"MCP-Protocol-Version": version})).status_code == 200


async def test_unsupported_protocol_version() -> None:
    app = MCPSecurityMiddleware(_ok_app, auth_enabled=False)
    response = await _get(app, {"MCP-Protocol-Version": "2024-01-01"})
    assert response.status_code == 400
    assert "2024-01-01" in response.text


async def test_auth_rejection_precedes_origin_check() -> None:
    app = MCPSecurityMiddleware(_ok_app, auth_enabled=True, auth_key="key")
    response = await _get(app, {"Authorization": "Bearer nope", "Origin": "https://evil.example"})
    assert response.status_code == 401


# ---------------------------------------------------------------------------
# Assembled app
# ---------------------------------------------------------------------------


async def test_built_app_is_secured() -> None:
    app = build_http_app(create_server(Settings()), auth_enabled=True, auth_key="key")
    assert isinstance(app, MCPSecurityMiddleware)
    assert (await _get(app)).status_code == 401
    forbidden = await _get(app, {"Origin": "https://evil.example", "Authorization": "Bearer key"})
    assert forbidden.status_code == 403


async def test_shared_client_closed_when_app_shuts_down() -> None:
    client = httpx.AsyncClient()
    app = build_http_app(
        create_server(Settings()), auth_enabled=False, auth_key=None, http_client=client
    )
    assert isinstance(app, MCPSecurityMiddleware)
    http_app = app.app
    async with http_app.router.lifespan_context(http_app):
        assert not client.is_closed
    assert client.is_closed
