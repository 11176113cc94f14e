"""Streamable HTTP transport and security middleware for the MCP server."""

from __future__ import annotations

import re
import secrets
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
import uvicorn
from starlette.datastructures import Headers
from starlette.responses import Response

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    import httpx
    from mcp.server.fastmcp import FastMCP
    from starlette.applications import Starlette
    from starlette.types import ASGIApp, Receive, Scope, Send

    from starwind_mcp.config import Settings

log = structlog.get_logger()

MCP_PATH = "/mcp"
SUPPORTED_PROTOCOL_VERSIONS: frozenset[str] = frozenset(
    {"2025-11-25", "2025-06-18", "2025-03-26"}
)
_LOCALHOST_ORIGIN = re.compile(r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$")


class MCPSecurityMiddleware:
    """Pure ASGI middleware for HTTP transport security.

    Enforces three checks on every HTTP request:
    1. Optional bearer key authentication.
    2. Origin validation (localhost only) to prevent DNS rebinding.
    3. Protocol version validation via MCP-Protocol-Version header.

    Non-HTTP scopes (the ASGI lifespan) pass straight through. Implemented as
    pure ASGI so streamed responses are never buffered by this layer.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        auth_enabled: bool,
        auth_key: str | None = None,
    ) -> None:
        self.app = app
        self.auth_enabled = auth_enabled
        self.auth_key = auth_key

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            headers = Headers(scope=scope)

            if self.auth_enabled:
                auth_header = headers.get("authorization", "")
                if not auth_header.startswith("Bearer ") or auth_header[7:] != self.auth_key:
                    await Response("Unauthorized", status_code=401)(scope, receive, send)
                    return

            origin = headers.get("origin", "")
            if origin and not _LOCALHOST_ORIGIN.match(origin):
                await Response("Forbidden", status_code=403)(scope, receive, send)
                return

            proto_version = headers.get("mcp-protocol-version", "")
            if proto_version and proto_version not in SUPPORTED_PROTOCOL_VERSIONS:
                await Response(
                    f"Unsupported protocol version: {proto_version}",
                    status_code=400,
                )(scope, receive, send)
                return

        await self.app(scope, receive, send)


def build_http_app(
    mcp: FastMCP,
    *,
    auth_enabled: bool,
    auth_key: str | None,
    http_client: httpx.AsyncClient | None = None,
) -> ASGIApp:
    """Wrap FastMCP's Streamable HTTP app in the security middleware.

    ``http_client`` (the upstream client shared by every session) is closed
    after the session manager shuts down.
    """
    http_app = mcp.streamable_http_app()

    if http_client is not None:
        run_session_manager = http_app.router.lifespan_context

        @asynccontextmanager
        async def lifespan(app: Starlette) -> AsyncGenerator[None, None]:
            async with run_session_manager(app):
                try:
                    yield
                finally:
                    await http_client.aclose()

        http_app.router.lifespan_context = lifespan

    return MCPSecurityMiddleware(http_app, auth_enabled=auth_enabled, auth_key=auth_key)


def run_http_server(
    mcp: FastMCP,
    settings: Settings,
    http_client: httpx.AsyncClient | None = None,
) -> None:
    """Start the MCP server with Streamable HTTP transport."""
    http_log = log.bind(transport="http")

    auth_key: str | None = settings.server.auth_key or None

    if settings.server.auth_enabled and not auth_key:
        auth_key = secrets.token_urlsafe(32)
        http_log.warning("http_auth_key_auto_generated", auth_key=auth_key)

    if not settings.server.auth_enabled:
        http_log.warning("http_auth_disabled")

    secured_app = build_http_app(
        mcp,
        auth_enabled=settings.server.auth_enabled,
        auth_key=auth_key,
        http_client=http_client,
    )

    http_log.info("http_server_listening", host=settings.server.host, port=settings.server.port)
    uvicorn.run(
        secured_app,
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,  # structlog handles logging
    )
