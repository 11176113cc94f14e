"""MCP server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Create AppState via the FastMCP lifespan context manager
- Register the tools in the tool registry on the FastMCP instance
- Start the correct transport (stdio or HTTP)
"""

from __future__ import annotations

import json
import logging
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import structlog
from mcp.server.fastmcp import Context, FastMCP
from mcp.server.fastmcp.tools import Tool as FastMCPTool
from mcp.server.fastmcp.utilities.func_metadata import ArgModelBase, FuncMetadata
from mcp.types import CallToolResult, TextContent
from pydantic import ConfigDict

from starwind_mcp import __version__
from starwind_mcp.config import Settings
from starwind_mcp.fetcher import build_http_client
from starwind_mcp.results import Fatal
from starwind_mcp.state import build_app_state
from starwind_mcp.tools import build_registry
from starwind_mcp.transport import MCP_PATH, run_http_server

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from starwind_mcp.errors import StarwindError
    from starwind_mcp.results import ToolResult
    from starwind_mcp.state import AppState
    from starwind_mcp.tools import Tool, ToolRegistry

log = structlog.get_logger()

SERVER_NAME = "starwind-ui"


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # stdout carries the MCP JSON-RPC stream
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def app_state_context(settings: Settings) -> AsyncGenerator[AppState, None]:
    """Create and tear down the HTTP client and AppState."""
    http_client = build_http_client(settings.fetcher)
    state = build_app_state(settings, http_client)
    log.info("server_started", version=__version__, transport=settings.server.transport)
    try:
        yield state
    finally:
        await http_client.aclose()
        log.info("server_stopping")


# ---------------------------------------------------------------------------
# Result serialisation
# ---------------------------------------------------------------------------


def _serialise_tool_error(error: StarwindError) -> CallToolResult:
    """Convert a StarwindError to the MCP tool error result envelope."""
    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(error.to_dict()))],
        isError=True,
    )


def to_call_tool_result(result: ToolResult) -> CallToolResult:
    """Render a tagged tool result as a single JSON text block.

    ``Recoverable`` payloads are successful calls: the failure is part of the
    data the assistant should relay, not a protocol error.
    """
    if isinstance(result, Fatal):
        return _serialise_tool_error(result.error)
    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(result.payload, indent=2))],
        isError=False,
    )


# ---------------------------------------------------------------------------
# FastMCP instance and tool registration
# ---------------------------------------------------------------------------


class _RawArguments(ArgModelBase):
    """Hands the untouched argument object to the tool registry.

    FastMCP would otherwise validate against a model derived from the wrapper
    signature and report failures as plain text. The registry validates
    against the tool's pydantic input model and reports INVALID_INPUT.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    def model_dump_one_level(self) -> dict[str, Any]:
        return {"arguments": dict(self.model_extra or {})}


def _to_fastmcp_tool(tool: Tool, registry: ToolRegistry) -> FastMCPTool:
    """Wrap a registry tool so FastMCP advertises its schema and dispatches to it."""

    async def run(ctx: Context, arguments: dict[str, Any]) -> CallToolResult:
        state: AppState = ctx.request_context.lifespan_context
        result = await registry.call(tool.name, arguments, state)
        return to_call_tool_result(result)

    return FastMCPTool(
        fn=run,
        name=tool.name,
        description=tool.description,
        parameters=tool.input_schema,
        fn_metadata=FuncMetadata(arg_model=_RawArguments),
        is_async=True,
        context_kwarg="ctx",
    )


def create_server(
    settings: Settings,
    *,
    registry: ToolRegistry | None = None,
    state: AppState | None = None,
) -> FastMCP:
    """Build the FastMCP server with every registry tool attached.

    When ``state`` is given every session shares it (HTTP: one cache and one
    rate limit budget per process). Otherwise each session run creates its own,
    which for stdio means exactly one.
    """
    tools = registry if registry is not None else build_registry()

    @asynccontextmanager
    async def lifespan(_server: FastMCP) -> AsyncGenerator[AppState, None]:
        if state is not None:
            yield state
            return
        async with app_state_context(settings) as session_state:
            yield session_state

    mcp = FastMCP(
        SERVER_NAME,
        lifespan=lifespan,
        host=settings.server.host,
        port=settings.server.port,
        streamable_http_path=MCP_PATH,
        tools=[_to_fastmcp_tool(tool, tools) for tool in tools],
    )
    # FastMCP doesn't expose a version kwarg; set it on the underlying Server
    # so the initialize handshake reports ours, not the SDK's.
    mcp._mcp_server.version = __version__  # pyright: ignore[reportPrivateUsage]
    return mcp


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    settings = Settings()
    _setup_logging(settings)
    log.info("server_starting", version=__version__, transport=settings.server.transport)

    if settings.server.transport == "http":
        http_client = build_http_client(settings.fetcher)
        state = build_app_state(settings, http_client)
        run_http_server(create_server(settings, state=state), settings, http_client)
        return

    create_server(settings).run()


if __name__ == "__main__":
    main()
