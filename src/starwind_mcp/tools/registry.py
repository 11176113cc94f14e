"""Uniform tool interface and name-keyed dispatch.

Every tool is a ``Tool`` record: a name, a description, a pydantic input model
(whose JSON schema is advertised to clients), and an async handler taking the
validated input and AppState. The registry validates arguments, runs the
handler, and converts StarwindError into a ``Fatal`` result. No MCP imports;
server.py handles the MCP wiring.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import BaseModel, ValidationError

from starwind_mcp.errors import ErrorCode, StarwindError
from starwind_mcp.results import Fatal

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterator

    from starwind_mcp.results import ToolResult
    from starwind_mcp.state import AppState

log = structlog.get_logger()


@dataclass(frozen=True)
class Tool:
    name: str
    description: str
    input_model: type[BaseModel]
    handler: Callable[[Any, AppState], Awaitable[ToolResult]]

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema(by_alias=True)


def _format_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "arguments"
        problems.append(f"{location}: {error['msg']}")
    return "Invalid arguments: " + "; ".join(problems)


class ToolRegistry:
    """Lookup table of tools keyed by name."""

    def __init__(self, tools: list[Tool] | None = None) -> None:
        self._tools: dict[str, Tool] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: Tool) -> None:
        if tool.name in self._tools:
            raise ValueError(f"Tool already registered: {tool.name}")
        self._tools[tool.name] = tool

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def __iter__(self) -> Iterator[Tool]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    async def call(
        self,
        name: str,
        arguments: dict[str, Any] | None,
        state: AppState,
    ) -> ToolResult:
        """Validate ``arguments`` and run the named tool's handler.

        Expected failures come back as ``Fatal``; unexpected exceptions are
        logged and propagate to the MCP layer.
        """
        tool = self._tools.get(name)
        if tool is None:
            log.warning("tool_not_found", tool=name)
            return Fatal(
                StarwindError(
                    code=ErrorCode.TOOL_NOT_FOUND,
                    message=f"Tool '{name}' not found",
                    suggestion=f"Available tools: {', '.join(sorted(self._tools))}.",
                    recoverable=False,
                )
            )

        try:
            validated = tool.input_model.model_validate(arguments or {})
        except ValidationError as exc:
            error = StarwindError(
                code=ErrorCode.INVALID_INPUT,
                message=_format_validation_error(exc),
                suggestion="Check the tool's input schema and try again.",
                recoverable=False,
            )
            log.warning("tool_error", tool=name, code=error.code, message=error.message)
            return Fatal(error)

        try:
            return await tool.handler(validated, state)
        except StarwindError as exc:
            log.warning(
                "tool_error",
                tool=name,
                code=exc.code,
                message=exc.message,
                recoverable=exc.recoverable,
            )
            return Fatal(exc)
        except Exception:
            log.error("tool_unexpected_error", tool=name, exc_info=True)
            raise
