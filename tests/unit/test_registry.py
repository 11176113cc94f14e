"""Unit tests for starwind_mcp.tools.registry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from pydantic import Field

from starwind_mcp.errors import ErrorCode, StarwindError
from starwind_mcp.models.base import WireModel
from starwind_mcp.results import Fatal, Ok, Recoverable
from starwind_mcp.tools import build_registry
from starwind_mcp.tools.registry import Tool, ToolRegistry

if TYPE_CHECKING:
    from starwind_mcp.state import AppState


class EchoInput(WireModel):
    component_name: str = Field(max_length=10)
    count: int = 1


async def _echo(args: EchoInput, state: AppState) -> Ok:
    return Ok({"componentName": args.component_name, "count": args.count})


async def _soft_fail(args: EchoInput, state: AppState) -> Recoverable:
    return Recoverable({"success": False})


async def _raise_domain_error(args: EchoInput, state: AppState) -> Ok:
    raise StarwindError(
        code=ErrorCode.DOCS_FETCH_FAILED,
        message="upstream down",
        suggestion="later",
        recoverable=True,
    )


async def _raise_bug(args: EchoInput, state: AppState) -> Ok:
    raise RuntimeError("bug")


def _registry(handler: Any = _echo) -> ToolRegistry:
    return ToolRegistry([Tool("echo", "Echo input", EchoInput, handler)])


# The handlers above never touch state
STATE: Any = None


class TestCall:
    async def test_camel_case_arguments_validated(self) -> None:
        result = await _registry().call("echo", {"componentName": "button", "count": 2}, STATE)
        assert result == Ok({"componentName": "button", "count": 2})

    async def test_snake_case_arguments_accepted(self) -> None:
        result = await _registry().call("echo", {"component_name": "card"}, STATE)
        assert isinstance(result, Ok)

    async def test_none_arguments_treated_as_empty(self) -> None:
        result = await _registry().call("echo", None, STATE)
        assert isinstance(result, Fatal)
        assert result.error.code == ErrorCode.INVALID_INPUT

    async def test_invalid_arguments_become_fatal(self) -> None:
        result = await _registry().call("echo", {"componentName": "x" * 20}, STATE)
        assert isinstance(result, Fatal)
        assert result.error.code == ErrorCode.INVALID_INPUT
        assert "componentName" in result.error.message or "component_name" in result.error.message
        assert result.error.recoverable is False

    async def test_unknown_tool(self) -> None:
        result = await _registry().call("nope", {}, STATE)
        assert isinstance(result, Fatal)
        assert result.error.code == ErrorCode.TOOL_NOT_FOUND
        assert "echo" in result.error.suggestion

    async def test_recoverable_passes_through(self) -> None:
        result = await _registry(_soft_fail).call("echo", {"componentName": "a"}, STATE)
        assert result == Recoverable({"success": False})

    async def test_domain_error_becomes_fatal(self) -> None:
        result = await _registry(_raise_domain_error).call("echo", {"componentName": "a"}, STATE)
        assert isinstance(result, Fatal)
        assert result.error.code == ErrorCode.DOCS_FETCH_FAILED
        assert result.error.recoverable is True

    async def test_unexpected_error_propagates(self) -> None:
        with pytest.raises(RuntimeError):
            await _registry(_raise_bug).call("echo", {"componentName": "a"}, STATE)


class TestRegistration:
    def test_duplicate_name_rejected(self) -> None:
        registry = _registry()
        with pytest.raises(ValueError):
            registry.register(Tool("echo", "again", EchoInput, _echo))

    def test_input_schema_uses_wire_names(self) -> None:
        schema = Tool("echo", "Echo", EchoInput, _echo).input_schema
        assert schema["type"] == "object"
        assert set(schema["properties"]) == {"componentName", "count"}
        assert schema["required"] == ["componentName"]


class TestBuildRegistry:
    def test_all_tools_registered_in_order(self) -> None:
        assert [tool.name for tool in build_registry()] == [
            "starwind_docs",
            "starwind_add",
            "search_starwind_pro_blocks",
            "starwind_init",
            "get_package_manager",
            "fetch_llm_data",
        ]

    def test_required_inputs(self) -> None:
        tools = {tool.name: tool for tool in build_registry()}
        assert tools["starwind_add"].input_schema["required"] == ["components"]
        assert tools["get_package_manager"].input_schema["required"] == ["cwd"]
        assert "required" not in tools["starwind_docs"].input_schema

    def test_add_schema_exposes_package_manager_enum(self) -> None:
        tools = {tool.name: tool for tool in build_registry()}
        schema = tools["starwind_add"].input_schema
        assert "packageManager" in schema["properties"]
