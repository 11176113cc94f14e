"""Wire-level integration tests for MCP error envelope behavior."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    Exchange = Callable[[list[dict]], dict[int, dict]]


def _call_and_get_error(mcp_exchange: Exchange, name: str, arguments: dict) -> dict:
    responses = mcp_exchange(
        [
            {
                "jsonrpc": "2.0",
                "id": 2,
                "method": "tools/call",
                "params": {"name": name, "arguments": arguments},
            }
        ]
    )
    result = responses[2]["result"]
    assert result["isError"] is True

    text_payload = result["content"][0]["text"]
    assert "Error executing tool" not in text_payload
    return json.loads(text_payload)["error"]


def test_invalid_arguments_serialise_to_structured_error(mcp_exchange: Exchange) -> None:
    error = _call_and_get_error(mcp_exchange, "starwind_add", {"init": True})
    assert error["code"] == "INVALID_INPUT"
    assert error["recoverable"] is False
    assert "components" in error["message"]


def test_upstream_failure_serialises_to_structured_error(mcp_exchange: Exchange) -> None:
    error = _call_and_get_error(mcp_exchange, "fetch_llm_data", {})
    assert error["code"] == "DOCS_FETCH_FAILED"
    assert error["recoverable"] is True
    assert error["message"].startswith("Error fetching LLM data:")


def test_unknown_tool_is_rejected_by_the_server(mcp_exchange: Exchange) -> None:
    responses = mcp_exchange(
        [
            {
                "jsonrpc": "2.0",
                "id": 2,
                "method": "tools/call",
                "params": {"name": "install_component", "arguments": {}},
            }
        ]
    )
    result = responses[2]["result"]
    assert result["isError"] is True
    assert "Unknown tool: install_component" in result["content"][0]["text"]
