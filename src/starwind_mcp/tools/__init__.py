"""MCP tool handlers and the registry that dispatches to them."""

from __future__ import annotations

from starwind_mcp.tools import (
    fetch_llm_data,
    get_package_manager,
    search_pro_blocks,
    starwind_add,
    starwind_docs,
    starwind_init,
)
from starwind_mcp.tools.registry import Tool, ToolRegistry


def build_registry() -> ToolRegistry:
    """Registry of every tool the server advertises, in listing order."""
    return ToolRegistry(
        [
            starwind_docs.TOOL,
            starwind_add.TOOL,
            search_pro_blocks.TOOL,
            starwind_init.TOOL,
            get_package_manager.TOOL,
            fetch_llm_data.TOOL,
        ]
    )


__all__ = ["Tool", "ToolRegistry", "build_registry"]
