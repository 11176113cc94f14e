"""Tool handler for get_package_manager."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from starwind_mcp.models.tools import (
    GetPackageManagerInput,
    GetPackageManagerOutput,
    PackageManagerCommands,
)
from starwind_mcp.package_manager import detect_package_manager
from starwind_mcp.results import Ok
from starwind_mcp.tools.registry import Tool

if TYPE_CHECKING:
    from starwind_mcp.state import AppState

TOOL_NAME = "get_package_manager"


async def handle(args: GetPackageManagerInput, state: AppState) -> Ok:
    log = structlog.get_logger().bind(tool=TOOL_NAME, cwd=args.cwd)
    log.info("handler_called")

    pm = detect_package_manager(args.cwd, args.default_manager or "npm")
    output = GetPackageManagerOutput(
        name=pm.name,
        commands=PackageManagerCommands(
            install=pm.install_cmd,
            add=pm.add_cmd,
            remove=pm.remove_cmd,
            run=pm.run_cmd,
        ),
    )
    return Ok(output.model_dump(mode="json", by_alias=True))


TOOL = Tool(
    name=TOOL_NAME,
    description=(
        "Detects the package manager (pnpm, yarn or npm) used in a project from its lock "
        "files and returns the matching install, add, remove and run commands."
    ),
    input_model=GetPackageManagerInput,
    handler=handle,
)
