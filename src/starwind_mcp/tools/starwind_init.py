"""Tool handler for starwind_init."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from starwind_mcp.components import build_init_command
from starwind_mcp.models.tools import StarwindInitInput, StarwindInitOutput
from starwind_mcp.package_manager import detect_package_manager, package_manager_info
from starwind_mcp.results import Ok
from starwind_mcp.tools.registry import Tool

if TYPE_CHECKING:
    from starwind_mcp.state import AppState

TOOL_NAME = "starwind_init"

_NEXT_STEPS_PRO = [
    "Run the command above in your project directory",
    "Then use starwind_add to add components: e.g., button, card, dialog",
    "Or use search_starwind_pro_blocks to find Pro blocks like heroes, footers, etc.",
]
_NEXT_STEPS_STANDARD = [
    "Run the command above in your project directory",
    "Then use starwind_add to add components: e.g., button, card, dialog",
    "Note: Pro blocks will NOT work with this setup",
]

REQUIREMENTS = {
    "framework": "Astro",
    "styling": "Tailwind CSS v4",
    "note": "Make sure your project has Astro and Tailwind CSS v4 configured before running init.",
}
CLI_FLAGS = {
    "--defaults": "Accepts all default configuration options (required for AI execution)",
    "--pro": "Enables Starwind Pro support for premium blocks",
    "--yes": "Skips confirmation prompts (used by add command, not init)",
}


async def handle(args: StarwindInitInput, state: AppState) -> Ok:
    """Handle a starwind_init tool call.

    Pro setup is the default because it is a superset of the standard setup.
    """
    log = structlog.get_logger().bind(tool=TOOL_NAME, pro=args.pro)
    log.info("handler_called")

    if args.package_manager is not None:
        pm = package_manager_info(args.package_manager)
        pm_source = "user-specified"
    else:
        pm = detect_package_manager(args.cwd)
        pm_source = "detected"

    if args.pro:
        setup_type = "Starwind Pro"
        description = (
            "This command initializes Starwind UI with Pro support. You can use both "
            "standard components (button, card, etc.) AND Pro blocks "
            "(@starwind-pro/hero-01, etc.)."
        )
        next_steps = _NEXT_STEPS_PRO
    else:
        setup_type = "Starwind Standard"
        description = (
            "This command initializes Starwind UI standard. You can only use standard "
            "components. To use Pro blocks, re-run init with pro=true."
        )
        next_steps = _NEXT_STEPS_STANDARD

    output = StarwindInitOutput(
        command=build_init_command(pm, pro=args.pro),
        package_manager=pm.name,
        package_manager_source=pm_source,
        pro_enabled=args.pro,
        setup_type=setup_type,
        description=description,
        next_steps=list(next_steps),
        requirements=REQUIREMENTS,
        cli_flags=CLI_FLAGS,
    )
    return Ok(output.model_dump(mode="json", by_alias=True))


TOOL = Tool(
    name=TOOL_NAME,
    description=(
        "Generates the command to initialize Starwind UI in an Astro project. Defaults to "
        "Starwind Pro setup, which supports both standard components and Pro blocks. "
        "Detects the package manager from lock files and uses --defaults to skip prompts."
    ),
    input_model=StarwindInitInput,
    handler=handle,
)
