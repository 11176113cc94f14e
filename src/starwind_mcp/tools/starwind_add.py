"""Tool handler for starwind_add.

Validates requested component names against the live component list parsed
from llms.txt (falling back to a bundled list), then renders the Starwind CLI
command for the detected package manager. The command is returned for the
assistant to run; nothing is executed here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from starwind_mcp.components import (
    FALLBACK_COMPONENTS,
    build_add_command,
    build_init_command,
    is_install_all,
    validate_components,
)
from starwind_mcp.errors import ErrorCode, StarwindError
from starwind_mcp.models.tools import (
    AddWarnings,
    StarwindAddFailure,
    StarwindAddInput,
    StarwindAddOutput,
)
from starwind_mcp.package_manager import detect_package_manager, package_manager_info
from starwind_mcp.parser import parse_component_slugs
from starwind_mcp.results import Ok, Recoverable
from starwind_mcp.tools.registry import Tool

if TYPE_CHECKING:
    from starwind_mcp.resolver import Resolution
    from starwind_mcp.state import AppState

TOOL_NAME = "starwind_add"

INIT_NOTE = (
    "The init command uses --defaults to accept all default options. If you need custom "
    "configuration, run without --defaults and respond to the prompts manually."
)
INSTRUCTIONS = (
    "Run the command in your project directory. Make sure you have an Astro project with "
    "Tailwind CSS v4 configured."
)
CLI_FLAGS = {
    "note": "Commands include --yes to skip confirmation prompts (required for AI execution).",
    "availableFlags": {
        "add": ["--yes (skip prompts)", "--all (install all components)"],
        "init": ["--defaults (accept all defaults)"],
    },
}


def _parse_components(content: str) -> list[str]:
    slugs = parse_component_slugs(content)
    if not slugs:
        raise ValueError("llms.txt contained no component links")
    return slugs


async def resolve_available_components(state: AppState) -> Resolution[list[str]]:
    """Known component names from llms.txt, cached; bundled list if unavailable."""
    settings = state.settings.components
    return await state.components.resolve(
        "components_list",
        settings.llms_txt_url,
        ttl_seconds=settings.ttl_seconds,
        parse=_parse_components,
        fallback=list(FALLBACK_COMPONENTS),
    )


async def handle(args: StarwindAddInput, state: AppState) -> Ok | Recoverable:
    """Handle a starwind_add tool call."""
    log = structlog.get_logger().bind(tool=TOOL_NAME, components=args.components)
    log.info("handler_called")

    if not args.components:
        raise StarwindError(
            code=ErrorCode.INVALID_INPUT,
            message="At least one component must be specified",
            suggestion="Pass component names such as ['button', 'card'], or ['--all'].",
            recoverable=False,
        )

    available = await resolve_available_components(state)
    known = available.data

    pm = (
        package_manager_info(args.package_manager)
        if args.package_manager is not None
        else detect_package_manager(args.cwd)
    )

    warnings: AddWarnings | None = None
    if is_install_all(args.components):
        add_command = build_add_command(pm, None)
        to_install = ["all"]
    else:
        settings = state.settings.components
        validation = validate_components(
            args.components,
            known,
            fuzzy_score_cutoff=settings.fuzzy_score_cutoff,
            fuzzy_max_results=settings.fuzzy_max_results,
        )
        if not validation.valid:
            log.info("no_valid_components", invalid=validation.invalid)
            failure = StarwindAddFailure(
                error="No valid components specified",
                invalid_components=validation.invalid,
                suggestions=validation.suggestions,
                available_components=known,
                component_source=available.source,
                hint=(
                    "Use starwind_docs tool to see available components and their "
                    "documentation."
                ),
            )
            return Recoverable(failure.model_dump(mode="json", by_alias=True))

        add_command = build_add_command(pm, validation.valid)
        to_install = validation.valid
        if validation.invalid:
            warnings = AddWarnings(
                invalid_components=validation.invalid,
                suggestions=validation.suggestions,
                message=(
                    "Some components were not recognized and will be skipped: "
                    + ", ".join(validation.invalid)
                ),
            )

    commands: list[str] = []
    init_note: str | None = None
    if args.init:
        commands.append(build_init_command(pm))
        init_note = INIT_NOTE
    commands.append(add_command)

    output = StarwindAddOutput(
        package_manager=pm.name,
        commands=commands,
        command=" && ".join(commands),
        component_source=available.source,
        init_note=init_note,
        components_to_install=to_install,
        warnings=warnings,
        available_components=known,
        instructions=INSTRUCTIONS,
        cli_flags=CLI_FLAGS,
    )
    return Ok(output.model_dump(mode="json", by_alias=True))


TOOL = Tool(
    name=TOOL_NAME,
    description=(
        "Generates the command to add Starwind UI components to an Astro project. "
        "Validates component names against the live component list from starwind.dev and "
        "detects the package manager from lock files. Returns a command to run; it does "
        "not install anything itself. Use '--all' to install every component."
    ),
    input_model=StarwindAddInput,
    handler=handle,
)
