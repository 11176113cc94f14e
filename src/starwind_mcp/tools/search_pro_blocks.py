"""Tool handler for search_starwind_pro_blocks.

Fetches the Pro manifest through its resolver, runs the catalog search, and
shapes the response. With no query, category or plan it returns an overview
of the available categories instead of a result list.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from starwind_mcp.catalog import format_duration, search_blocks
from starwind_mcp.errors import ErrorCode, RateLimitedError, StarwindError
from starwind_mcp.models.catalog import CatalogManifest
from starwind_mcp.models.tools import (
    BlockSummary,
    FormattedCacheInfo,
    ProRequirements,
    SearchFilters,
    SearchProBlocksInput,
    SearchProBlocksOutput,
    SearchProBlocksOverview,
)
from starwind_mcp.results import Ok
from starwind_mcp.tools.registry import Tool

if TYPE_CHECKING:
    from starwind_mcp.resolver import Resolution
    from starwind_mcp.state import AppState

TOOL_NAME = "search_starwind_pro_blocks"

PRO_INIT_COMMAND = "pnpm dlx starwind@latest init --defaults --pro"
_PRO_IMPORTANT = (
    "Starwind Pro blocks REQUIRE the project to be initialized with --pro flag before "
    "blocks can be added."
)
_HINT_CATEGORY_COUNT = 10


async def _resolve_manifest(state: AppState) -> Resolution[CatalogManifest]:
    settings = state.settings.pro_blocks
    try:
        return await state.pro_blocks.resolve(
            "pro_manifest",
            settings.manifest_url,
            ttl_seconds=settings.ttl_seconds,
            as_json=True,
            parse=CatalogManifest.model_validate,
        )
    except RateLimitedError:
        raise
    except StarwindError as exc:
        raise StarwindError(
            code=ErrorCode.MANIFEST_FETCH_FAILED,
            message=f"Error fetching Starwind Pro manifest: {exc.message}",
            suggestion="pro.starwind.dev may be temporarily unavailable. Try again later.",
            recoverable=True,
        ) from exc


async def handle(args: SearchProBlocksInput, state: AppState) -> Ok:
    """Handle a search_starwind_pro_blocks tool call."""
    log = structlog.get_logger().bind(
        tool=TOOL_NAME,
        query=args.query,
        category=args.category,
        plan=args.plan,
    )
    log.info("handler_called")

    resolved = await _resolve_manifest(state)
    manifest = resolved.data

    if args.query is None and args.category is None and args.plan is None:
        overview = SearchProBlocksOverview(
            message=(
                "No search criteria provided. Here are the available categories. "
                "Use query, category, or plan to search."
            ),
            available_categories=manifest.categories,
            total_blocks=manifest.total_blocks,
            source=resolved.source,
            hint="Try searching with a query like 'hero dark' or filter by category like 'pricing'.",
            pro_requirements=ProRequirements(
                important=_PRO_IMPORTANT,
                init_command=PRO_INIT_COMMAND,
                note="If the project was initialized without --pro, Pro blocks will fail to install.",
            ),
        )
        return Ok(overview.model_dump(mode="json", by_alias=True, exclude_none=True))

    result = search_blocks(
        manifest,
        query=args.query,
        category=args.category,
        plan=args.plan,
        limit=args.limit,
    )
    log.info("search_complete", total_matches=result.total_matches)

    blocks = [
        BlockSummary(
            id=block.id,
            name=block.name,
            description=block.description,
            categories=block.categories,
            plan=block.plan,
            install_command=f"{block.install_command} --yes",
            preview_url=f"{manifest.base_url}{block.preview_url}",
        )
        for block in result.blocks
    ]

    cache_info: FormattedCacheInfo | None = None
    if resolved.source == "cache" and resolved.cache_info is not None:
        cache_info = FormattedCacheInfo(
            age=format_duration(resolved.cache_info.age),
            remaining_ttl=format_duration(resolved.cache_info.remaining_ttl),
        )

    message: str | None = None
    hint: str | None = None
    if not blocks:
        message = (
            "No blocks found matching your criteria. Try a different query or browse "
            "available categories."
        )
        sample = manifest.categories[:_HINT_CATEGORY_COUNT]
        more = "..." if len(manifest.categories) > _HINT_CATEGORY_COUNT else ""
        hint = f"Available categories: {', '.join(sample)}{more}"

    output = SearchProBlocksOutput(
        query=args.query,
        filters=SearchFilters(category=args.category, plan=args.plan),
        total_matches=result.total_matches,
        results_returned=len(blocks),
        blocks=blocks,
        available_categories=manifest.categories,
        source=resolved.source,
        cache_info=cache_info,
        message=message,
        hint=hint,
        pro_requirements=ProRequirements(
            important=_PRO_IMPORTANT,
            init_command=PRO_INIT_COMMAND,
            note=(
                "If the project was initialized without --pro, Pro blocks will fail to "
                "install. Re-run init with --pro to fix."
            ),
            starwind_add_tip=(
                "When using starwind_add tool with Pro blocks, set init=true and pro=true "
                "to generate the correct init command."
            ),
        ),
    )
    return Ok(output.model_dump(mode="json", by_alias=True))


TOOL = Tool(
    name=TOOL_NAME,
    description=(
        "Searches Starwind Pro blocks by query, category, or plan type. Returns matching "
        "blocks with install commands. Use this to find pre-built UI blocks like heroes, "
        "footers, pricing tables, etc. IMPORTANT: Pro blocks require the project to be "
        "initialized with 'starwind@latest init --defaults --pro' before they can be added."
    ),
    input_model=SearchProBlocksInput,
    handler=handle,
)
