"""Tool handler for fetch_llm_data.

Returns the raw llms.txt (or llms-full.txt) document without topic filtering,
under its own cache and a tighter request budget than starwind_docs.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import structlog

from starwind_mcp.errors import ErrorCode, RateLimitedError, StarwindError
from starwind_mcp.models.tools import FetchLlmDataInput, FetchLlmDataOutput
from starwind_mcp.results import Ok
from starwind_mcp.tools.registry import Tool

if TYPE_CHECKING:
    from starwind_mcp.state import AppState

TOOL_NAME = "fetch_llm_data"


async def handle(args: FetchLlmDataInput, state: AppState) -> Ok:
    """Handle a fetch_llm_data tool call."""
    log = structlog.get_logger().bind(tool=TOOL_NAME, full=args.full)
    log.info("handler_called")

    docs = state.settings.docs
    ttls = state.settings.llm_data
    if args.full:
        url, key, ttl = docs.llms_full_txt_url, "llm_data_full", ttls.full_ttl_seconds
    else:
        url, key, ttl = docs.llms_txt_url, "llm_data_standard", ttls.standard_ttl_seconds

    try:
        resolved = await state.llm_data.resolve(key, url, ttl_seconds=ttl)
    except RateLimitedError:
        raise
    except StarwindError as exc:
        raise StarwindError(
            code=ErrorCode.DOCS_FETCH_FAILED,
            message=f"Error fetching LLM data: {exc.message}",
            suggestion="starwind.dev may be temporarily unavailable. Try again later.",
            recoverable=True,
        ) from exc

    output = FetchLlmDataOutput(
        url=url,
        data=resolved.data,
        timestamp=datetime.now(UTC),
        source=resolved.source,
        cache_info=resolved.cache_info,
        rate_limit_info=state.llm_data.rate_limit_info(),
    )
    return Ok(output.model_dump(mode="json", by_alias=True))


TOOL = Tool(
    name=TOOL_NAME,
    description=(
        "Fetches LLM data (llms.txt) from starwind.dev, rate limited to 3 requests per "
        "minute, with caching."
    ),
    input_model=FetchLlmDataInput,
    handler=handle,
)
