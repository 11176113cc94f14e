"""Tool handler for starwind_docs.

Receives AppState, orchestrates the specific-page lookup and the llms.txt
fallback with topic filtering, and returns a structured dict. The Tool record
at the bottom is what server.py registers with FastMCP.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Literal

import structlog

from starwind_mcp.errors import ErrorCode, RateLimitedError, StarwindError
from starwind_mcp.models.tools import StarwindDocsInput, StarwindDocsOutput
from starwind_mcp.parser import filter_by_topic
from starwind_mcp.results import Ok
from starwind_mcp.tools.registry import Tool

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from starwind_mcp.resolver import Resolution
    from starwind_mcp.state import AppState

TOOL_NAME = "starwind_docs"

# Guide topics that are not components, relative to the docs base URL
DOC_PAGE_PATHS: dict[str, str] = {
    "installation": "/docs/getting-started/installation/",
    "getting-started": "/docs/getting-started/installation/",
    "theming": "/docs/getting-started/theming/",
    "themes": "/docs/getting-started/themes/",
    "dark-mode": "/docs/getting-started/dark-mode/",
    "darkmode": "/docs/getting-started/dark-mode/",
    "typography": "/docs/getting-started/typography/",
    "cli": "/docs/getting-started/cli/",
    "about": "/docs/getting-started/",
    "introduction": "/docs/getting-started/",
    "ai": "/docs/getting-started/ai/",
    "ai-integration": "/docs/getting-started/ai/",
}

_SLUG_RE = re.compile(r"^[a-z0-9][a-z0-9-]*$")


def page_url_for_topic(topic: str, base_url: str) -> str | None:
    """Return the markdown page URL for a topic, or None if it is not a page slug.

    Unknown slugs are tried as component pages so newly released components
    resolve without a code change.
    """
    normalised = topic.lower().strip()
    base = base_url.rstrip("/")
    if normalised in DOC_PAGE_PATHS:
        return f"{base}{DOC_PAGE_PATHS[normalised]}markdown.md"
    if _SLUG_RE.match(normalised):
        return f"{base}/docs/components/{normalised}/markdown.md"
    return None


def page_type_for_topic(topic: str) -> Literal["component", "guide"]:
    return "guide" if topic.lower().strip() in DOC_PAGE_PATHS else "component"


async def handle(args: StarwindDocsInput, state: AppState) -> Ok:
    """Handle a starwind_docs tool call."""
    log = structlog.get_logger().bind(tool=TOOL_NAME, topic=args.topic, full=args.full)
    log.info("handler_called")

    if args.topic is not None:
        page = await _resolve_page(args.topic, state, log)
        if page is not None:
            output = StarwindDocsOutput(
                documentation=page.data,
                source=page.source,
                url=page.url,
                topic=args.topic,
                full=True,  # Specific pages are always complete
                page_type=page_type_for_topic(args.topic),
                cache_info=page.cache_info,
                rate_limit_info=state.docs.rate_limit_info(),
            )
            return Ok(output.model_dump(mode="json", by_alias=True))

    settings = state.settings.docs
    if args.full:
        url, key, ttl = settings.llms_full_txt_url, "docs_full", settings.full_ttl_seconds
    else:
        url, key, ttl = settings.llms_txt_url, "docs_standard", settings.standard_ttl_seconds

    try:
        docs = await state.docs.resolve(key, url, ttl_seconds=ttl)
    except RateLimitedError:
        raise
    except StarwindError as exc:
        raise StarwindError(
            code=ErrorCode.DOCS_FETCH_FAILED,
            message=f"Error fetching Starwind documentation: {exc.message}",
            suggestion="starwind.dev may be temporarily unavailable. Try again later.",
            recoverable=True,
        ) from exc

    documentation = docs.data
    source = docs.source
    if args.topic is not None:
        documentation = filter_by_topic(docs.data, args.topic)
        # The page lookup did not answer; this is the broad document, narrowed
        source = "fallback"

    output = StarwindDocsOutput(
        documentation=documentation,
        source=source,
        url=docs.url,
        topic=args.topic,
        full=args.full,
        cache_info=docs.cache_info,
        rate_limit_info=state.docs.rate_limit_info(),
    )
    return Ok(output.model_dump(mode="json", by_alias=True))


def _parse_page(text: str) -> str:
    if not text.strip():
        raise ValueError("empty page body")
    return text


async def _resolve_page(
    topic: str,
    state: AppState,
    log: FilteringBoundLogger,
) -> Resolution[str] | None:
    """Fetch the dedicated markdown page for a topic.

    Returns None on any fetch failure, or an empty page, so the caller falls
    through to llms.txt.
    Rate limiting is not a fetch failure and propagates.
    """
    url = page_url_for_topic(topic, state.settings.docs.base_url)
    if url is None:
        log.info("page_lookup_skipped", reason="topic_not_a_slug")
        return None

    normalised = topic.lower().strip()
    try:
        return await state.docs.resolve(
            f"page_{normalised}",
            url,
            ttl_seconds=state.settings.docs.page_ttl_seconds,
            parse=_parse_page,
        )
    except RateLimitedError:
        raise
    except StarwindError as exc:
        log.info("page_fetch_failed_falling_back", url=url, code=exc.code)
        return None


TOOL = Tool(
    name=TOOL_NAME,
    description=(
        "Fetches live Starwind UI documentation from starwind.dev. Use this to get up-to-date "
        "component docs, installation guides, theming info, and usage examples. The "
        "documentation is optimized for AI consumption."
    ),
    input_model=StarwindDocsInput,
    handler=handle,
)
