"""Pro-block catalog search.

Pure business logic. Receives a CatalogManifest, returns ranked blocks.
No knowledge of AppState, MCP, or I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from starwind_mcp.models.catalog import Block, CatalogManifest

DEFAULT_LIMIT = 10
MAX_LIMIT = 50

# Additive: a block collects every rule it satisfies
SCORE_EXACT_NAME = 100
SCORE_PARTIAL_NAME = 50
SCORE_ID = 40
SCORE_EXACT_KEYWORD = 30
SCORE_PARTIAL_KEYWORD = 20
SCORE_CATEGORY = 15
SCORE_DESCRIPTION = 10


@dataclass(frozen=True)
class SearchResult:
    blocks: list[Block]
    total_matches: int  # Before truncation to the limit


def clamp_limit(limit: int | None) -> int:
    """Clamp a requested result limit to ``[1, MAX_LIMIT]``."""
    if limit is None:
        return DEFAULT_LIMIT
    return min(max(1, limit), MAX_LIMIT)


def score_block(block: Block, query: str) -> int:
    """Score how well ``block`` matches ``query``. Zero means no match."""
    q = query.lower().strip()
    if not q:
        return 0

    score = 0
    name = block.name.lower()
    keywords = [k.lower() for k in block.keywords]

    if name == q:
        score += SCORE_EXACT_NAME
    elif q in name:
        score += SCORE_PARTIAL_NAME

    if q in block.id.lower():
        score += SCORE_ID

    if q in keywords:
        score += SCORE_EXACT_KEYWORD

    if any(q in k for k in keywords):
        score += SCORE_PARTIAL_KEYWORD

    if any(q in c.lower() for c in block.categories):
        score += SCORE_CATEGORY

    if q in block.description.lower():
        score += SCORE_DESCRIPTION

    return score


def search_blocks(
    manifest: CatalogManifest,
    *,
    query: str | None = None,
    category: str | None = None,
    plan: str | None = None,
    limit: int | None = DEFAULT_LIMIT,
) -> SearchResult:
    """Filter by category and plan, rank by query score, then truncate.

    Ties keep manifest order (the sort is stable).
    """
    results = list(manifest.blocks)

    if category:
        category_lower = category.lower()
        results = [b for b in results if any(c.lower() == category_lower for c in b.categories)]

    if plan:
        results = [b for b in results if b.plan == plan]

    if query:
        scored = [(block, score_block(block, query)) for block in results]
        scored = [(block, score) for block, score in scored if score > 0]
        scored.sort(key=lambda pair: pair[1], reverse=True)
        results = [block for block, _ in scored]

    total_matches = len(results)
    return SearchResult(blocks=results[: clamp_limit(limit)], total_matches=total_matches)


def format_duration(seconds: float) -> str:
    """Format a duration as ``45s``, ``3m 20s`` or ``1h 5m``."""
    total = max(0, int(seconds))
    if total < 60:
        return f"{total}s"
    minutes = total // 60
    if minutes < 60:
        return f"{minutes}m {total % 60}s"
    return f"{minutes // 60}h {minutes % 60}m"
