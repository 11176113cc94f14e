"""Input and output models for the MCP tools.

Inputs are validated by the tool registry before a handler runs; their JSON
schemas (camelCase) are what ``tools/list`` advertises. Outputs are dumped
with ``by_alias=True`` so clients see camelCase field names.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import Field, field_validator

from starwind_mcp.models.base import WireModel
from starwind_mcp.models.cache import CacheInfo
from starwind_mcp.package_manager import PackageManagerName

Source = Literal["cache", "network", "fallback"]


def _blank_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------


class RateLimitInfo(WireModel):
    requests_remaining: int
    reset_after_seconds: int


class ProRequirements(WireModel):
    important: str
    init_command: str
    note: str
    starwind_add_tip: str | None = None


# ---------------------------------------------------------------------------
# starwind_docs
# ---------------------------------------------------------------------------


class StarwindDocsInput(WireModel):
    topic: str | None = Field(
        default=None,
        max_length=200,
        description=(
            "Optional topic to filter documentation (e.g., 'button', 'accordion', "
            "'theming', 'installation'). Leave empty to get all documentation."
        ),
    )
    full: bool = Field(
        default=False,
        description=(
            "Whether to fetch the full documentation with complete code examples. "
            "Defaults to false for a more concise version."
        ),
    )

    @field_validator("topic", mode="before")
    @classmethod
    def _blank_topic(cls, value: object) -> object:
        return _blank_to_none(value)


class StarwindDocsOutput(WireModel):
    documentation: str
    source: Source
    url: str
    topic: str | None
    full: bool
    page_type: Literal["component", "guide"] | None = None
    cache_info: CacheInfo | None
    rate_limit_info: RateLimitInfo


# ---------------------------------------------------------------------------
# fetch_llm_data
# ---------------------------------------------------------------------------


class FetchLlmDataInput(WireModel):
    full: bool = Field(
        default=False,
        description="Whether to fetch the full LLM data (defaults to false).",
    )


class FetchLlmDataOutput(WireModel):
    url: str
    data: str
    timestamp: datetime
    source: Source
    cache_info: CacheInfo | None
    rate_limit_info: RateLimitInfo


# ---------------------------------------------------------------------------
# starwind_add
# ---------------------------------------------------------------------------


class StarwindAddInput(WireModel):
    components: list[str] = Field(
        description=(
            "Array of component names to install (e.g., ['button', 'card', 'dialog']). "
            "Use '--all' as a single item to install all components."
        ),
    )
    init: bool = Field(
        default=False,
        description=(
            "Whether to include the init command for new projects. Set to true if "
            "Starwind UI has not been initialized in the project yet."
        ),
    )
    cwd: str | None = Field(
        default=None,
        description="Working directory for package manager detection. Defaults to current directory.",
    )
    package_manager: PackageManagerName | None = Field(
        default=None,
        description="Override the auto-detected package manager.",
    )


class AddWarnings(WireModel):
    invalid_components: list[str]
    suggestions: dict[str, list[str]]
    message: str


class StarwindAddOutput(WireModel):
    success: Literal[True] = True
    package_manager: PackageManagerName
    commands: list[str]
    command: str
    component_source: Source
    init_note: str | None = None
    components_to_install: list[str]
    warnings: AddWarnings | None = None
    available_components: list[str]
    instructions: str
    cli_flags: dict[str, Any]


class StarwindAddFailure(WireModel):
    success: Literal[False] = False
    error: str
    invalid_components: list[str]
    suggestions: dict[str, list[str]]
    available_components: list[str]
    component_source: Source
    hint: str


# ---------------------------------------------------------------------------
# search_starwind_pro_blocks
# ---------------------------------------------------------------------------


class SearchProBlocksInput(WireModel):
    query: str | None = Field(
        default=None,
        max_length=200,
        description=(
            "Search query to match against block name, description, and keywords "
            "(e.g., 'pricing', 'hero dark', 'footer minimal')."
        ),
    )
    category: str | None = Field(
        default=None,
        max_length=100,
        description="Filter by category (e.g., hero, footer, pricing, navigation, faq, cta).",
    )
    plan: Literal["free", "pro"] | None = Field(
        default=None,
        description="Filter by plan type. 'pro' requires a subscription.",
    )
    limit: int = Field(
        default=10,
        description="Maximum number of results to return. Default: 10, Max: 50.",
    )

    @field_validator("query", "category", "plan", mode="before")
    @classmethod
    def _blank_filters(cls, value: object) -> object:
        return _blank_to_none(value)


class SearchFilters(WireModel):
    category: str | None
    plan: Literal["free", "pro"] | None


class BlockSummary(WireModel):
    id: str
    name: str
    description: str
    categories: list[str]
    plan: Literal["free", "pro"]
    install_command: str
    preview_url: str


class FormattedCacheInfo(WireModel):
    age: str
    remaining_ttl: str


class SearchProBlocksOutput(WireModel):
    query: str | None
    filters: SearchFilters
    total_matches: int
    results_returned: int
    blocks: list[BlockSummary]
    available_categories: list[str]
    source: Source
    cache_info: FormattedCacheInfo | None = None
    message: str | None = None
    hint: str | None = None
    pro_requirements: ProRequirements


class SearchProBlocksOverview(WireModel):
    message: str
    available_categories: list[str]
    total_blocks: int
    source: Source
    hint: str
    pro_requirements: ProRequirements


# ---------------------------------------------------------------------------
# starwind_init
# ---------------------------------------------------------------------------


class StarwindInitInput(WireModel):
    cwd: str | None = Field(
        default=None,
        description="Working directory for package manager detection. Defaults to current directory.",
    )
    package_manager: PackageManagerName | None = Field(
        default=None,
        description="Override the auto-detected package manager.",
    )
    pro: bool = Field(
        default=True,
        description=(
            "Whether to initialize with Starwind Pro support. Defaults to true; Pro setup "
            "enables both standard components and Pro blocks."
        ),
    )


class StarwindInitOutput(WireModel):
    success: Literal[True] = True
    command: str
    package_manager: PackageManagerName
    package_manager_source: Literal["user-specified", "detected"]
    pro_enabled: bool
    setup_type: str
    description: str
    next_steps: list[str]
    requirements: dict[str, str]
    cli_flags: dict[str, str]


# ---------------------------------------------------------------------------
# get_package_manager
# ---------------------------------------------------------------------------


class GetPackageManagerInput(WireModel):
    cwd: str = Field(description="Root directory to check for lock files.")
    default_manager: PackageManagerName | None = Field(
        default=None,
        description="Package manager to use if no lock file is found (defaults to npm).",
    )


class PackageManagerCommands(WireModel):
    install: str
    add: str
    remove: str
    run: str


class GetPackageManagerOutput(WireModel):
    name: PackageManagerName
    commands: PackageManagerCommands
