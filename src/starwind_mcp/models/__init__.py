from __future__ import annotations

from starwind_mcp.models.cache import CacheEntry, CacheInfo
from starwind_mcp.models.catalog import Block, CatalogManifest
from starwind_mcp.models.tools import (
    FetchLlmDataInput,
    FetchLlmDataOutput,
    GetPackageManagerInput,
    GetPackageManagerOutput,
    RateLimitInfo,
    SearchProBlocksInput,
    SearchProBlocksOutput,
    SearchProBlocksOverview,
    StarwindAddFailure,
    StarwindAddInput,
    StarwindAddOutput,
    StarwindDocsInput,
    StarwindDocsOutput,
    StarwindInitInput,
    StarwindInitOutput,
)

__all__ = [
    # cache
    "CacheEntry",
    "CacheInfo",
    # catalog
    "Block",
    "CatalogManifest",
    # tools
    "RateLimitInfo",
    "StarwindDocsInput",
    "StarwindDocsOutput",
    "FetchLlmDataInput",
    "FetchLlmDataOutput",
    "StarwindAddInput",
    "StarwindAddOutput",
    "StarwindAddFailure",
    "SearchProBlocksInput",
    "SearchProBlocksOutput",
    "SearchProBlocksOverview",
    "StarwindInitInput",
    "StarwindInitOutput",
    "GetPackageManagerInput",
    "GetPackageManagerOutput",
]
