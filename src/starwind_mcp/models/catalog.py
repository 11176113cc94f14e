from __future__ import annotations

from typing import Literal

from starwind_mcp.models.base import WireModel


class Block(WireModel):
    """Single Starwind Pro block from the manifest."""

    id: str
    name: str
    description: str = ""
    categories: list[str] = []
    keywords: list[str] = []
    plan: Literal["free", "pro"]
    install_command: str
    preview_url: str = ""


class CatalogManifest(WireModel):
    """The Pro-block manifest. Superseded entirely by the next successful fetch."""

    categories: list[str] = []
    total_blocks: int = 0
    base_url: str = ""
    blocks: list[Block] = []
