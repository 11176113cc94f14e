"""Tagged tool results.

Handlers return ``Ok`` for a normal result and ``Recoverable`` for an expected
failure the assistant must show to the user (e.g. "no valid components, here
are suggestions"). Conditions the caller cannot route around are raised as
StarwindError and wrapped into ``Fatal`` by the tool registry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from starwind_mcp.errors import StarwindError


@dataclass(frozen=True)
class Ok:
    payload: dict[str, Any]


@dataclass(frozen=True)
class Recoverable:
    payload: dict[str, Any]


@dataclass(frozen=True)
class Fatal:
    error: StarwindError


ToolResult = Ok | Recoverable | Fatal
