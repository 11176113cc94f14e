from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from starwind_mcp.models.base import WireModel


class CacheEntry(BaseModel):
    """A single cached payload. Replaced wholesale on every ``set``."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    data: Any  # Opaque payload: raw text, parsed manifest, component list
    created_at: float  # Clock seconds at insertion
    expires_at: float

    @model_validator(mode="after")
    def _expires_after_creation(self) -> CacheEntry:
        if self.expires_at <= self.created_at:
            raise ValueError("expires_at must be later than created_at")
        return self


class CacheInfo(WireModel):
    """Age and remaining lifetime of a cache entry, in whole seconds."""

    age: int
    remaining_ttl: int
