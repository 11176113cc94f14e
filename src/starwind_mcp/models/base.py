from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for models exchanged with MCP clients and remote documents.

    Python attributes are snake_case; the wire format is camelCase.
    Dump with ``model_dump(mode="json", by_alias=True)``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
