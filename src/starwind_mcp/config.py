"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (STARWIND_MCP__SERVER__TRANSPORT=http)
  2. starwind-mcp.yaml      (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional; all fields have sensible defaults. Every remote
resource carries its own TTL and request budget because each endpoint has a
different volatility.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, PositiveInt
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_APP_NAME = "starwind-mcp"


def _find_config_file() -> str | None:
    """Return the path of the first starwind-mcp.yaml found, or None."""
    candidates = [
        Path(f"{_APP_NAME}.yaml"),
        Path(platformdirs.user_config_dir(_APP_NAME)) / f"{_APP_NAME}.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ServerSettings(BaseModel):
    transport: Literal["stdio", "http"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8080
    auth_enabled: bool = False
    auth_key: str = ""


class FetcherSettings(BaseModel):
    timeout_seconds: float = 30.0
    max_redirects: int = 3
    user_agent: str = f"{_APP_NAME}/1.0"


class DocsSettings(BaseModel):
    base_url: str = "https://starwind.dev"
    llms_txt_url: str = "https://starwind.dev/llms.txt"
    llms_full_txt_url: str = "https://starwind.dev/llms-full.txt"
    standard_ttl_seconds: PositiveInt = 60 * 60
    full_ttl_seconds: PositiveInt = 60 * 60 * 3
    page_ttl_seconds: PositiveInt = 60 * 60 * 2
    # Page-level fetches share this budget with the llms.txt fallback
    max_calls_per_minute: PositiveInt = 10


class LlmDataSettings(BaseModel):
    standard_ttl_seconds: PositiveInt = 60 * 60
    full_ttl_seconds: PositiveInt = 60 * 60 * 3
    max_calls_per_minute: PositiveInt = 3


class ProBlocksSettings(BaseModel):
    manifest_url: str = "https://pro.starwind.dev/r/manifest.json"
    ttl_seconds: PositiveInt = 60 * 60
    max_calls_per_minute: PositiveInt = 3


class ComponentsSettings(BaseModel):
    llms_txt_url: str = "https://starwind.dev/llms.txt"
    ttl_seconds: PositiveInt = 60 * 60
    max_calls_per_minute: PositiveInt = 3
    fuzzy_score_cutoff: int = 80
    fuzzy_max_results: int = 3


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: STARWIND_MCP__SERVER__PORT=9090
        env_prefix="STARWIND_MCP__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    server: ServerSettings = ServerSettings()
    fetcher: FetcherSettings = FetcherSettings()
    docs: DocsSettings = DocsSettings()
    llm_data: LlmDataSettings = LlmDataSettings()
    pro_blocks: ProBlocksSettings = ProBlocksSettings()
    components: ComponentsSettings = ComponentsSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
