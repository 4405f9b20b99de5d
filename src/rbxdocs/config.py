"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (RBXDOCS__LOGGING__LEVEL=DEBUG)
  2. rbxdocs.yaml           (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional; all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_DEFAULT_DATA_DIR = platformdirs.user_data_dir("rbxdocs")
_DEFAULT_DB_PATH = str(Path(_DEFAULT_DATA_DIR) / "cache.db")

STALENESS_WINDOW_MS = 60 * 60 * 1000


def _find_config_file() -> str | None:
    """Return the path of the first rbxdocs.yaml found, or None."""
    candidates = [
        Path("rbxdocs.yaml"),
        Path(platformdirs.user_config_dir("rbxdocs")) / "rbxdocs.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ReleaseSettings(BaseModel):
    latest_release_url: str = (
        "https://api.github.com/repos/Sleitnick/rbx-doc-search/releases/latest"
    )
    asset_name: str = "files_metadata.json"
    staleness_window_ms: int = STALENESS_WINDOW_MS


class DocsSettings(BaseModel):
    source_root: str = "content/en-us/"
    base_url: str = "https://create.roblox.com/docs/"


class CacheSettings(BaseModel):
    db_path: str = _DEFAULT_DB_PATH


class HttpSettings(BaseModel):
    timeout_seconds: float = 30.0
    connect_timeout_seconds: float = 5.0


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: RBXDOCS__CACHE__DB_PATH=/tmp/cache.db
        env_prefix="RBXDOCS__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    release: ReleaseSettings = ReleaseSettings()
    docs: DocsSettings = DocsSettings()
    cache: CacheSettings = CacheSettings()
    http: HttpSettings = HttpSettings()
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
