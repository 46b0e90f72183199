"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (CSPQUERY__CACHE__PATH=/tmp/csp.json)
  2. cspquery.yaml          (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional; every field has a default.
"""

from __future__ import annotations

import tempfile
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

_DEFAULT_CACHE_PATH = str(Path(tempfile.gettempdir()) / "policiesFound.json")


def _find_config_file() -> str | None:
    """Return the path of the first cspquery.yaml found, or None."""
    candidates = [
        Path("cspquery.yaml"),
        Path(platformdirs.user_config_dir("cspquery")) / "cspquery.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class DocsSettings(BaseModel):
    base_url: str = "https://learn.microsoft.com/en-us/windows/client-management/mdm/"
    index_slug: str = "policy-configuration-service-provider"

    @property
    def index_url(self) -> str:
        return self.page_url(self.index_slug)

    def page_url(self, slug: str) -> str:
        return f"{self.base_url}{slug}"


class CacheSettings(BaseModel):
    path: str = _DEFAULT_CACHE_PATH


class FetcherSettings(BaseModel):
    timeout_seconds: float = 30.0


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    format: Literal["json", "text"] = "text"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: CSPQUERY__LOGGING__LEVEL=DEBUG
        env_prefix="CSPQUERY__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    docs: DocsSettings = DocsSettings()
    cache: CacheSettings = CacheSettings()
    fetcher: FetcherSettings = FetcherSettings()
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
