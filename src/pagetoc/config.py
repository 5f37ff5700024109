"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Constructor arguments
  2. Environment variables  (PAGETOC__TOC__MIN_HEADINGS=3)
  3. pagetoc.yaml           (searched in cwd, then platform config dir)
  4. Hardcoded defaults

The config file is optional. All fields have defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from pagetoc.models.headings import (
    DEFAULT_LEVELS,
    ExtractionOptions,
    RenderOptions,
    normalize_levels,
)

_CONFIG_FILE_NAME = "pagetoc.yaml"
_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir("pagetoc")


def _find_config_file() -> str | None:
    """Return the path of the first pagetoc.yaml found, or None."""
    candidates = [
        Path(_CONFIG_FILE_NAME),
        Path(_DEFAULT_CONFIG_DIR) / _CONFIG_FILE_NAME,
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class TocSettings(BaseModel):
    levels: tuple[int, ...] = DEFAULT_LEVELS
    title: str = "On this page"
    list_id: str = "toc-list"
    min_headings: int = 2  # Pages with fewer headings get no TOC
    placeholder: str = "<!-- TOC_PLACEHOLDER -->"
    container_tag: str = "article"
    container_class: str = "post-content"

    @field_validator("levels")
    @classmethod
    def validate_levels(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        return normalize_levels(v)

    @field_validator("min_headings")
    @classmethod
    def validate_min_headings(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"min_headings must be >= 0, got {v}")
        return v

    @field_validator("placeholder", "list_id", "container_tag", "container_class")
    @classmethod
    def validate_non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must be a non-empty string")
        return v

    def extraction_options(self) -> ExtractionOptions:
        return ExtractionOptions(levels=self.levels)

    def render_options(self) -> RenderOptions:
        return RenderOptions(title=self.title, list_id=self.list_id)


class BuildSettings(BaseModel):
    output_extension: str = ".html"


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "text"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: PAGETOC__TOC__TITLE=Contents
        env_prefix="PAGETOC__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    toc: TocSettings = TocSettings()
    build: BuildSettings = BuildSettings()
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
