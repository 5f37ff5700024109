from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_LEVELS: tuple[int, ...] = (2, 3, 4)


def normalize_levels(levels: Iterable[int]) -> tuple[int, ...]:
    """Collapse duplicates (keeping first-seen order) and check the 1-6 range."""
    result: list[int] = []
    for level in levels:
        if not 1 <= level <= 6:
            raise ValueError(f"Heading level out of range 1-6: {level!r}")
        if level not in result:
            result.append(level)
    if not result:
        raise ValueError("At least one heading level is required")
    return tuple(result)


class HeadingRecord(BaseModel):
    """Single heading found in a page's content region."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str  # Tag-stripped, trimmed, leading "#" removed
    level: int

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not v:
            raise ValueError("Heading id must be non-empty")
        return v

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: int) -> int:
        if not 1 <= v <= 6:
            raise ValueError(f"Heading level out of range 1-6: {v!r}")
        return v


class ExtractionOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    levels: tuple[int, ...] = DEFAULT_LEVELS

    @field_validator("levels")
    @classmethod
    def validate_levels(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        return normalize_levels(v)


class RenderOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = "On this page"
    list_id: str = "toc-list"  # DOM id of the generated <ul>, targeted by the scroll-spy script
