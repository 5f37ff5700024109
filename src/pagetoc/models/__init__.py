from __future__ import annotations

from pagetoc.models.headings import (
    DEFAULT_LEVELS,
    ExtractionOptions,
    HeadingRecord,
    RenderOptions,
)

__all__ = [
    "DEFAULT_LEVELS",
    "HeadingRecord",
    "ExtractionOptions",
    "RenderOptions",
]
