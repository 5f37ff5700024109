"""TOC sidebar markup."""

from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING

from pagetoc.models.headings import RenderOptions

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pagetoc.models.headings import HeadingRecord


def _render_item(heading: HeadingRecord) -> str:
    return (
        "\n            <li>"
        f'\n                <a href="#{escape(heading.id)}" class="toc-link"'
        f' data-level="{heading.level}">{escape(heading.text, quote=False)}</a>'
        "\n            </li>"
    )


def render_toc(
    headings: Iterable[HeadingRecord],
    options: RenderOptions | None = None,
) -> str:
    """Render the sidebar for *headings*, or ``""`` when there are none.

    Each link carries ``data-level`` so the stylesheet can indent by level.
    """
    options = options or RenderOptions()
    items = [_render_item(heading) for heading in headings]
    if not items:
        return ""

    parts = [
        '<aside class="toc-sidebar">',
        '\n    <nav class="toc-nav" aria-label="Table of Contents">',
        f'\n        <h2 class="toc-title">{escape(options.title, quote=False)}</h2>',
        f'\n        <ul class="toc-list" id="{escape(options.list_id)}">',
        *items,
        "\n        </ul>",
        "\n    </nav>",
        "\n</aside>",
    ]
    return "".join(parts)
